from __future__ import annotations

import logging
from typing import Any, Literal

import firebase_admin
from firebase_admin import credentials, firestore
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from json_store import parse_json_object, read_json_object
from settings import Settings

from .firestore_store import FirestoreMenuDocumentStore

logger = logging.getLogger(__name__)


class ServiceAccountInfo(BaseModel):
    """
    The fields a Google service-account key must carry before we hand it to the Admin SDK.
    Other keys (private_key_id, token_uri, ...) pass through untouched.
    """

    model_config = ConfigDict(extra="allow")

    type: Literal["service_account"]
    project_id: str = Field(min_length=1)
    private_key: str = Field(min_length=1)
    client_email: str = Field(min_length=1)


class CredentialError(Exception):
    pass


def load_service_account(settings: Settings) -> dict[str, Any]:
    """
    Resolve service-account credentials: the FIREBASE_SERVICE_ACCOUNT blob first, else the local key file.

    Raises CredentialError describing what went wrong.
    """
    try:
        if settings.service_account_json is not None:
            raw = parse_json_object(settings.service_account_json, source="FIREBASE_SERVICE_ACCOUNT")
            source = "environment variable"
        else:
            raw = read_json_object(settings.service_account_file)
            source = f"local file {settings.service_account_file.name}"
        info = ServiceAccountInfo.model_validate(raw)
    except (OSError, ValueError, ValidationError) as e:
        raise CredentialError(str(e)) from e

    logger.info("FIREBASE CREDENTIALS: loaded from %s (project=%s)", source, info.project_id)
    return info.model_dump(mode="json")


def _firebase_app(service_account: dict[str, Any]) -> firebase_admin.App:
    try:
        # Reuse the default app on re-entry (e.g. uvicorn --reload, repeated create_app()).
        return firebase_admin.get_app()
    except ValueError:
        return firebase_admin.initialize_app(credentials.Certificate(service_account))


def create_firestore_client(settings: Settings) -> Any | None:
    """
    Build a Firestore client from configured credentials.

    Returns None (after logging a diagnostic) when credentials are missing or malformed;
    the server keeps running and database routes answer 500.
    """
    try:
        service_account = load_service_account(settings)
        return firestore.client(_firebase_app(service_account))
    except Exception as e:
        logger.error("FIREBASE CREDENTIALS: could not initialize Firestore: %s", e)
        logger.error(
            "FIREBASE CREDENTIALS: make sure %s exists or FIREBASE_SERVICE_ACCOUNT is set",
            settings.service_account_file,
        )
        return None


def create_menu_store(settings: Settings) -> FirestoreMenuDocumentStore | None:
    client = create_firestore_client(settings)
    if client is None:
        return None
    return FirestoreMenuDocumentStore(client, settings.menu_doc_path)
