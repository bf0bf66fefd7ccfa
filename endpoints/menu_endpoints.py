# menu_endpoints.py
from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, StrictBool, ValidationError

from persistence.interfaces import MenuDocumentStore, StoreError
from settings import Settings, get_settings

from .results import Err, ErrorKind, Ok, Result, to_response

router = APIRouter(tags=["menu"])
logger = logging.getLogger(__name__)

STATUS_FIELD_PATH = "settings.isOpen"

MSG_NO_DATABASE = "Base de dados não conectada."
MSG_NOT_FOUND = "Configuração não encontrada."
MSG_FETCH_FAILED = "Erro interno no servidor."
MSG_INVALID_MENU = 'Dados inválidos. O objeto deve conter "categories".'
MSG_REPLACE_FAILED = "Erro ao gravar dados na base de dados."
MSG_MENU_UPDATED = "Menu atualizado com sucesso!"
MSG_INVALID_STATUS = "O campo 'isOpen' deve ser booleano (true ou false)."
MSG_STATUS_FAILED = "Erro ao atualizar estado."


class StoreStatusUpdate(BaseModel):
    # StrictBool: "true", 1 and friends are rejected rather than coerced.
    isOpen: StrictBool


def get_menu_store(request: Request) -> MenuDocumentStore | None:
    """The store is built once at startup; None means credentials failed to load."""
    return getattr(request.app.state, "menu_store", None)


def get_app_settings(request: Request) -> Settings:
    """Settings injected through create_app(); falls back to the environment for a bare router."""
    settings = getattr(request.app.state, "settings", None)
    return settings if settings is not None else get_settings()


async def _read_json_body(request: Request) -> Any | None:
    # Missing or malformed bodies are treated the same: nothing usable was sent.
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


def _has_categories(body: Any) -> bool:
    if not isinstance(body, dict):
        return False
    value = body.get("categories")
    if value is None or value is False or value == "":
        return False
    if isinstance(value, (int, float)) and value == 0:
        return False
    return True


# -------------------------------------------------------------------
# Handlers (store + input -> Result)
# -------------------------------------------------------------------
async def fetch_menu(store: MenuDocumentStore | None) -> Result:
    if store is None:
        return Err(ErrorKind.CONFIGURATION, MSG_NO_DATABASE)
    try:
        doc = await store.fetch()
    except StoreError:
        logger.exception("MENU FETCH: store error")
        return Err(ErrorKind.STORE, MSG_FETCH_FAILED)
    if doc is None:
        return Err(ErrorKind.NOT_FOUND, MSG_NOT_FOUND)
    return Ok(doc)


async def replace_menu(store: MenuDocumentStore | None, body: Any) -> Result:
    if store is None:
        return Err(ErrorKind.CONFIGURATION, MSG_NO_DATABASE)
    # Only guard against wiping the document; categories' shape is the client's business.
    if not _has_categories(body):
        return Err(ErrorKind.VALIDATION, MSG_INVALID_MENU)
    try:
        await store.replace(body)
    except StoreError:
        logger.exception("MENU REPLACE: store error")
        return Err(ErrorKind.STORE, MSG_REPLACE_FAILED)
    return Ok({"mensagem": MSG_MENU_UPDATED})


async def toggle_store_status(store: MenuDocumentStore | None, body: Any) -> Result:
    if store is None:
        return Err(ErrorKind.CONFIGURATION, MSG_NO_DATABASE)
    try:
        update = StoreStatusUpdate.model_validate(body if isinstance(body, dict) else {})
    except ValidationError:
        return Err(ErrorKind.VALIDATION, MSG_INVALID_STATUS)
    try:
        await store.patch_field(STATUS_FIELD_PATH, update.isOpen)
    except StoreError:
        logger.exception("STORE STATUS: store error")
        return Err(ErrorKind.STORE, MSG_STATUS_FAILED)
    state = "ABERTA" if update.isOpen else "FECHADA"
    return Ok({"mensagem": f"Loja {state} com sucesso.", "estado": update.isOpen})


# -------------------------------------------------------------------
# Routes
# -------------------------------------------------------------------
@router.get("/api/menu")
async def get_menu(
    store: MenuDocumentStore | None = Depends(get_menu_store),
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    result = await fetch_menu(store)
    if settings.debug_log_requests:
        logger.info("MENU FETCH: %s", type(result).__name__)
    return to_response(result)


@router.put("/api/menu")
async def put_menu(
    request: Request,
    store: MenuDocumentStore | None = Depends(get_menu_store),
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    body = await _read_json_body(request)
    result = await replace_menu(store, body)
    if settings.debug_log_requests:
        keys = sorted(body.keys()) if isinstance(body, dict) else None
        logger.info("MENU REPLACE: %s keys=%s", type(result).__name__, keys)
    return to_response(result)


@router.patch("/api/status-loja")
async def patch_store_status(
    request: Request,
    store: MenuDocumentStore | None = Depends(get_menu_store),
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    body = await _read_json_body(request)
    result = await toggle_store_status(store, body)
    if settings.debug_log_requests:
        logger.info("STORE STATUS: %s", result)
    return to_response(result)
