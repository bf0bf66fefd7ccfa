from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_PORT = 3000
DEFAULT_MENU_DOC_PATH = "configuracoes/menu"
DEFAULT_SERVICE_ACCOUNT_FILE = "serviceAccountKey.json"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def project_root() -> Path:
    # settings.py lives at the project root
    return Path(__file__).resolve().parent


@dataclass(frozen=True)
class Settings:
    # Server
    host: str
    port: int

    # Firebase credentials: env blob wins over the local file
    service_account_json: str | None
    service_account_file: Path

    # Firestore document holding the menu ("collection/document")
    menu_doc_path: str

    # Debug
    debug_log_requests: bool
    log_level: str


def get_settings() -> Settings:
    host = os.getenv("HOST", "0.0.0.0")
    port = _env_int("PORT", DEFAULT_PORT)

    # Empty counts as unset.
    service_account_json = os.getenv("FIREBASE_SERVICE_ACCOUNT") or None

    service_account_file = Path(os.getenv("FIREBASE_SERVICE_ACCOUNT_FILE", DEFAULT_SERVICE_ACCOUNT_FILE))
    if not service_account_file.is_absolute():
        service_account_file = project_root() / service_account_file

    menu_doc_path = (os.getenv("MENU_DOC_PATH") or DEFAULT_MENU_DOC_PATH).strip("/")

    debug_log_requests = _env_bool("DEBUG_LOG_REQUESTS", True)
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    return Settings(
        host=host,
        port=port,
        service_account_json=service_account_json,
        service_account_file=service_account_file,
        menu_doc_path=menu_doc_path,
        debug_log_requests=debug_log_requests,
        log_level=log_level,
    )
