from __future__ import annotations

import copy
from pathlib import Path
import sys
from typing import Any

import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from persistence.interfaces import MenuDocumentStore, StoreError  # noqa: E402


class InMemoryMenuStore(MenuDocumentStore):
    """
    Mirrors Firestore semantics: set() overwrites, update() on a missing document fails,
    dotted update paths address nested fields.
    """

    def __init__(self, doc: dict[str, Any] | None = None):
        self.doc = copy.deepcopy(doc)
        self.calls: list[str] = []

    @property
    def path(self) -> str:
        return "configuracoes/menu"

    async def fetch(self) -> dict[str, Any] | None:
        self.calls.append("fetch")
        return copy.deepcopy(self.doc)

    async def replace(self, payload: dict[str, Any]) -> None:
        self.calls.append("replace")
        self.doc = copy.deepcopy(payload)

    async def patch_field(self, dot_path: str, value: Any) -> None:
        self.calls.append("patch_field")
        if self.doc is None:
            raise StoreError("no document to update")
        *parents, leaf = dot_path.split(".")
        node = self.doc
        for key in parents:
            child = node.get(key)
            if not isinstance(child, dict):
                child = {}
                node[key] = child
            node = child
        node[leaf] = value


class FailingMenuStore(MenuDocumentStore):
    def __init__(self) -> None:
        self.calls: list[str] = []

    @property
    def path(self) -> str:
        return "configuracoes/menu"

    async def fetch(self) -> dict[str, Any] | None:
        self.calls.append("fetch")
        raise StoreError("permission denied")

    async def replace(self, payload: dict[str, Any]) -> None:
        self.calls.append("replace")
        raise StoreError("permission denied")

    async def patch_field(self, dot_path: str, value: Any) -> None:
        self.calls.append("patch_field")
        raise StoreError("permission denied")


SAMPLE_MENU = {
    "categories": [{"name": "Marmitas", "items": [{"name": "Frango grelhado", "price": 18.5}]}],
    "settings": {"isOpen": False, "deliveryFee": 5},
    "phone": "5511999999999",
}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's shell (and local.env) from leaking into settings."""
    for name in (
        "PORT",
        "HOST",
        "FIREBASE_SERVICE_ACCOUNT",
        "FIREBASE_SERVICE_ACCOUNT_FILE",
        "MENU_DOC_PATH",
        "DEBUG_LOG_REQUESTS",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    import app as app_module

    monkeypatch.setattr(app_module, "load_dotenv", lambda *a, **k: False)


@pytest.fixture
def memory_store() -> InMemoryMenuStore:
    return InMemoryMenuStore(SAMPLE_MENU)


@pytest.fixture
def empty_store() -> InMemoryMenuStore:
    return InMemoryMenuStore()


@pytest.fixture
def failing_store() -> FailingMenuStore:
    return FailingMenuStore()
