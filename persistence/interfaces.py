from __future__ import annotations

from typing import Any, Protocol


class StoreError(Exception):
    """Raised when the backing document store fails to read or write."""


class MenuDocumentStore(Protocol):
    """
    Minimal DB-friendly interface: the single menu configuration document at a fixed path.

    Every method raises StoreError on connectivity/permission problems.
    """

    @property
    def path(self) -> str:
        ...

    async def fetch(self) -> dict[str, Any] | None:
        """Return the full document, or None when nothing exists at the path."""
        ...

    async def replace(self, payload: dict[str, Any]) -> None:
        """Overwrite the whole document with `payload`."""
        ...

    async def patch_field(self, dot_path: str, value: Any) -> None:
        """Update one nested field (e.g. "settings.isOpen"), leaving its siblings untouched."""
        ...
