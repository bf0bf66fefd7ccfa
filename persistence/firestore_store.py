from __future__ import annotations

import asyncio
from typing import Any

from .interfaces import MenuDocumentStore, StoreError


class FirestoreMenuDocumentStore(MenuDocumentStore):
    """
    Firestore-backed menu document.

    The Admin SDK is synchronous; calls run through asyncio.to_thread so a slow
    Firestore round trip never blocks the event loop. Last writer wins.
    """

    def __init__(self, client: Any, path: str):
        self._path = path
        self._doc = client.document(path)

    @property
    def path(self) -> str:
        return self._path

    def _fetch_sync(self) -> dict[str, Any] | None:
        snapshot = self._doc.get()
        if not snapshot.exists:
            return None
        return snapshot.to_dict() or {}

    async def fetch(self) -> dict[str, Any] | None:
        try:
            return await asyncio.to_thread(self._fetch_sync)
        except Exception as e:
            raise StoreError(f"failed to read {self._path}") from e

    async def replace(self, payload: dict[str, Any]) -> None:
        try:
            await asyncio.to_thread(self._doc.set, payload)
        except Exception as e:
            raise StoreError(f"failed to write {self._path}") from e

    async def patch_field(self, dot_path: str, value: Any) -> None:
        # Firestore treats dotted keys in update() as nested field paths.
        try:
            await asyncio.to_thread(self._doc.update, {dot_path: value})
        except Exception as e:
            raise StoreError(f"failed to update {dot_path} on {self._path}") from e
