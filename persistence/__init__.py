from __future__ import annotations

from .credentials import create_firestore_client, create_menu_store, load_service_account
from .firestore_store import FirestoreMenuDocumentStore
from .interfaces import MenuDocumentStore, StoreError

__all__ = [
    "MenuDocumentStore",
    "StoreError",
    "FirestoreMenuDocumentStore",
    "load_service_account",
    "create_firestore_client",
    "create_menu_store",
]
