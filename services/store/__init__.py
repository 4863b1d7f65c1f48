# services/store/__init__.py
"""
Document store backends.

Usage:
    from services.store import create_document_store

    store = create_document_store(get_settings())
    store.update("likes:v1", lambda likes: likes + ["u1"], default=[])
"""

import logging

from config import Settings

from .base import DocumentStore, Mutator
from .memory_store import InMemoryDocumentStore

logger = logging.getLogger(__name__)


def create_document_store(settings: Settings) -> DocumentStore:
    """Build the store selected by STORE_BACKEND."""
    if settings.store_backend == "memory":
        logger.warning("Using in-memory document store; data is lost on restart")
        return InMemoryDocumentStore()

    if settings.store_backend == "firestore":
        from services.firebase_app import init_firebase
        from .firestore_store import FirestoreDocumentStore

        init_firebase(settings)
        return FirestoreDocumentStore(collection=settings.kv_collection)

    raise ValueError(f"Unknown STORE_BACKEND: {settings.store_backend}")


__all__ = [
    "DocumentStore",
    "Mutator",
    "InMemoryDocumentStore",
    "create_document_store",
]
