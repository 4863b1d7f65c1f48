# services/store/firestore_store.py
"""
Firestore-backed document store.

Firestore Structure:
└── {collection}/{key}
    ├── key:   "messages:alice:bob"
    └── value: <any JSON value>

The key is duplicated into a field so prefix scans can be expressed as a
range query on it.
"""

import copy
from typing import Any, List, Optional

from firebase_admin import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from .base import DocumentStore, Mutator

# Highest code point in the Basic Multilingual Plane private use area;
# `prefix + PREFIX_END` sorts after every key that starts with `prefix`.
PREFIX_END = "\uf8ff"


class FirestoreDocumentStore(DocumentStore):
    name = "firestore"

    def __init__(self, client=None, collection: str = "kv_store"):
        self.db = client or firestore.client()
        self.collection = collection

    def _doc(self, key: str):
        return self.db.collection(self.collection).document(key)

    def get(self, key: str) -> Optional[Any]:
        snap = self._doc(key).get()
        if not snap.exists:
            return None
        return snap.to_dict().get("value")

    def set(self, key: str, value: Any) -> None:
        self._doc(key).set({"key": key, "value": value})

    def delete(self, key: str) -> None:
        self._doc(key).delete()

    def get_by_prefix(self, prefix: str) -> List[Any]:
        docs = (
            self.db.collection(self.collection)
            .where(filter=FieldFilter("key", ">=", prefix))
            .where(filter=FieldFilter("key", "<", prefix + PREFIX_END))
            .order_by("key")
            .stream()
        )
        return [doc.to_dict().get("value") for doc in docs]

    def update(self, key: str, mutate: Mutator, default: Any = None) -> Any:
        doc_ref = self._doc(key)

        # Firestore re-runs the function when the document changed
        # between the read and the commit.
        @firestore.transactional
        def txn(transaction):
            snap = doc_ref.get(transaction=transaction)
            current = snap.to_dict().get("value") if snap.exists else None
            if current is None:
                current = copy.deepcopy(default)

            new_value = mutate(copy.deepcopy(current))
            if new_value != current:
                transaction.set(doc_ref, {"key": key, "value": new_value})
            return new_value

        return txn(self.db.transaction())
