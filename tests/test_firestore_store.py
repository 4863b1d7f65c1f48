from unittest.mock import MagicMock

import pytest

from services.errors import NotFound
from services.store import firestore_store
from services.store.firestore_store import PREFIX_END, FirestoreDocumentStore


def _snapshot(value=None, exists=True):
    snap = MagicMock()
    snap.exists = exists
    snap.to_dict.return_value = {"key": "k", "value": value}
    return snap


def test_get_reads_value_field():
    client = MagicMock()
    client.collection.return_value.document.return_value.get.return_value = _snapshot({"id": "a"})
    store = FirestoreDocumentStore(client=client, collection="kv")

    assert store.get("user:a") == {"id": "a"}
    client.collection.assert_called_with("kv")
    client.collection.return_value.document.assert_called_with("user:a")


def test_get_missing_document():
    client = MagicMock()
    client.collection.return_value.document.return_value.get.return_value = _snapshot(exists=False)
    assert FirestoreDocumentStore(client=client).get("user:a") is None


def test_set_writes_key_and_value():
    client = MagicMock()
    FirestoreDocumentStore(client=client).set("streak:a:b", {"count": 1})
    client.collection.return_value.document.return_value.set.assert_called_once_with(
        {"key": "streak:a:b", "value": {"count": 1}}
    )


def test_get_by_prefix_runs_a_key_range_query():
    client = MagicMock()
    query = client.collection.return_value.where.return_value.where.return_value.order_by.return_value
    query.stream.return_value = [_snapshot(1), _snapshot(2)]

    assert FirestoreDocumentStore(client=client).get_by_prefix("user:") == [1, 2]

    first_filter = client.collection.return_value.where.call_args.kwargs["filter"]
    second_filter = client.collection.return_value.where.return_value.where.call_args.kwargs["filter"]
    assert (first_filter.field_path, first_filter.op_string, first_filter.value) == ("key", ">=", "user:")
    assert (second_filter.field_path, second_filter.op_string, second_filter.value) == ("key", "<", "user:" + PREFIX_END)


@pytest.fixture
def plain_transactions(monkeypatch):
    # Run the transaction body once against the mock transaction.
    monkeypatch.setattr(firestore_store.firestore, "transactional", lambda fn: fn)


def test_update_creates_missing_document_from_a_copy_of_default(plain_transactions):
    client = MagicMock()
    doc_ref = client.collection.return_value.document.return_value
    doc_ref.get.return_value = _snapshot(exists=False)
    transaction = client.transaction.return_value
    default = []

    result = FirestoreDocumentStore(client=client).update(
        "likes:v1", lambda likes: likes + ["bob"], default=default,
    )

    assert result == ["bob"]
    assert default == []
    doc_ref.get.assert_called_once_with(transaction=transaction)
    transaction.set.assert_called_once_with(doc_ref, {"key": "likes:v1", "value": ["bob"]})


def test_update_mutator_gets_a_copy_of_the_stored_value(plain_transactions):
    client = MagicMock()
    stored = {"count": 1, "lastDate": "2024-01-01"}
    client.collection.return_value.document.return_value.get.return_value = _snapshot(stored)
    transaction = client.transaction.return_value

    def bump(streak):
        streak["count"] += 1
        return streak

    result = FirestoreDocumentStore(client=client).update("streak:a:b", bump)

    assert result["count"] == 2
    assert stored["count"] == 1
    transaction.set.assert_called_once()


def test_update_skips_write_when_value_is_unchanged(plain_transactions):
    client = MagicMock()
    client.collection.return_value.document.return_value.get.return_value = _snapshot({"count": 3})
    transaction = client.transaction.return_value

    result = FirestoreDocumentStore(client=client).update("streak:a:b", lambda streak: streak)

    assert result == {"count": 3}
    transaction.set.assert_not_called()


def test_update_propagates_mutator_errors(plain_transactions):
    client = MagicMock()
    client.collection.return_value.document.return_value.get.return_value = _snapshot(exists=False)
    transaction = client.transaction.return_value

    def require(video):
        if video is None:
            raise NotFound("Video not found")
        return video

    with pytest.raises(NotFound):
        FirestoreDocumentStore(client=client).update("video:missing", require)
    transaction.set.assert_not_called()
