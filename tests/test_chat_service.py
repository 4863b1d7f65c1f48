from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone

import pytest

from services.chat import ChatService, derive_chat_id, messages_key, streak_key
from services.errors import SelfMessageRejected, ValidationError
from services.store import InMemoryDocumentStore


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 11, 20, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def service(store, clock):
    return ChatService(store, clock=clock)


def test_chat_id_is_commutative():
    assert derive_chat_id("alice", "bob") == derive_chat_id("bob", "alice") == "alice:bob"


def test_send_message_persists_message_and_starts_streak(service, store):
    message = service.send_message("bob", "alice", "  hey  ")

    assert message.chat_id == "alice:bob"
    assert message.text == "hey"
    assert store.get(messages_key("alice:bob")) == [message.to_dict()]
    assert store.get(streak_key("alice:bob")) == {
        "count": 1,
        "lastDate": "2025-11-20",
        "participants": ["bob", "alice"],
    }


def test_streak_follows_calendar_days(service, clock):
    service.send_message("alice", "bob", "day one")
    clock.advance(hours=10)
    service.send_message("bob", "alice", "same day reply")
    assert service.get_streak("alice:bob").count == 1

    clock.advance(hours=6)  # 2025-11-21 01:00 UTC
    service.send_message("bob", "alice", "next day")
    streak = service.get_streak("alice:bob")
    assert (streak.count, streak.last_date) == (2, "2025-11-21")

    clock.advance(days=2)
    service.send_message("alice", "bob", "after a gap")
    streak = service.get_streak("alice:bob")
    assert (streak.count, streak.last_date) == (1, "2025-11-23")


def test_self_message_is_rejected_without_writes(service, store):
    with pytest.raises(SelfMessageRejected):
        service.send_message("alice", "alice", "hi")
    assert store.keys() == []


@pytest.mark.parametrize("text", ["", "   ", None])
def test_empty_text_is_rejected(service, store, text):
    with pytest.raises(ValidationError):
        service.send_message("alice", "bob", text)
    assert store.keys() == []


def test_recipient_id_with_separator_is_rejected(service):
    with pytest.raises(ValidationError):
        service.send_message("alice", "bob:carol", "hi")


def test_list_messages_returns_history_in_order(service):
    sent = [service.send_message("alice", "bob", f"m{i}") for i in range(3)]

    result = service.list_messages("bob", "alice")

    assert [m.id for m in result["messages"]] == [m.id for m in sent]
    assert result["streak"].count == 1


def test_list_messages_for_new_chat_has_empty_streak(service):
    result = service.list_messages("alice", "bob")
    assert result["messages"] == []
    assert result["streak"].count == 0 and result["streak"].last_date is None


def test_list_chats_filters_by_exact_participant_and_sorts(service, store, clock, make_user):
    make_user("bob")
    make_user("carol")
    service.send_message("alice", "bob", "first")
    clock.advance(minutes=5)
    service.send_message("carol", "alice", "second")
    clock.advance(minutes=5)
    service.send_message("ali", "bob", "not alice's chat")

    chats = service.list_chats("alice")

    assert [c.chat_id for c in chats] == ["alice:carol", "alice:bob"]
    assert chats[0].other_user["id"] == "carol"
    assert chats[0].last_message.text == "second"
    assert chats[1].messages_count == 1
    assert chats[1].streak.count == 1
    assert [c.chat_id for c in service.list_chats("ali")] == ["ali:bob"]


def test_concurrent_sends_lose_no_messages(store):
    service = ChatService(store)

    def send(i):
        return service.send_message("alice", "bob", f"message {i}").id

    with ThreadPoolExecutor(max_workers=8) as pool:
        ids = list(pool.map(send, range(40)))

    stored = store.get(messages_key("alice:bob"))
    assert len(stored) == 40
    assert {m["id"] for m in stored} == set(ids)
    assert store.get(streak_key("alice:bob"))["count"] == 1


def test_two_concurrent_sends_both_persist():
    store = InMemoryDocumentStore()
    service = ChatService(store)

    with ThreadPoolExecutor(max_workers=2) as pool:
        first = pool.submit(service.send_message, "alice", "bob", "one")
        second = pool.submit(service.send_message, "bob", "alice", "two")
        first.result()
        second.result()

    texts = sorted(m["text"] for m in store.get(messages_key("alice:bob")))
    assert texts == ["one", "two"]
