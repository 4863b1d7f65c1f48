# services/chat/chat_service.py
"""
Chat Service - direct messages between two users with a daily streak.

Every send is two independent atomic updates on the document store:
1. append the message to messages:{chat_id}
2. advance streak:{chat_id}

A crash between them leaves the message stored and the streak stale.
"""

import logging
from datetime import datetime, timezone, tzinfo
from typing import Any, Callable, Dict, List, Optional

from services.errors import SelfMessageRejected, ValidationError
from services.store import DocumentStore
from services.users import user_key
from .models import (
    ChatSummary,
    Message,
    Streak,
    chat_participants,
    derive_chat_id,
    messages_key,
    streak_key,
    validate_user_id,
)
from .streak import advance, calendar_day

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ChatService:
    """Send / history / chat-list operations over a DocumentStore."""

    def __init__(self, store: DocumentStore, tz: tzinfo = timezone.utc, clock: Clock = _utc_now):
        self.store = store
        self.tz = tz
        self.clock = clock

    def _chat_id_for(self, user_id: str, other_user_id: str) -> str:
        validate_user_id(user_id)
        validate_user_id(other_user_id)
        if user_id == other_user_id:
            raise SelfMessageRejected()
        return derive_chat_id(user_id, other_user_id)

    # ───────────────────────────────────────────────────────────────────────────
    # SEND
    # ───────────────────────────────────────────────────────────────────────────

    def send_message(self, sender_id: str, recipient_id: str, text: str) -> Message:
        """Persist a new message and advance the chat's streak."""
        chat_id = self._chat_id_for(sender_id, recipient_id)

        text = (text or "").strip()
        if not text:
            raise ValidationError("Message text is required")

        now = self.clock()
        message = Message.create(
            chat_id=chat_id,
            sender_id=sender_id,
            recipient_id=recipient_id,
            text=text,
            created_at=now.astimezone(timezone.utc).isoformat(),
        )

        def append(messages: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
            messages.append(message.to_dict())
            return messages

        self.store.update(messages_key(chat_id), append, default=[])

        streak = self._advance_streak(chat_id, sender_id, recipient_id, now)
        logger.info("Message %s sent in chat %s (streak=%d)", message.id, chat_id, streak.count)
        return message

    def _advance_streak(self, chat_id: str, sender_id: str, recipient_id: str, now: datetime) -> Streak:
        today = calendar_day(now, self.tz)
        default = Streak(participants=[sender_id, recipient_id]).to_dict()

        def bump(current: Dict[str, Any]) -> Dict[str, Any]:
            return advance(Streak.from_dict(current), today).to_dict()

        return Streak.from_dict(self.store.update(streak_key(chat_id), bump, default=default))

    # ───────────────────────────────────────────────────────────────────────────
    # READ
    # ───────────────────────────────────────────────────────────────────────────

    def get_streak(self, chat_id: str) -> Streak:
        return Streak.from_dict(self.store.get(streak_key(chat_id)))

    def list_messages(self, requester_id: str, other_user_id: str) -> Dict[str, Any]:
        """Full chronological history of a chat plus its current streak."""
        chat_id = self._chat_id_for(requester_id, other_user_id)
        messages = self.store.get(messages_key(chat_id)) or []
        streak = self.get_streak(chat_id)
        return {
            "messages": [Message.from_dict(m) for m in messages],
            "streak": streak,
        }

    def list_chats(self, requester_id: str) -> List[ChatSummary]:
        """Every chat the requester takes part in, most recent first."""
        validate_user_id(requester_id)

        summaries: List[ChatSummary] = []
        for messages in self.store.get_by_prefix("messages:"):
            if not isinstance(messages, list) or not messages:
                continue

            last_message = Message.from_dict(messages[-1])
            participants = chat_participants(last_message.chat_id)
            if requester_id not in participants:
                continue

            other_user_id = next((p for p in participants if p != requester_id), None)
            summaries.append(ChatSummary(
                chat_id=last_message.chat_id,
                other_user=self._profile(other_user_id),
                last_message=last_message,
                streak=self.get_streak(last_message.chat_id),
                messages_count=len(messages),
            ))

        summaries.sort(key=lambda s: s.last_message.created_at, reverse=True)
        return summaries

    def _profile(self, user_id: Optional[str]) -> Optional[Dict[str, Any]]:
        if not user_id:
            return None
        return self.store.get(user_key(user_id))


def create_chat_service(store: DocumentStore, tz: tzinfo = timezone.utc) -> ChatService:
    """Factory function to create ChatService."""
    return ChatService(store=store, tz=tz)
