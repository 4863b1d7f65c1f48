# services/chat/models.py
"""
Direct-message data models.

Document store keys:
├── messages:{chat_id}  -> [Message, ...] (append-only, chronological)
└── streak:{chat_id}    -> Streak
"""

from __future__ import annotations
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from services.errors import ValidationError

CHAT_ID_SEPARATOR = ":"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def messages_key(chat_id: str) -> str:
    return f"messages:{chat_id}"


def streak_key(chat_id: str) -> str:
    return f"streak:{chat_id}"


def validate_user_id(user_id: str) -> str:
    """Reject ids that are empty or would break chat id derivation."""
    if not user_id or not user_id.strip():
        raise ValidationError("User ID is required")
    if CHAT_ID_SEPARATOR in user_id:
        raise ValidationError(f"Invalid user ID: {user_id}")
    return user_id


def derive_chat_id(user_a: str, user_b: str) -> str:
    """Order-independent id for the conversation between two users."""
    return CHAT_ID_SEPARATOR.join(sorted([user_a, user_b]))


def chat_participants(chat_id: str) -> List[str]:
    return chat_id.split(CHAT_ID_SEPARATOR)


@dataclass
class Message:
    """Single direct message. Never mutated after creation."""
    id: str
    chat_id: str
    sender_id: str
    recipient_id: str
    text: str
    created_at: str

    @classmethod
    def create(cls, chat_id: str, sender_id: str, recipient_id: str, text: str,
               created_at: Optional[str] = None) -> "Message":
        return cls(
            id=str(uuid.uuid4()),
            chat_id=chat_id,
            sender_id=sender_id,
            recipient_id=recipient_id,
            text=text,
            created_at=created_at or utc_now_iso(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "chatId": self.chat_id,
            "senderId": self.sender_id,
            "recipientId": self.recipient_id,
            "text": self.text,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Message":
        return cls(
            id=data.get("id", ""),
            chat_id=data.get("chatId", ""),
            sender_id=data.get("senderId", ""),
            recipient_id=data.get("recipientId", ""),
            text=data.get("text", ""),
            created_at=data.get("createdAt", ""),
        )


@dataclass
class Streak:
    """
    Daily-continuity counter for a chat.

    `count` is the number of consecutive calendar days with at least one
    message in either direction. `count == 0` exactly when `last_date` is
    None (nothing exchanged yet).
    """
    count: int = 0
    last_date: Optional[str] = None        # "2025-11-22"
    participants: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": self.count,
            "lastDate": self.last_date,
            "participants": list(self.participants),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Streak":
        if not data:
            return cls()
        return cls(
            count=int(data.get("count", 0) or 0),
            last_date=data.get("lastDate") or None,
            participants=list(data.get("participants") or []),
        )


@dataclass
class ChatSummary:
    """Read-side view of one conversation; never persisted."""
    chat_id: str
    other_user: Optional[Dict[str, Any]]
    last_message: Message
    streak: Streak
    messages_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "chatId": self.chat_id,
            "otherUser": self.other_user,
            "lastMessage": self.last_message.to_dict(),
            "streak": self.streak.to_dict(),
            "messagesCount": self.messages_count,
        }
