# services/chat/__init__.py
"""
Direct messaging with a daily streak.

Document store keys: messages:{chat_id}, streak:{chat_id}
where chat_id = ":".join(sorted([user_a, user_b])).

Usage:
    from services.chat import ChatService, create_chat_service

    chat_service = create_chat_service(store)
    message = chat_service.send_message("alice", "bob", "hey")
    history = chat_service.list_messages("bob", "alice")
    print(history["streak"].count)
"""

from .chat_service import (
    ChatService,
    create_chat_service,
)

from .models import (
    ChatSummary,
    Message,
    Streak,
    derive_chat_id,
    messages_key,
    streak_key,
)

from .streak import (
    StreakTransition,
    advance,
    calendar_day,
    classify,
    resolve_timezone,
)

__all__ = [
    # Service
    "ChatService",
    "create_chat_service",

    # Models
    "ChatSummary",
    "Message",
    "Streak",
    "derive_chat_id",
    "messages_key",
    "streak_key",

    # Streak engine
    "StreakTransition",
    "advance",
    "calendar_day",
    "classify",
    "resolve_timezone",
]
