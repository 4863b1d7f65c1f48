# services/users/__init__.py
from .user_service import (
    EDITABLE_PROFILE_FIELDS,
    UserService,
    subscriptions_key,
    user_key,
    user_videos_key,
)

__all__ = [
    "EDITABLE_PROFILE_FIELDS",
    "UserService",
    "subscriptions_key",
    "user_key",
    "user_videos_key",
]
