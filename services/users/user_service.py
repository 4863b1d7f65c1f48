# services/users/user_service.py
"""
User profiles, follows and admin role flags.

Document store keys:
├── user:{user_id}           -> profile dict
├── user-videos:{user_id}    -> [video_id, ...] newest first
├── subscriptions:{user_id}  -> [followed_user_id, ...]
└── meta:first-user          -> id of the first user (admin bootstrap)
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from services.errors import Forbidden, NotFound, ValidationError
from services.store import DocumentStore

logger = logging.getLogger(__name__)

# Holds the id of the first user to sign up.
FIRST_USER_KEY = "meta:first-user"

# Fields a user may change on their own profile.
EDITABLE_PROFILE_FIELDS = ("username", "displayName", "bio", "avatar")


def user_key(user_id: str) -> str:
    return f"user:{user_id}"


def user_videos_key(user_id: str) -> str:
    return f"user-videos:{user_id}"


def subscriptions_key(user_id: str) -> str:
    return f"subscriptions:{user_id}"


class UserService:

    def __init__(self, store: DocumentStore, identity):
        self.store = store
        self.identity = identity

    # ───────────────────────────────────────────────────────────────────────────
    # SIGNUP & PROFILE
    # ───────────────────────────────────────────────────────────────────────────

    def sign_up(self, email: str, password: str, username: str, display_name: str) -> Dict[str, Any]:
        """
        Create the provider account and the stored profile.

        The very first user becomes a verified admin.
        """
        if not email or not password:
            raise ValidationError("Email and password are required")

        user_id = self.identity.create_user(email, password, display_name)

        is_first_user = self._claim_first_user(user_id)
        profile = {
            "id": user_id,
            "email": email,
            "username": username or "",
            "displayName": display_name or "",
            "bio": "",
            "avatar": "",
            "isVerified": is_first_user,
            "isAdmin": is_first_user,
            "createdAt": datetime.now(timezone.utc).isoformat(),
        }
        self.store.set(user_key(user_id), profile)

        logger.info("User created: %s (first user: %s)", email, is_first_user)
        return {"userId": user_id, "isFirstUser": is_first_user}

    def _claim_first_user(self, user_id: str) -> bool:
        """Atomically record the first signup; true only for that user."""
        def claim(owner):
            if owner:
                return owner
            # Profiles created before the marker existed keep their claim.
            if self.store.get_by_prefix("user:"):
                return "-"
            return user_id

        return self.store.update(FIRST_USER_KEY, claim, default="") == user_id

    def get_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        return self.store.get(user_key(user_id))

    def require_profile(self, user_id: str) -> Dict[str, Any]:
        profile = self.get_profile(user_id)
        if not profile:
            raise NotFound("User not found")
        return profile

    def get_user_page(self, user_id: str) -> Dict[str, Any]:
        """Profile with follower counts plus the user's videos."""
        profile = self.require_profile(user_id)

        video_ids = self.store.get(user_videos_key(user_id)) or []
        videos = [v for v in (self.store.get(f"video:{vid}") for vid in video_ids) if v]

        followers = sum(
            1 for following in self.store.get_by_prefix("subscriptions:")
            if isinstance(following, list) and user_id in following
        )
        following = self.store.get(subscriptions_key(user_id)) or []

        return {
            "user": {
                **profile,
                "videosCount": len(videos),
                "followersCount": followers,
                "followingCount": len(following),
            },
            "videos": videos,
        }

    def update_profile(self, user_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        allowed = {k: v for k, v in updates.items() if k in EDITABLE_PROFILE_FIELDS and v is not None}

        def merge(profile):
            if profile is None:
                raise NotFound("User not found")
            profile.update(allowed)
            return profile

        return self.store.update(user_key(user_id), merge)

    # ───────────────────────────────────────────────────────────────────────────
    # FOLLOWS
    # ───────────────────────────────────────────────────────────────────────────

    def toggle_subscription(self, user_id: str, target_user_id: str) -> bool:
        """Follow or unfollow `target_user_id`; returns the new state."""
        if not target_user_id:
            raise ValidationError("targetUserId is required")
        if user_id == target_user_id:
            raise ValidationError("Cannot subscribe to yourself")

        def toggle(following: List[str]) -> List[str]:
            if target_user_id in following:
                return [uid for uid in following if uid != target_user_id]
            return following + [target_user_id]

        following = self.store.update(subscriptions_key(user_id), toggle, default=[])
        return target_user_id in following

    # ───────────────────────────────────────────────────────────────────────────
    # ADMIN
    # ───────────────────────────────────────────────────────────────────────────

    def require_admin(self, user_id: str) -> Dict[str, Any]:
        profile = self.get_profile(user_id)
        if not profile or not profile.get("isAdmin"):
            raise Forbidden("Admin access required")
        return profile

    def _set_flag(self, admin_id: str, target_user_id: str, flag: str, value: bool) -> Dict[str, Any]:
        self.require_admin(admin_id)

        def apply(profile):
            if profile is None:
                raise NotFound("User not found")
            profile[flag] = bool(value)
            return profile

        updated = self.store.update(user_key(target_user_id), apply)
        logger.info("Admin %s set %s=%s on %s", admin_id, flag, value, target_user_id)
        return updated

    def set_verified(self, admin_id: str, target_user_id: str, verified: bool) -> Dict[str, Any]:
        return self._set_flag(admin_id, target_user_id, "isVerified", verified)

    def set_admin(self, admin_id: str, target_user_id: str, is_admin: bool) -> Dict[str, Any]:
        return self._set_flag(admin_id, target_user_id, "isAdmin", is_admin)

    def list_users(self, admin_id: str) -> List[Dict[str, Any]]:
        self.require_admin(admin_id)
        return self.store.get_by_prefix("user:")
