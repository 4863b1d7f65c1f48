# services/videos/video_service.py
"""
Video metadata, likes and comments.

Document store keys:
├── video:{video_id}       -> video metadata
├── likes:{video_id}       -> [user_id, ...]
└── comments:{video_id}    -> [comment, ...] chronological
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from services.errors import InternalFailure, NotFound, ValidationError
from services.store import DocumentStore
from services.users import user_key, user_videos_key

logger = logging.getLogger(__name__)

EXTERNAL_LINK_NOTE = "External TikTok link saved. For actual download, use third-party services."


def video_key(video_id: str) -> str:
    return f"video:{video_id}"


def likes_key(video_id: str) -> str:
    return f"likes:{video_id}"


def comments_key(video_id: str) -> str:
    return f"comments:{video_id}"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class VideoService:

    def __init__(self, store: DocumentStore, media=None):
        self.store = store
        self.media = media

    # ───────────────────────────────────────────────────────────────────────────
    # CREATE
    # ───────────────────────────────────────────────────────────────────────────

    def _new_video(self, video_id: str, user_id: str, title: Optional[str],
                   description: Optional[str], url: str, **extra) -> Dict[str, Any]:
        return {
            "id": video_id,
            "userId": user_id,
            "title": title or "",
            "description": description or "",
            **extra,
            "url": url,
            "likes": 0,
            "comments": 0,
            "views": 0,
            "createdAt": _now_iso(),
        }

    def _save_new_video(self, video: Dict[str, Any]) -> None:
        self.store.set(video_key(video["id"]), video)
        self.store.update(
            user_videos_key(video["userId"]),
            lambda ids: [video["id"]] + ids,
            default=[],
        )

    def upload_video(self, user_id: str, file_name: str, data: bytes, content_type: Optional[str],
                     title: Optional[str], description: Optional[str]) -> Dict[str, Any]:
        """Store the file in object storage and register its metadata."""
        if not data:
            raise ValidationError("No video file provided")
        if self.media is None:
            raise InternalFailure("Media storage is not configured")

        video_id = str(uuid.uuid4())
        stored_name = f"{video_id}-{file_name or 'video'}"
        url = self.media.upload(stored_name, data, content_type)

        video = self._new_video(video_id, user_id, title, description, url, fileName=stored_name)
        self._save_new_video(video)

        logger.info("Video %s uploaded by %s", video_id, user_id)
        return video

    def add_external_video(self, user_id: str, link: str, title: Optional[str],
                           description: Optional[str]) -> Dict[str, Any]:
        """Register a video hosted elsewhere; only the link is kept."""
        if not link or not link.strip():
            raise ValidationError("tiktokUrl is required")

        video = self._new_video(str(uuid.uuid4()), user_id, title, description, link.strip(), isExternal=True)
        self._save_new_video(video)

        logger.info("External video %s saved for %s", video["id"], user_id)
        return video

    # ───────────────────────────────────────────────────────────────────────────
    # READ
    # ───────────────────────────────────────────────────────────────────────────

    def require_video(self, video_id: str) -> Dict[str, Any]:
        video = self.store.get(video_key(video_id))
        if not video:
            raise NotFound("Video not found")
        return video

    def get_video(self, video_id: str) -> Dict[str, Any]:
        video = self.require_video(video_id)
        return {**video, "user": self.store.get(user_key(video["userId"]))}

    def get_comments(self, video_id: str) -> List[Dict[str, Any]]:
        comments = self.store.get(comments_key(video_id)) or []
        return [{**c, "user": self.store.get(user_key(c["userId"]))} for c in comments]

    # ───────────────────────────────────────────────────────────────────────────
    # ENGAGEMENT
    # ───────────────────────────────────────────────────────────────────────────

    def _sync_counter(self, video_id: str, field: str, list_key: str) -> int:
        """Set video[field] to the length of the list stored under list_key."""
        # The list is read inside the video update, so whichever counter
        # write commits last sees every list change before it.
        def apply(video):
            if video is None:
                raise NotFound("Video not found")
            video[field] = len(self.store.get(list_key) or [])
            return video

        return self.store.update(video_key(video_id), apply)[field]

    def toggle_like(self, user_id: str, video_id: str) -> Dict[str, Any]:
        self.require_video(video_id)

        def toggle(likes: List[str]) -> List[str]:
            if user_id in likes:
                return [uid for uid in likes if uid != user_id]
            return likes + [user_id]

        likes = self.store.update(likes_key(video_id), toggle, default=[])
        count = self._sync_counter(video_id, "likes", likes_key(video_id))
        return {"likes": count, "isLiked": user_id in likes}

    def add_comment(self, user_id: str, video_id: str, text: str) -> Dict[str, Any]:
        text = (text or "").strip()
        if not text:
            raise ValidationError("Comment text is required")
        self.require_video(video_id)

        comment = {
            "id": str(uuid.uuid4()),
            "userId": user_id,
            "videoId": video_id,
            "text": text,
            "createdAt": _now_iso(),
        }
        comments = self.store.update(comments_key(video_id), lambda cs: cs + [comment], default=[])
        total = self._sync_counter(video_id, "comments", comments_key(video_id))
        return {"comment": comment, "totalComments": total}
