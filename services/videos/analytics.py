# services/videos/analytics.py
"""
View tracking and creator analytics.

Document store keys:
└── analytics:{video_id} -> {"views": [{timestamp, watchTime, duration}], "retention": [pct, ...]}
"""

from datetime import datetime, timezone
from typing import Any, Dict, List

from services.errors import Forbidden, NotFound
from services.store import DocumentStore
from services.users import user_videos_key
from .video_service import video_key


def analytics_key(video_id: str) -> str:
    return f"analytics:{video_id}"


def empty_analytics() -> Dict[str, list]:
    return {"views": [], "retention": []}


def retention_rate(watch_time: float, duration: float) -> float:
    """Percentage of the video watched; 0 when the duration is unknown."""
    if not duration or duration <= 0:
        return 0.0
    return (watch_time / duration) * 100


def average_retention(retention: List[float]) -> str:
    avg = sum(retention) / len(retention) if retention else 0.0
    return f"{avg:.1f}"


class AnalyticsService:

    def __init__(self, store: DocumentStore):
        self.store = store

    def record_view(self, video_id: str, watch_time: float, duration: float) -> None:
        def bump(video):
            if video is None:
                raise NotFound("Video not found")
            video["views"] = (video.get("views") or 0) + 1
            return video

        self.store.update(video_key(video_id), bump)

        view = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "watchTime": watch_time,
            "duration": duration,
        }

        def append(analytics):
            analytics.setdefault("views", []).append(view)
            analytics.setdefault("retention", []).append(retention_rate(watch_time, duration))
            return analytics

        self.store.update(analytics_key(video_id), append, default=empty_analytics())

    def creator_analytics(self, requester_id: str, user_id: str) -> List[Dict[str, Any]]:
        """Per-video stats; creators can only see their own."""
        if requester_id != user_id:
            raise Forbidden()

        results = []
        for video_id in self.store.get(user_videos_key(user_id)) or []:
            video = self.store.get(video_key(video_id))
            if not video:
                continue
            analytics = self.store.get(analytics_key(video_id)) or empty_analytics()
            results.append({
                "video": video,
                "views": video.get("views") or 0,
                "likes": video.get("likes") or 0,
                "comments": video.get("comments") or 0,
                "avgRetention": average_retention(analytics.get("retention") or []),
            })
        return results
