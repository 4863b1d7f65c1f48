# services/videos/__init__.py
from .analytics import AnalyticsService, average_retention, retention_rate
from .video_service import VideoService, comments_key, likes_key, video_key

__all__ = [
    "AnalyticsService",
    "VideoService",
    "average_retention",
    "retention_rate",
    "comments_key",
    "likes_key",
    "video_key",
]
