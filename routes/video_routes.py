# routes/video_routes.py
"""
FastAPI routes for videos, likes, comments and analytics.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from services.errors import ValidationError
from services.videos import AnalyticsService, VideoService
from services.videos.video_service import EXTERNAL_LINK_NOTE
from .dependencies import (
    get_analytics_service,
    get_current_user_id,
    get_upload_service,
    get_video_service,
)
from .schemas import CommentRequest, ExternalVideoRequest, LikeRequest, ViewRequest

router = APIRouter()


# ═══════════════════════════════════════════════════════════════════════════════
# UPLOAD
# ═══════════════════════════════════════════════════════════════════════════════

@router.post("/upload-video")
def upload_video(
    video: Optional[UploadFile] = File(None),
    title: Optional[str] = Form(""),
    description: Optional[str] = Form(""),
    user_id: str = Depends(get_current_user_id),
    video_service: VideoService = Depends(get_upload_service),
):
    """Multipart upload: `video` file plus `title` and `description` fields."""
    if video is None:
        raise ValidationError("No video file provided")

    data = video.file.read()
    result = video_service.upload_video(
        user_id=user_id,
        file_name=video.filename,
        data=data,
        content_type=video.content_type,
        title=title,
        description=description,
    )
    return {"success": True, "videoId": result["id"], "video": result}


@router.post("/tiktok-download")
def add_external_video(
    body: ExternalVideoRequest,
    user_id: str = Depends(get_current_user_id),
    video_service: VideoService = Depends(get_video_service),
):
    """Save a link to a video hosted elsewhere."""
    video = video_service.add_external_video(user_id, body.tiktok_url, body.title, body.description)
    return {
        "success": True,
        "videoId": video["id"],
        "video": video,
        "note": EXTERNAL_LINK_NOTE,
    }


# ═══════════════════════════════════════════════════════════════════════════════
# READ
# ═══════════════════════════════════════════════════════════════════════════════

@router.get("/video/{video_id}")
def get_video(video_id: str, video_service: VideoService = Depends(get_video_service)):
    return {"video": video_service.get_video(video_id)}


@router.get("/comments/{video_id}")
def get_comments(video_id: str, video_service: VideoService = Depends(get_video_service)):
    return {"comments": video_service.get_comments(video_id)}


# ═══════════════════════════════════════════════════════════════════════════════
# ENGAGEMENT
# ═══════════════════════════════════════════════════════════════════════════════

@router.post("/like")
def like_video(
    body: LikeRequest,
    user_id: str = Depends(get_current_user_id),
    video_service: VideoService = Depends(get_video_service),
):
    """Toggle the caller's like."""
    result = video_service.toggle_like(user_id, body.video_id)
    return {"success": True, **result}


@router.post("/comment")
def comment_video(
    body: CommentRequest,
    user_id: str = Depends(get_current_user_id),
    video_service: VideoService = Depends(get_video_service),
):
    result = video_service.add_comment(user_id, body.video_id, body.text)
    return {"success": True, **result}


# ═══════════════════════════════════════════════════════════════════════════════
# ANALYTICS
# ═══════════════════════════════════════════════════════════════════════════════

@router.post("/view")
def record_view(body: ViewRequest, analytics: AnalyticsService = Depends(get_analytics_service)):
    analytics.record_view(body.video_id, body.watch_time, body.duration)
    return {"success": True}


@router.get("/analytics/{user_id}")
def get_analytics(
    user_id: str,
    requester_id: str = Depends(get_current_user_id),
    analytics: AnalyticsService = Depends(get_analytics_service),
):
    """Creator Studio stats; only for the caller's own videos."""
    return {"analytics": analytics.creator_analytics(requester_id, user_id)}
