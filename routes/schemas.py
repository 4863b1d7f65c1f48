# routes/schemas.py
"""Request bodies. JSON fields are camelCase on the wire."""

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SendMessageRequest(CamelModel):
    recipient_id: str
    text: str


class SignUpRequest(CamelModel):
    email: str
    password: str
    username: Optional[str] = ""
    display_name: Optional[str] = ""


class UpdateProfileRequest(CamelModel):
    username: Optional[str] = None
    display_name: Optional[str] = None
    bio: Optional[str] = None
    avatar: Optional[str] = None


class SubscribeRequest(CamelModel):
    target_user_id: str


class ExternalVideoRequest(CamelModel):
    tiktok_url: str
    title: Optional[str] = ""
    description: Optional[str] = ""


class LikeRequest(CamelModel):
    video_id: str


class CommentRequest(CamelModel):
    video_id: str
    text: str


class ViewRequest(CamelModel):
    video_id: str
    watch_time: float = 0
    duration: float = 0


class VerifyUserRequest(CamelModel):
    target_user_id: str
    verified: bool


class GrantAdminRequest(CamelModel):
    target_user_id: str
    is_admin: bool
