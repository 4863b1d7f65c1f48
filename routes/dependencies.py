# routes/dependencies.py
"""
Shared FastAPI dependencies.

Collaborators are created lazily on first use so importing the app never
talks to Firebase. Tests swap them through `app.dependency_overrides`.
"""

from typing import Optional

from fastapi import Depends, Header

from config import get_settings
from services.chat import ChatService, resolve_timezone
from services.identity import bearer_token
from services.store import DocumentStore, create_document_store
from services.users import UserService
from services.videos import AnalyticsService, VideoService

_store: Optional[DocumentStore] = None
_identity = None
_media = None


def get_store() -> DocumentStore:
    """Get or create the document store singleton."""
    global _store
    if _store is None:
        _store = create_document_store(get_settings())
    return _store


def get_identity_provider():
    """Get or create the identity provider singleton."""
    global _identity
    if _identity is None:
        from services.firebase_app import init_firebase
        from services.identity import FirebaseIdentityProvider

        init_firebase(get_settings())
        _identity = FirebaseIdentityProvider()
    return _identity


def get_media_storage():
    """Get or create the object storage singleton."""
    global _media
    if _media is None:
        from services.firebase_app import init_firebase
        from services.media_storage import FirebaseMediaStorage

        settings = get_settings()
        init_firebase(settings)
        _media = FirebaseMediaStorage(
            bucket_name=settings.firebase_storage_bucket,
            signed_url_ttl_seconds=settings.signed_url_ttl_seconds,
        )
    return _media


def get_current_user_id(
    authorization: Optional[str] = Header(None),
    identity=Depends(get_identity_provider),
) -> str:
    """Verify the bearer token and return the caller's user id."""
    return identity.verify_token(bearer_token(authorization))


def get_chat_service(store: DocumentStore = Depends(get_store)) -> ChatService:
    return ChatService(store, tz=resolve_timezone(get_settings().streak_timezone))


def get_user_service(
    store: DocumentStore = Depends(get_store),
    identity=Depends(get_identity_provider),
) -> UserService:
    return UserService(store, identity)


def get_video_service(store: DocumentStore = Depends(get_store)) -> VideoService:
    return VideoService(store)


def get_upload_service(
    store: DocumentStore = Depends(get_store),
    media=Depends(get_media_storage),
) -> VideoService:
    return VideoService(store, media=media)


def get_analytics_service(store: DocumentStore = Depends(get_store)) -> AnalyticsService:
    return AnalyticsService(store)
