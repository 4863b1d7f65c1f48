import pytest
from fastapi.testclient import TestClient

from main import app
from routes.dependencies import get_identity_provider, get_media_storage, get_store
from services.errors import Unauthenticated, ValidationError
from services.store import InMemoryDocumentStore


class FakeIdentityProvider:
    """Accepts tokens of the form "token-<uid>"."""

    def __init__(self):
        self.created = {}

    def verify_token(self, token: str) -> str:
        if not token.startswith("token-"):
            raise Unauthenticated()
        return token[len("token-"):]

    def create_user(self, email, password, display_name=None):
        if email in self.created:
            raise ValidationError("The user with the provided email already exists")
        uid = f"uid{len(self.created) + 1}"
        self.created[email] = uid
        return uid


class FakeMediaStorage:
    def __init__(self):
        self.objects = {}

    def upload(self, file_name, data, content_type=None):
        self.objects[file_name] = (data, content_type)
        return f"https://storage.example/{file_name}?signed=1"


@pytest.fixture
def auth():
    def _headers(uid: str) -> dict:
        return {"Authorization": f"Bearer token-{uid}"}
    return _headers


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def identity():
    return FakeIdentityProvider()


@pytest.fixture
def media():
    return FakeMediaStorage()


@pytest.fixture
def client(store, identity, media):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_identity_provider] = lambda: identity
    app.dependency_overrides[get_media_storage] = lambda: media
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(store):
    def _make(uid: str, **fields):
        profile = {
            "id": uid,
            "email": f"{uid}@example.com",
            "username": uid,
            "displayName": uid.title(),
            "bio": "",
            "avatar": "",
            "isVerified": False,
            "isAdmin": False,
            "createdAt": "2025-01-01T00:00:00+00:00",
        }
        profile.update(fields)
        store.set(f"user:{uid}", profile)
        return profile
    return _make
