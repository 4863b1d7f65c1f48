import pytest

from services.errors import InternalFailure
from services.store import InMemoryDocumentStore
from services.videos import VideoService, comments_key, likes_key, video_key


class InterleavingStore(InMemoryDocumentStore):
    """Runs a hook once, just before the next video document update."""

    def __init__(self):
        super().__init__()
        self.before_video_update = None

    def update(self, key, mutate, default=None):
        if key.startswith("video:") and self.before_video_update:
            hook, self.before_video_update = self.before_video_update, None
            hook()
        return super().update(key, mutate, default)


@pytest.fixture
def store():
    return InterleavingStore()


@pytest.fixture
def service(store):
    service = VideoService(store)
    store.set(video_key("v1"), {"id": "v1", "userId": "alice", "likes": 0, "comments": 0, "views": 0})
    return service


def test_like_count_survives_interleaved_toggles(service, store):
    # carol's whole toggle lands between bob's list write and his counter write
    store.before_video_update = lambda: service.toggle_like("carol", "v1")

    result = service.toggle_like("bob", "v1")

    assert store.get(likes_key("v1")) == ["bob", "carol"]
    assert store.get(video_key("v1"))["likes"] == 2
    assert result == {"likes": 2, "isLiked": True}


def test_comment_count_survives_interleaved_comments(service, store):
    store.before_video_update = lambda: service.add_comment("carol", "v1", "second")

    result = service.add_comment("bob", "v1", "first")

    assert [c["text"] for c in store.get(comments_key("v1"))] == ["first", "second"]
    assert store.get(video_key("v1"))["comments"] == 2
    assert result["totalComments"] == 2


def test_unlike_after_interleaved_like(service, store):
    service.toggle_like("bob", "v1")
    store.before_video_update = lambda: service.toggle_like("carol", "v1")

    result = service.toggle_like("bob", "v1")

    assert store.get(likes_key("v1")) == ["carol"]
    assert store.get(video_key("v1"))["likes"] == 1
    assert result == {"likes": 1, "isLiked": False}


def test_upload_without_media_storage_is_an_internal_failure(service, store):
    with pytest.raises(InternalFailure):
        service.upload_video("alice", "clip.mp4", b"data", "video/mp4", "t", "d")
    assert store.get("user-videos:alice") is None
