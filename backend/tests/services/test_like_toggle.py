"""Like Toggle: service-level tests against the in-memory backend.

Tests cover:
    - first toggle likes, second unlikes (involution on liked and count)
    - missing song raises NotFoundError before any like is read
    - count reflects other users' likes
    - backend failures propagate as BackendError
"""

import pytest

from melodify.core.errors import BackendError, NotFoundError
from melodify.services.like_toggle import toggle_like
from tests.services.fake_backend import FakeBackend


@pytest.fixture
def backend():
    b = FakeBackend()
    b.add_song(id=42, title="Blue Hour")
    return b


async def test_first_toggle_likes_song(backend):
    result = await toggle_like(backend, "user-1", 42)
    assert result == {
        "message": "Song liked",
        "user": "user-1",
        "song": "Blue Hour",
        "liked": True,
        "likes_count": 1,
    }


async def test_second_toggle_restores_state(backend):
    before = await backend.count_likes(42)
    first = await toggle_like(backend, "user-1", 42)
    second = await toggle_like(backend, "user-1", 42)
    assert first["liked"] is True
    assert second["liked"] is False
    assert second["message"] == "Song unliked"
    assert second["likes_count"] == before
    assert backend.likes == []


async def test_count_includes_other_users(backend):
    await toggle_like(backend, "user-2", 42)
    result = await toggle_like(backend, "user-1", 42)
    assert result["likes_count"] == 2


async def test_missing_song_raises_not_found(backend):
    with pytest.raises(NotFoundError) as exc:
        await toggle_like(backend, "user-1", 999)
    assert exc.value.message == "Song not found"
    assert backend.method_calls() == ["get_song"]


async def test_exactly_one_write_per_toggle(backend):
    await toggle_like(backend, "user-1", 42)
    assert backend.method_calls() == [
        "get_song", "find_like", "insert_like", "count_likes",
    ]
    backend.calls.clear()
    await toggle_like(backend, "user-1", 42)
    assert backend.method_calls() == [
        "get_song", "find_like", "delete_like", "count_likes",
    ]


async def test_lookup_failure_propagates(backend):
    backend.fail["find_like"] = "relation \"likes\" does not exist"
    with pytest.raises(BackendError):
        await toggle_like(backend, "user-1", 42)
    assert "insert_like" not in backend.method_calls()
