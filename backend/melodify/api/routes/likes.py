"""Likes: toggle, public per-song count, and the caller's liked songs.

Invariants:
    - toggle-like requires a bearer token and an existing song (404 otherwise)
    - likes-count is public and does not check that the song exists
    - /me/likes rows carry the full song row, newest like first
"""

from fastapi import APIRouter, Depends

from melodify.api.dependencies import get_backend, get_current_user
from melodify.core.domain_types import AuthenticatedUser, SongId
from melodify.core.repository_protocols import MusicBackend
from melodify.services.like_toggle import toggle_like

router = APIRouter(tags=["likes"])


@router.post("/songs/{song_id}/toggle-like")
async def toggle_song_like(
    song_id: int,
    user: AuthenticatedUser = Depends(get_current_user),
    backend: MusicBackend = Depends(get_backend),
):
    return await toggle_like(backend, user.id, SongId(song_id))


@router.get("/songs/{song_id}/likes-count")
async def get_likes_count(
    song_id: int, backend: MusicBackend = Depends(get_backend),
):
    return {"count": await backend.count_likes(SongId(song_id))}


@router.get("/me/likes")
async def list_my_likes(
    user: AuthenticatedUser = Depends(get_current_user),
    backend: MusicBackend = Depends(get_backend),
):
    return {"likes": await backend.list_user_likes(user.id)}
