"""Playlists: create, add songs, list the caller's playlists.

Invariants:
    - All routes require a bearer token
    - Playlists are owned by the creating user
    - Adding a song checks neither playlist ownership nor song existence
    - /me/playlists: newest playlist first, entries nested with their song rows
"""

import logging

from fastapi import APIRouter, Depends, status

from melodify.api.dependencies import get_backend, get_current_user
from melodify.core.domain_types import AuthenticatedUser, PlaylistId, SongId
from melodify.core.errors import BadRequestError
from melodify.core.repository_protocols import MusicBackend
from melodify.core.require_fields import is_blank
from melodify.schemas.playlist import PlaylistCreate, PlaylistSongAdd

logger = logging.getLogger(__name__)
router = APIRouter(tags=["playlists"])


@router.post("/playlists", status_code=status.HTTP_201_CREATED)
async def create_playlist(
    body: PlaylistCreate,
    user: AuthenticatedUser = Depends(get_current_user),
    backend: MusicBackend = Depends(get_backend),
):
    if is_blank(body.name):
        raise BadRequestError("Playlist name is required", ["name"])
    playlist = await backend.insert_playlist(user.id, body.name)
    logger.info(
        f"Playlist created: {body.name}",
        extra={"user_id": user.id, "playlist_id": playlist.get("id")},
    )
    return {"message": "Playlist created", "playlist": playlist}


@router.post("/playlists/{playlist_id}/songs", status_code=status.HTTP_201_CREATED)
async def add_song_to_playlist(
    playlist_id: int,
    body: PlaylistSongAdd,
    user: AuthenticatedUser = Depends(get_current_user),
    backend: MusicBackend = Depends(get_backend),
):
    if body.song_id is None:
        raise BadRequestError("song_id is required", ["song_id"])
    entry = await backend.insert_playlist_song(
        PlaylistId(playlist_id), SongId(body.song_id),
    )
    return {"message": "Song added to playlist", "entry": entry}


@router.get("/me/playlists")
async def list_my_playlists(
    user: AuthenticatedUser = Depends(get_current_user),
    backend: MusicBackend = Depends(get_backend),
):
    return {"playlists": await backend.list_user_playlists(user.id)}
