"""Songs: catalogue listing and metadata creation.

Invariants:
    - GET /songs returns every row, newest (highest id) first, no pagination
    - POST /songs requires title, artist, audio_url, cover_url; nothing is
      inserted when any is missing
"""

import logging

from fastapi import APIRouter, Depends, status

from melodify.api.dependencies import get_backend
from melodify.core.errors import BadRequestError
from melodify.core.repository_protocols import MusicBackend
from melodify.core.require_fields import find_missing_fields
from melodify.schemas.song import REQUIRED_SONG_FIELDS, SongCreate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/songs", tags=["songs"])


@router.get("")
async def list_songs(backend: MusicBackend = Depends(get_backend)):
    """List all songs, newest first."""
    return await backend.list_songs()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_song(
    body: SongCreate, backend: MusicBackend = Depends(get_backend),
):
    """Insert song metadata; files are uploaded beforehand via /upload/*."""
    row = body.to_row()
    missing = find_missing_fields(row, REQUIRED_SONG_FIELDS)
    if missing:
        raise BadRequestError(
            "Title, Artist, audio_url, and cover_url are required", missing,
        )
    song = await backend.insert_song(row)
    logger.info(
        f"Song created: {song.get('title')}", extra={"song_id": song.get("id")},
    )
    return {"message": "Song uploaded successfully", "song": song}
