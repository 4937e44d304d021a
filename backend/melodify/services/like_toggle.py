"""Like Toggle: flips the (user, song) like and reports the new count.

Invariants:
    - Song must exist (NotFoundError otherwise) before any like is read or written
    - Exactly one write per call: insert when absent, delete when present
    - likes_count is recounted AFTER the write with an exact count query
    - Read-then-write, no transaction: two concurrent toggles may race (accepted)
"""

import logging

from melodify.core.domain_types import SongId, UserId
from melodify.core.errors import NotFoundError
from melodify.core.repository_protocols import MusicBackend

logger = logging.getLogger(__name__)


async def toggle_like(
    backend: MusicBackend, user_id: UserId, song_id: SongId,
) -> dict:
    """Like the song if the user has not, unlike it if they have."""
    song = await backend.get_song(song_id)
    if song is None:
        raise NotFoundError("Song not found")

    existing = await backend.find_like(user_id, song_id)
    if existing is None:
        await backend.insert_like(user_id, song_id)
        liked = True
    else:
        await backend.delete_like(user_id, song_id)
        liked = False

    likes_count = await backend.count_likes(song_id)
    logger.info(
        f"Like toggled to {liked}",
        extra={"user_id": user_id, "song_id": song_id},
    )
    return {
        "message": "Song liked" if liked else "Song unliked",
        "user": user_id,
        "song": song.get("title"),
        "liked": liked,
        "likes_count": likes_count,
    }
