"""Song Schemas: song metadata as accepted by POST /songs.

Invariants:
    - All fields parse as optional; presence of required ones is checked by
      the route (400 with one combined message, never a per-field 422)
    - to_row() omits unset optional fields so backend defaults apply
"""

from pydantic import BaseModel

REQUIRED_SONG_FIELDS = ("title", "artist", "audio_url", "cover_url")


class SongCreate(BaseModel):
    """Metadata for a song whose files were already uploaded."""
    title: str | None = None
    artist: str | None = None
    album: str | None = None
    genre: str | None = None
    audio_url: str | None = None
    cover_url: str | None = None
    reel_audio_url: str | None = None
    lyrics: str | None = None

    def to_row(self) -> dict:
        return self.model_dump(exclude_none=True)
