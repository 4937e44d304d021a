"""Playlist Schemas: playlist creation and song-add bodies."""

from pydantic import BaseModel, field_validator


class PlaylistCreate(BaseModel):
    name: str | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        return v.strip() if isinstance(v, str) else v


class PlaylistSongAdd(BaseModel):
    song_id: int | None = None
