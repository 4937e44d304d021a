"""Boundary Protocol: the contract between the API layer and the managed backend.

Invariants:
    - Routes and services reach tables, storage and auth ONLY through MusicBackend
    - Rows cross the boundary as plain dicts (JSON-ready)
    - Implementations raise core.errors types, never SDK exceptions
    - "No row" lookups return None; they are not errors

Design Decisions:
    - Protocol over ABC: structural subtyping, the test fake needs no inheritance
    - One protocol for tables, storage and auth: the backend is a single service
"""

from typing import Any, Protocol

from melodify.core.domain_types import PlaylistId, SongId, UserId

Row = dict[str, Any]


class MusicBackend(Protocol):
    """Contract for the managed backend: implemented by infrastructure."""

    # songs
    async def list_songs(self) -> list[Row]: ...
    async def get_song(self, song_id: SongId) -> Row | None: ...
    async def insert_song(self, song: Row) -> Row: ...

    # likes
    async def find_like(self, user_id: UserId, song_id: SongId) -> Row | None: ...
    async def insert_like(self, user_id: UserId, song_id: SongId) -> Row: ...
    async def delete_like(self, user_id: UserId, song_id: SongId) -> None: ...
    async def count_likes(self, song_id: SongId) -> int: ...
    async def list_user_likes(self, user_id: UserId) -> list[Row]: ...

    # playlists
    async def insert_playlist(self, user_id: UserId, name: str) -> Row: ...
    async def insert_playlist_song(
        self, playlist_id: PlaylistId, song_id: SongId,
    ) -> Row: ...
    async def list_user_playlists(self, user_id: UserId) -> list[Row]: ...

    # storage
    async def upload_object(
        self, bucket: str, key: str, content: bytes, content_type: str,
    ) -> None: ...
    async def public_url(self, bucket: str, key: str) -> str: ...

    # identity provider
    async def sign_up(
        self, email: str, password: str, username: str | None,
    ) -> Row: ...
    async def resend_verification(self, email: str) -> None: ...
    async def sign_in(self, email: str, password: str) -> tuple[Row, Row]: ...
    async def get_user(self, token: str) -> Row | None: ...
    async def sign_out(self, token: str) -> None: ...

    async def health_check(self) -> bool: ...
