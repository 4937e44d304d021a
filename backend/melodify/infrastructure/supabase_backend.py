"""Supabase Backend: MusicBackend implementation over the async Supabase SDK.

Invariants:
    - Every SDK call goes through _remote_call(), which maps SDK exceptions:
        PostgrestAPIError / StorageException / transport errors → BackendError (500)
        AuthRetryableError, AuthError with a 5xx or no status → BackendError (500)
        AuthError with a 4xx status → AuthProviderError (400)
    - Remote messages are passed through verbatim
    - get_user() returns None only for tokens the provider rejects (4xx)
    - No retries: a failed call surfaces immediately

Design Decisions:
    - Two SDK clients: auth calls (sign-in stores a session in the client) run on
      `auth_client`, so the credentials `data_client` sends never change
    - persist_session/auto_refresh_token disabled: the API holds no user sessions
    - Logout revokes only the presented token (scope="local")
"""

import inspect
import logging
from contextlib import asynccontextmanager
from typing import Any

import httpx
from supabase import (
    AsyncClient,
    AsyncClientOptions,
    AuthError,
    AuthRetryableError,
    PostgrestAPIError,
    StorageException,
    acreate_client,
)

from melodify.config import Settings
from melodify.core.domain_types import PlaylistId, SongId, UserId
from melodify.core.errors import AuthProviderError, BackendError

logger = logging.getLogger(__name__)

Row = dict[str, Any]


def _storage_message(e: StorageException) -> str:
    """StorageApiError carries .message; older storage3 raised the JSON body."""
    message = getattr(e, "message", None)
    if message:
        return str(message)
    detail = e.args[0] if e.args else None
    if isinstance(detail, dict):
        return str(detail.get("message") or detail.get("error") or detail)
    return str(e)


def _is_provider_outage(e: AuthError) -> bool:
    """5xx answers and errors with no HTTP status are failures, not rejections."""
    status = getattr(e, "status", None)
    return status is None or status >= 500


async def _close_session(resource: Any, method: str) -> None:
    """Await resource.<method>() when the SDK version provides it."""
    close = getattr(resource, method, None)
    if inspect.iscoroutinefunction(close):
        await close()


def _dump(model: Any) -> Row:
    """Serialize an SDK (pydantic) model to a JSON-ready dict."""
    if model is None:
        return {}
    return model.model_dump(mode="json")


@asynccontextmanager
async def _remote_call(operation: str):
    """Map SDK failures raised inside the block to Melodify errors."""
    try:
        yield
    except PostgrestAPIError as e:
        logger.error(
            f"Table call failed: {e.message}", extra={"operation": operation},
        )
        raise BackendError(e.message or str(e), operation)
    except StorageException as e:
        message = _storage_message(e)
        logger.error(
            f"Storage call failed: {message}", extra={"operation": operation},
        )
        raise BackendError(message, operation)
    except AuthRetryableError as e:
        logger.error(
            f"Identity provider unreachable: {e.message}",
            extra={"operation": operation},
        )
        raise BackendError(e.message, operation)
    except AuthError as e:
        if _is_provider_outage(e):
            logger.error(
                f"Identity provider failed: {e.message}",
                extra={"operation": operation},
            )
            raise BackendError(e.message, operation)
        logger.info(
            f"Identity provider rejected request: {e.message}",
            extra={"operation": operation},
        )
        raise AuthProviderError(e.message)
    except httpx.HTTPError as e:
        logger.error(
            f"Backend transport error: {e}", extra={"operation": operation},
        )
        raise BackendError(str(e) or "Backend unreachable", operation)


class SupabaseBackend:
    """Tables, storage and identity provider of one Supabase project."""

    def __init__(
        self,
        data_client: AsyncClient,
        auth_client: AsyncClient,
        settings: Settings,
    ):
        self.data = data_client
        self.auth = auth_client
        self.songs_table = settings.songs_table
        self.likes_table = settings.likes_table
        self.playlists_table = settings.playlists_table
        self.playlist_songs_table = settings.playlist_songs_table

    @classmethod
    async def connect(cls, settings: Settings) -> "SupabaseBackend":
        """Create both SDK clients for the configured project."""
        clients = []
        for _ in range(2):
            clients.append(await acreate_client(
                settings.supabase_url,
                settings.supabase_key,
                options=AsyncClientOptions(
                    persist_session=False, auto_refresh_token=False,
                ),
            ))
        logger.info(f"Supabase clients created for {settings.supabase_url}")
        return cls(clients[0], clients[1], settings)

    async def aclose(self) -> None:
        """Close the HTTP sessions held by both clients' sub-clients."""
        for client in (self.data, self.auth):
            await _close_session(client.postgrest, "aclose")
            await _close_session(client.storage, "aclose")
            await _close_session(client.auth, "close")
        logger.info("Supabase clients closed")

    # ─── songs ───────────────────────────────────────────────────

    async def list_songs(self) -> list[Row]:
        async with _remote_call("list_songs"):
            response = await (
                self.data.table(self.songs_table)
                .select("*")
                .order("id", desc=True)
                .execute()
            )
        return response.data

    async def get_song(self, song_id: SongId) -> Row | None:
        async with _remote_call("get_song"):
            response = await (
                self.data.table(self.songs_table)
                .select("*")
                .eq("id", song_id)
                .limit(1)
                .execute()
            )
        return response.data[0] if response.data else None

    async def insert_song(self, song: Row) -> Row:
        async with _remote_call("insert_song"):
            response = await (
                self.data.table(self.songs_table).insert(song).execute()
            )
        return response.data[0]

    # ─── likes ───────────────────────────────────────────────────

    async def find_like(self, user_id: UserId, song_id: SongId) -> Row | None:
        async with _remote_call("find_like"):
            response = await (
                self.data.table(self.likes_table)
                .select("*")
                .eq("user_id", user_id)
                .eq("song_id", song_id)
                .limit(1)
                .execute()
            )
        return response.data[0] if response.data else None

    async def insert_like(self, user_id: UserId, song_id: SongId) -> Row:
        async with _remote_call("insert_like"):
            response = await (
                self.data.table(self.likes_table)
                .insert({"user_id": user_id, "song_id": song_id})
                .execute()
            )
        return response.data[0]

    async def delete_like(self, user_id: UserId, song_id: SongId) -> None:
        async with _remote_call("delete_like"):
            await (
                self.data.table(self.likes_table)
                .delete()
                .eq("user_id", user_id)
                .eq("song_id", song_id)
                .execute()
            )

    async def count_likes(self, song_id: SongId) -> int:
        """Exact count; head=True so no rows are transferred."""
        async with _remote_call("count_likes"):
            response = await (
                self.data.table(self.likes_table)
                .select("*", count="exact", head=True)
                .eq("song_id", song_id)
                .execute()
            )
        return response.count or 0

    async def list_user_likes(self, user_id: UserId) -> list[Row]:
        async with _remote_call("list_user_likes"):
            response = await (
                self.data.table(self.likes_table)
                .select(f"*, {self.songs_table}(*)")
                .eq("user_id", user_id)
                .order("created_at", desc=True)
                .execute()
            )
        return response.data

    # ─── playlists ───────────────────────────────────────────────

    async def insert_playlist(self, user_id: UserId, name: str) -> Row:
        async with _remote_call("insert_playlist"):
            response = await (
                self.data.table(self.playlists_table)
                .insert({"name": name, "user_id": user_id})
                .execute()
            )
        return response.data[0]

    async def insert_playlist_song(
        self, playlist_id: PlaylistId, song_id: SongId,
    ) -> Row:
        async with _remote_call("insert_playlist_song"):
            response = await (
                self.data.table(self.playlist_songs_table)
                .insert({"playlist_id": playlist_id, "song_id": song_id})
                .execute()
            )
        return response.data[0]

    async def list_user_playlists(self, user_id: UserId) -> list[Row]:
        """Playlists newest first, entries in insertion (id) order."""
        async with _remote_call("list_user_playlists"):
            response = await (
                self.data.table(self.playlists_table)
                .select(
                    f"*, {self.playlist_songs_table}(*, {self.songs_table}(*))",
                )
                .eq("user_id", user_id)
                .order("created_at", desc=True)
                .execute()
            )
        playlists = response.data
        for playlist in playlists:
            entries = playlist.get(self.playlist_songs_table) or []
            entries.sort(key=lambda entry: entry.get("id") or 0)
            playlist[self.playlist_songs_table] = entries
        return playlists

    # ─── storage ─────────────────────────────────────────────────

    async def upload_object(
        self, bucket: str, key: str, content: bytes, content_type: str,
    ) -> None:
        async with _remote_call("upload_object"):
            await self.data.storage.from_(bucket).upload(
                path=key,
                file=content,
                file_options={"content-type": content_type, "upsert": "true"},
            )

    async def public_url(self, bucket: str, key: str) -> str:
        async with _remote_call("public_url"):
            return await self.data.storage.from_(bucket).get_public_url(key)

    # ─── identity provider ───────────────────────────────────────

    async def sign_up(
        self, email: str, password: str, username: str | None,
    ) -> Row:
        credentials: dict[str, Any] = {"email": email, "password": password}
        if username:
            credentials["options"] = {"data": {"username": username}}
        async with _remote_call("sign_up"):
            response = await self.auth.auth.sign_up(credentials)
        return _dump(response.user)

    async def resend_verification(self, email: str) -> None:
        async with _remote_call("resend_verification"):
            await self.auth.auth.resend({"type": "signup", "email": email})

    async def sign_in(self, email: str, password: str) -> tuple[Row, Row]:
        async with _remote_call("sign_in"):
            response = await self.auth.auth.sign_in_with_password(
                {"email": email, "password": password},
            )
        return _dump(response.session), _dump(response.user)

    async def get_user(self, token: str) -> Row | None:
        try:
            async with _remote_call("get_user"):
                response = await self.auth.auth.get_user(token)
        except AuthProviderError:
            return None
        if response is None or response.user is None:
            return None
        return _dump(response.user)

    async def sign_out(self, token: str) -> None:
        async with _remote_call("sign_out"):
            await self.auth.auth.admin.sign_out(token, scope="local")

    async def health_check(self) -> bool:
        """Readiness probe: one cheap table read."""
        try:
            async with _remote_call("health_check"):
                await (
                    self.data.table(self.songs_table)
                    .select("id")
                    .limit(1)
                    .execute()
                )
            return True
        except BackendError as e:
            logger.error(f"Backend health check failed: {e.message}")
            return False
