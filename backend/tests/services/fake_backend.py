"""In-memory MusicBackend for route and service tests.

Usage:
    backend = FakeBackend()
    song = backend.add_song(title="Intro")
    backend.add_user("token-1", id="user-1", email="u@x.com")
    backend.fail["insert_song"] = "permission denied"   # raise BackendError

Every protocol call is appended to `backend.calls` as (method, args).
"""

from datetime import datetime, timedelta, timezone

from melodify.core.errors import AuthProviderError, BackendError

_EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)

VALID_TOKEN = "valid-token"


class FakeBackend:
    def __init__(self):
        self.songs: list[dict] = []
        self.likes: list[dict] = []
        self.playlists: list[dict] = []
        self.playlist_songs: list[dict] = []
        self.objects: dict[tuple[str, str], dict] = {}
        self.users: dict[str, dict] = {}          # token → user record
        self.accounts: dict[str, dict] = {}       # email → {password, user}
        self.revoked: list[str] = []
        self.verification_emails: list[str] = []
        self.fail: dict[str, str] = {}
        self.healthy = True
        self.calls: list[tuple[str, tuple]] = []
        self._ids = 0
        self._ticks = 0

    # ─── helpers ─────────────────────────────────────────────────

    def _next_id(self) -> int:
        self._ids += 1
        return self._ids

    def _now(self) -> str:
        self._ticks += 1
        return (_EPOCH + timedelta(seconds=self._ticks)).isoformat()

    def _record(self, method: str, *args):
        self.calls.append((method, args))
        if method in self.fail:
            raise BackendError(self.fail[method], method)

    def add_song(self, **fields) -> dict:
        song = {
            "id": fields.pop("id", None) or self._next_id(),
            "title": "Untitled", "artist": "Unknown",
            "audio_url": "https://storage.test/songs/a.mp3",
            "cover_url": "https://storage.test/covers/a.png",
            **fields,
        }
        self.songs.append(song)
        return song

    def add_user(self, token: str, **fields) -> dict:
        user = {"id": "user-1", "email": "listener@example.com",
                "user_metadata": {}, **fields}
        self.users[token] = user
        return user

    def method_calls(self) -> list[str]:
        return [name for name, _ in self.calls]

    # ─── songs ───────────────────────────────────────────────────

    async def list_songs(self):
        self._record("list_songs")
        return sorted(self.songs, key=lambda s: s["id"], reverse=True)

    async def get_song(self, song_id):
        self._record("get_song", song_id)
        return next((s for s in self.songs if s["id"] == song_id), None)

    async def insert_song(self, song):
        self._record("insert_song", song)
        return self.add_song(**song)

    # ─── likes ───────────────────────────────────────────────────

    async def find_like(self, user_id, song_id):
        self._record("find_like", user_id, song_id)
        return next(
            (like for like in self.likes
             if like["user_id"] == user_id and like["song_id"] == song_id),
            None,
        )

    async def insert_like(self, user_id, song_id):
        self._record("insert_like", user_id, song_id)
        like = {"user_id": user_id, "song_id": song_id, "created_at": self._now()}
        self.likes.append(like)
        return like

    async def delete_like(self, user_id, song_id):
        self._record("delete_like", user_id, song_id)
        self.likes = [
            like for like in self.likes
            if not (like["user_id"] == user_id and like["song_id"] == song_id)
        ]

    async def count_likes(self, song_id):
        self._record("count_likes", song_id)
        return sum(1 for like in self.likes if like["song_id"] == song_id)

    async def list_user_likes(self, user_id):
        self._record("list_user_likes", user_id)
        songs = {s["id"]: s for s in self.songs}
        rows = [
            {**like, "songs_metadata": songs.get(like["song_id"])}
            for like in self.likes if like["user_id"] == user_id
        ]
        return sorted(rows, key=lambda r: r["created_at"], reverse=True)

    # ─── playlists ───────────────────────────────────────────────

    async def insert_playlist(self, user_id, name):
        self._record("insert_playlist", user_id, name)
        playlist = {"id": self._next_id(), "name": name, "user_id": user_id,
                    "created_at": self._now()}
        self.playlists.append(playlist)
        return playlist

    async def insert_playlist_song(self, playlist_id, song_id):
        self._record("insert_playlist_song", playlist_id, song_id)
        entry = {"id": self._next_id(), "playlist_id": playlist_id,
                 "song_id": song_id}
        self.playlist_songs.append(entry)
        return entry

    async def list_user_playlists(self, user_id):
        self._record("list_user_playlists", user_id)
        songs = {s["id"]: s for s in self.songs}
        result = []
        for playlist in self.playlists:
            if playlist["user_id"] != user_id:
                continue
            entries = [
                {**e, "songs_metadata": songs.get(e["song_id"])}
                for e in self.playlist_songs if e["playlist_id"] == playlist["id"]
            ]
            result.append({**playlist, "playlist_songs": entries})
        return sorted(result, key=lambda p: p["created_at"], reverse=True)

    # ─── storage ─────────────────────────────────────────────────

    async def upload_object(self, bucket, key, content, content_type):
        self._record("upload_object", bucket, key, content, content_type)
        self.objects[(bucket, key)] = {
            "content": content, "content_type": content_type,
        }

    async def public_url(self, bucket, key):
        self._record("public_url", bucket, key)
        return f"https://storage.test/{bucket}/{key}"

    # ─── identity provider ───────────────────────────────────────

    async def sign_up(self, email, password, username):
        self._record("sign_up", email, password, username)
        if email in self.accounts:
            raise AuthProviderError("User already registered")
        user = {"id": f"user-{self._next_id()}", "email": email,
                "user_metadata": {"username": username} if username else {}}
        self.accounts[email] = {"password": password, "user": user}
        return user

    async def resend_verification(self, email):
        self._record("resend_verification", email)
        self.verification_emails.append(email)

    async def sign_in(self, email, password):
        self._record("sign_in", email, password)
        account = self.accounts.get(email)
        if account is None or account["password"] != password:
            raise AuthProviderError("Invalid login credentials")
        token = f"token-{account['user']['id']}"
        self.users[token] = account["user"]
        session = {"access_token": token, "token_type": "bearer",
                   "expires_in": 3600}
        return session, account["user"]

    async def get_user(self, token):
        self._record("get_user", token)
        if token in self.revoked:
            return None
        return self.users.get(token)

    async def sign_out(self, token):
        self._record("sign_out", token)
        self.revoked.append(token)

    async def health_check(self):
        self._record("health_check")
        return self.healthy
