"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - Backend URL and key come from environment variables (SUPABASE_URL, SUPABASE_KEY)
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Table and bucket names are settings so a staging project can use its own names
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Managed backend
    supabase_url: str = "http://localhost:54321"
    supabase_key: str = "supabase-anon-placeholder"

    @field_validator("supabase_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """The SDK appends /rest/v1 etc. itself."""
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    # Tables
    songs_table: str = "songs_metadata"
    likes_table: str = "likes"
    playlists_table: str = "playlists"
    playlist_songs_table: str = "playlist_songs"

    # Storage buckets
    audio_bucket: str = "songs"
    reel_audio_bucket: str = "reels"
    cover_bucket: str = "covers"

    # HTTP
    host: str = "0.0.0.0"
    port: int = 5000
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
