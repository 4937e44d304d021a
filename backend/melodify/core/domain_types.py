"""Domain Types: identity types, media kinds and the authenticated caller.

Invariants:
    - Song and playlist ids are assigned by the backend (integers)
    - User ids are identity-provider UUID strings
    - AuthenticatedUser never exposes the raw token in repr/logs
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NewType


# ─── Identity Types ──────────────────────────────────────────────

SongId = NewType("SongId", int)
PlaylistId = NewType("PlaylistId", int)
UserId = NewType("UserId", str)


# ─── Enums ───────────────────────────────────────────────────────

class MediaKind(str, Enum):
    """Uploadable media: value is the object-key prefix."""
    AUDIO = "song"
    REEL_AUDIO = "reel"
    COVER = "cover"


# ─── Caller ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class AuthenticatedUser:
    """User resolved from a bearer token by the identity provider."""
    id: UserId
    email: str | None
    token: str = field(default="", repr=False)
    record: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_record(cls, record: dict[str, Any], token: str) -> "AuthenticatedUser":
        return cls(
            id=UserId(record["id"]),
            email=record.get("email"),
            token=token,
            record=record,
        )
