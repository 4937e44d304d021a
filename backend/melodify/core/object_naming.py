"""Object Naming: storage keys for uploaded media.

Invariants:
    - Key shape is <prefix>_<epochMillis><ext>, ext taken from the client filename
    - build_object_key is PURE: the clock is read by the caller
    - Same-millisecond uploads with the same prefix collide (accepted, upsert overwrites)
"""

import time
from pathlib import PurePosixPath


def build_object_key(prefix: str, filename: str | None, epoch_millis: int) -> str:
    """Build the storage key for an upload."""
    extension = PurePosixPath(filename or "").suffix
    return f"{prefix}_{epoch_millis}{extension}"


def current_epoch_millis() -> int:
    return time.time_ns() // 1_000_000
