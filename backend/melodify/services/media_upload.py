"""Media Upload: buffers an uploaded file and stores it in a bucket.

Invariants:
    - The whole file is read into memory before the storage call (no streaming)
    - Objects are written with upsert, under build_object_key()'s name
    - Returns the object's public URL
"""

import logging

from fastapi import UploadFile

from melodify.core.domain_types import MediaKind
from melodify.core.object_naming import build_object_key, current_epoch_millis
from melodify.core.repository_protocols import MusicBackend

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


async def store_media(
    backend: MusicBackend, upload: UploadFile, kind: MediaKind, bucket: str,
) -> str:
    """Upload `upload` to `bucket` and return its public URL."""
    content = await upload.read()
    key = build_object_key(kind.value, upload.filename, current_epoch_millis())
    await backend.upload_object(
        bucket, key, content, upload.content_type or DEFAULT_CONTENT_TYPE,
    )
    url = await backend.public_url(bucket, key)
    logger.info(
        f"Stored {kind.name.lower()} upload ({len(content)} bytes)",
        extra={"bucket": bucket, "object_key": key},
    )
    return url
