"""Uploads: audio, reel audio and cover files into storage buckets.

Invariants:
    - Missing file field → 400 before any storage call
    - Audio and reel audio answer {audio_url}; covers answer {cover_url}
"""

from fastapi import APIRouter, Depends, File, UploadFile

from melodify.api.dependencies import get_backend
from melodify.config import Settings, get_settings
from melodify.core.domain_types import MediaKind
from melodify.core.errors import BadRequestError
from melodify.core.repository_protocols import MusicBackend
from melodify.services.media_upload import store_media

router = APIRouter(prefix="/upload", tags=["uploads"])


@router.post("/audio")
async def upload_audio(
    audio: UploadFile | None = File(None),
    backend: MusicBackend = Depends(get_backend),
    settings: Settings = Depends(get_settings),
):
    if audio is None:
        raise BadRequestError("No audio file uploaded", ["audio"])
    url = await store_media(backend, audio, MediaKind.AUDIO, settings.audio_bucket)
    return {"audio_url": url}


@router.post("/reel_audio")
async def upload_reel_audio(
    audio: UploadFile | None = File(None),
    backend: MusicBackend = Depends(get_backend),
    settings: Settings = Depends(get_settings),
):
    """Short preview clip for the reels feed; stored in its own bucket."""
    if audio is None:
        raise BadRequestError("No audio file uploaded", ["audio"])
    url = await store_media(
        backend, audio, MediaKind.REEL_AUDIO, settings.reel_audio_bucket,
    )
    return {"audio_url": url}


@router.post("/cover")
async def upload_cover(
    cover: UploadFile | None = File(None),
    backend: MusicBackend = Depends(get_backend),
    settings: Settings = Depends(get_settings),
):
    if cover is None:
        raise BadRequestError("No cover file uploaded", ["cover"])
    url = await store_media(backend, cover, MediaKind.COVER, settings.cover_bucket)
    return {"cover_url": url}
