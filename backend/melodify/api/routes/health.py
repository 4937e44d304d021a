"""Health & Readiness Probes: root liveness message and backend readiness.

Invariants:
    - GET / always returns 200 if the process is up (liveness)
    - GET /health/ready returns 503 if the backend is unreachable (readiness)
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from melodify.api.dependencies import get_backend
from melodify.core.repository_protocols import MusicBackend

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def root():
    """Basic liveness probe."""
    return {"message": "Melodify API running 🚀"}


@router.get("/health/ready")
async def readiness_check(backend: MusicBackend = Depends(get_backend)):
    """Readiness probe: includes backend connectivity."""
    if not await backend.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "backend_unavailable"},
        )
    return {"status": "ready", "checks": {"backend": "healthy"}}
