"""Request Dependencies: backend injection and bearer-token authentication.

Invariants:
    - get_backend() reads the client built in the lifespan from app.state
    - get_current_user() raises UnauthorizedError("Missing auth token") BEFORE
      any backend call when no bearer credentials are sent
    - A token the provider rejects → UnauthorizedError("Invalid token")
    - Any other failure while resolving → BackendError (500)
"""

import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from melodify.core.domain_types import AuthenticatedUser
from melodify.core.errors import BackendError, MelodifyError, UnauthorizedError
from melodify.core.repository_protocols import MusicBackend

logger = logging.getLogger(__name__)

bearer = HTTPBearer(auto_error=False)


def get_backend(request: Request) -> MusicBackend:
    """FastAPI dependency for the shared backend client."""
    backend = getattr(request.app.state, "backend", None)
    if backend is None:
        raise RuntimeError("Backend not initialized")
    return backend


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    backend: MusicBackend = Depends(get_backend),
) -> AuthenticatedUser:
    """Resolve the bearer token to the calling user."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Missing auth token")
    token = credentials.credentials
    try:
        record = await backend.get_user(token)
    except MelodifyError:
        raise
    except Exception as e:
        logger.error(f"Token resolution failed: {e}", exc_info=True)
        raise BackendError("Failed to verify auth token", "get_user")
    if not record or not record.get("id"):
        raise UnauthorizedError("Invalid token")
    return AuthenticatedUser.from_record(record, token)
