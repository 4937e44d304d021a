"""Auth: signup, verification resend, login, session and logout.

Invariants:
    - Credentials are forwarded to the identity provider; nothing is stored here
    - Provider rejections surface as 400 with the provider's message
    - /auth/session and /auth/logout require a bearer token

Design Decisions:
    - Logout revokes only the presented token's session, not every session
      of the user
"""

import logging

from fastapi import APIRouter, Depends

from melodify.api.dependencies import get_backend, get_current_user
from melodify.core.domain_types import AuthenticatedUser
from melodify.core.errors import BadRequestError
from melodify.core.repository_protocols import MusicBackend
from melodify.core.require_fields import find_missing_fields
from melodify.schemas.auth import (
    LoginRequest,
    ResendVerificationRequest,
    SignupRequest,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


def _require_credentials(body: SignupRequest | LoginRequest) -> None:
    missing = find_missing_fields(body.model_dump(), ("email", "password"))
    if missing:
        raise BadRequestError("Email and password are required", missing)


@router.post("/signup")
async def signup(
    body: SignupRequest, backend: MusicBackend = Depends(get_backend),
):
    """Create an account; the provider emails a verification link."""
    _require_credentials(body)
    user = await backend.sign_up(body.email, body.password, body.username)
    logger.info("User signed up", extra={"user_id": user.get("id")})
    return {
        "message": "Signup successful. Please check your email to verify your account.",
        "user": user,
    }


@router.post("/resend-verification")
async def resend_verification(
    body: ResendVerificationRequest,
    backend: MusicBackend = Depends(get_backend),
):
    if not body.email:
        raise BadRequestError("Email is required", ["email"])
    await backend.resend_verification(body.email)
    return {"message": "Verification email resent"}


@router.post("/login")
async def login(
    body: LoginRequest, backend: MusicBackend = Depends(get_backend),
):
    _require_credentials(body)
    session, user = await backend.sign_in(body.email, body.password)
    logger.info("User logged in", extra={"user_id": user.get("id")})
    return {"message": "Login successful", "session": session, "user": user}


@router.get("/session")
async def current_session(user: AuthenticatedUser = Depends(get_current_user)):
    return {"user": user.record}


@router.post("/logout")
async def logout(
    user: AuthenticatedUser = Depends(get_current_user),
    backend: MusicBackend = Depends(get_backend),
):
    await backend.sign_out(user.token)
    logger.info("User logged out", extra={"user_id": user.id})
    return {"message": "Logged out successfully"}
