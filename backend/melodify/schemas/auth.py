"""Auth Schemas: credentials forwarded to the identity provider."""

from pydantic import BaseModel, field_validator


class _EmailBody(BaseModel):
    email: str | None = None

    @field_validator("email")
    @classmethod
    def strip_email(cls, v: str | None) -> str | None:
        return v.strip() if isinstance(v, str) else v


class SignupRequest(_EmailBody):
    password: str | None = None
    username: str | None = None


class LoginRequest(_EmailBody):
    password: str | None = None


class ResendVerificationRequest(_EmailBody):
    pass
