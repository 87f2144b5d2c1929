from __future__ import annotations

from dataclasses import dataclass

DEFAULT_LOGIN_ERROR = "Error al iniciar sesión"


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: object | None = None
    status_code: int = 0
    raw_payload: object | None = None

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.code}: {self.message}"


class InvalidCredentialsError(ApiError):
    """Backend rejected the credentials or the bearer token."""


class ForbiddenError(ApiError):
    pass


class NotFoundError(ApiError):
    """Lookup miss, either remote (404) or local (category slug)."""


class ValidationError(ApiError):
    pass


class ServerError(ApiError):
    """5xx server-side failures."""


class TransportError(ApiError):
    """No HTTP response was obtained, or the request was cancelled."""


NetworkError = TransportError


class RoleMismatchError(ApiError):
    """Credentials were valid but the role does not belong to the chosen portal."""


def to_user_message(error: Exception, fallback: str = DEFAULT_LOGIN_ERROR) -> str:
    if isinstance(error, TransportError):
        return fallback
    if isinstance(error, ApiError):
        message = (error.message or "").strip()
        return message or fallback
    return fallback
