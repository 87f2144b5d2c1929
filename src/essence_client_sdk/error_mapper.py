from __future__ import annotations

from typing import Mapping

from .exceptions import (
    ApiError,
    ForbiddenError,
    InvalidCredentialsError,
    NotFoundError,
    ServerError,
    ValidationError,
)


def map_error(status_code: int, payload: Mapping[str, object] | None) -> ApiError:
    payload = payload or {}
    code = str(payload.get("code") or f"HTTP_{status_code}")
    # empty when absent; callers apply their own fallback text
    message = str(payload.get("message") or "")
    details = payload.get("details")
    mapped: type[ApiError]
    if status_code == 401:
        mapped = InvalidCredentialsError
    elif status_code == 403:
        mapped = ForbiddenError
    elif status_code == 404:
        mapped = NotFoundError
    elif status_code in {400, 422}:
        mapped = ValidationError
    elif status_code >= 500:
        mapped = ServerError
    else:
        mapped = ApiError
    return mapped(
        code=code,
        message=message,
        details=details,
        status_code=status_code,
        raw_payload=dict(payload),
    )
