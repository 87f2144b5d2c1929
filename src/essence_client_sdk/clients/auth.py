from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError
from ..models import Identity, LoginResponse
from .base import BaseClient


class AuthClient(BaseClient):
    def login(self, email: str, password: str) -> LoginResponse:
        payload = {"email": email, "password": password}
        data = self.http.request("POST", "/auth/login", json_body=payload, module="auth", operation="login")
        try:
            return LoginResponse.model_validate(data)
        except PydanticValidationError as exc:
            raise ValidationError(
                code="INVALID_LOGIN_RESPONSE",
                message="",
                details={"errors": exc.error_count()},
                status_code=200,
            ) from exc

    def logout(self) -> None:
        self._request("POST", "/auth/logout", module="auth", operation="logout")

    def profile(self) -> Identity:
        data = self._request("GET", "/auth/profile", module="auth", operation="profile")
        return Identity.model_validate(data)
