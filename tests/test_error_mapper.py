from __future__ import annotations

from essence_client_sdk.error_mapper import map_error
from essence_client_sdk.exceptions import (
    ApiError,
    DEFAULT_LOGIN_ERROR,
    ForbiddenError,
    InvalidCredentialsError,
    NotFoundError,
    ServerError,
    TransportError,
    ValidationError,
    to_user_message,
)


def test_error_mapper_classes() -> None:
    assert isinstance(map_error(401, {"message": "Credenciales inválidas"}), InvalidCredentialsError)
    assert isinstance(map_error(403, {"message": "no"}), ForbiddenError)
    assert isinstance(map_error(404, {"message": "no"}), NotFoundError)
    assert isinstance(map_error(422, {"message": "bad"}), ValidationError)
    assert isinstance(map_error(503, None), ServerError)
    assert type(map_error(418, {})) is ApiError


def test_error_mapper_keeps_backend_message_and_status() -> None:
    err = map_error(401, {"message": "Credenciales inválidas"})

    assert err.message == "Credenciales inválidas"
    assert err.status_code == 401
    assert err.code == "HTTP_401"
    assert "Credenciales inválidas" in str(err)


def test_user_message_prefers_backend_text() -> None:
    assert to_user_message(map_error(401, {"message": "Credenciales inválidas"})) == "Credenciales inválidas"


def test_user_message_falls_back_when_backend_is_silent() -> None:
    assert to_user_message(map_error(500, {})) == DEFAULT_LOGIN_ERROR
    assert to_user_message(map_error(500, {"message": "   "})) == DEFAULT_LOGIN_ERROR
    network = TransportError(code="NETWORK_ERROR", message="Connection refused")
    assert to_user_message(network) == DEFAULT_LOGIN_ERROR
    assert to_user_message(RuntimeError("boom"), fallback="otro") == "otro"
