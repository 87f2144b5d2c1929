from __future__ import annotations

import pytest
import requests
import responses

from essence_client_sdk.exceptions import InvalidCredentialsError, ServerError, TransportError
from essence_client_sdk.http_client import HttpClient

from conftest import BASE_URL


@responses.activate
def test_get_retries_server_errors_then_succeeds(http: HttpClient) -> None:
    responses.add(responses.GET, f"{BASE_URL}/categories", json={"message": "down"}, status=502)
    responses.add(responses.GET, f"{BASE_URL}/categories", json=[{"_id": "c1", "name": "Perfumes"}], status=200)

    payload = http.request("GET", "/categories", module="catalog", operation="list_categories")

    assert payload == [{"_id": "c1", "name": "Perfumes"}]
    assert len(responses.calls) == 2
    assert http.last_operation is not None
    assert http.last_operation.result == "success"


@responses.activate
def test_post_is_never_retried(http: HttpClient) -> None:
    responses.add(responses.POST, f"{BASE_URL}/auth/login", json={"message": "boom"}, status=500)

    with pytest.raises(ServerError):
        http.request("POST", "/auth/login", json_body={"email": "a@b.c", "password": "x"})

    assert len(responses.calls) == 1


@responses.activate
def test_transport_failure_maps_to_network_error(http: HttpClient) -> None:
    responses.add(responses.GET, f"{BASE_URL}/products", body=requests.exceptions.ConnectionError("refused"))
    responses.add(responses.GET, f"{BASE_URL}/products", body=requests.exceptions.ConnectionError("refused"))

    with pytest.raises(TransportError) as excinfo:
        http.request("GET", "/products")

    assert excinfo.value.code == "NETWORK_ERROR"
    assert excinfo.value.details == {"type": "ConnectionError"}


@responses.activate
def test_http_errors_are_mapped(http: HttpClient) -> None:
    responses.add(responses.POST, f"{BASE_URL}/auth/login", json={"message": "Credenciales inválidas"}, status=401)

    with pytest.raises(InvalidCredentialsError) as excinfo:
        http.request("POST", "/auth/login", json_body={})

    assert excinfo.value.message == "Credenciales inválidas"


@responses.activate
def test_non_json_error_body_keeps_text(http: HttpClient) -> None:
    responses.add(responses.GET, f"{BASE_URL}/products", body="Bad Gateway", status=502)
    responses.add(responses.GET, f"{BASE_URL}/products", body="Bad Gateway", status=502)

    with pytest.raises(ServerError) as excinfo:
        http.request("GET", "/products")

    assert excinfo.value.message == "Bad Gateway"


@responses.activate
def test_context_switch_during_request_cancels_result(http: HttpClient) -> None:
    def callback(request):
        http.switch_context("screen.home")
        return (200, {}, "[]")

    responses.add_callback(responses.GET, f"{BASE_URL}/products", callback=callback)

    with pytest.raises(TransportError) as excinfo:
        http.request("GET", "/products", context_key="screen.home")

    assert excinfo.value.code == "REQUEST_CANCELLED"
    assert http.last_operation is not None
    assert http.last_operation.result == "cancelled"


def test_stale_context_is_cancelled_before_dispatch(http: HttpClient) -> None:
    version = http.get_context_version("screen.home")
    http.switch_context("screen.home")

    with pytest.raises(TransportError) as excinfo:
        http.request("GET", "/products", context_key="screen.home", context_version=version)

    assert excinfo.value.code == "REQUEST_CANCELLED"
