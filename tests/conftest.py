from __future__ import annotations

import pytest

from essence_client_sdk.auth_store import MemoryAuthStore
from essence_client_sdk.config import ClientConfig
from essence_client_sdk.http_client import HttpClient
from essence_client_sdk.models import Identity, Role
from essence_client_sdk.session import SessionStore

BASE_URL = "https://api.example.com/api"


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(
        env_name="test",
        api_base_url=BASE_URL,
        retries=1,
        retry_backoff_seconds=0,
        featured_limit=6,
    )


@pytest.fixture
def http(config: ClientConfig) -> HttpClient:
    return HttpClient(config)


@pytest.fixture
def store() -> SessionStore:
    return SessionStore(backend=MemoryAuthStore())


@pytest.fixture
def admin() -> Identity:
    return Identity(id="u-admin", name="Laura", email="laura@essence.test", role=Role.ADMIN)


@pytest.fixture
def distributor() -> Identity:
    return Identity(id="u-dist", name="Carlos", email="carlos@essence.test", role=Role.DISTRIBUTOR)
