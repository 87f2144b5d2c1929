from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import urlparse

from dotenv import load_dotenv


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    timeout_seconds: float = 10.0
    retries: int = 2
    retry_backoff_seconds: float = 0.3
    verify_ssl: bool = True
    featured_limit: int = 6

    @property
    def normalized_env(self) -> str:
        return self.env_name.lower().strip()


# name -> (type, default, lowest accepted value, whether the bound is inclusive)
_NUMERIC_SETTINGS: dict[str, tuple[type, str, float, bool]] = {
    "ESSENCE_TIMEOUT_SECONDS": (float, "10", 0, False),
    "ESSENCE_RETRIES": (int, "2", 0, True),
    "ESSENCE_RETRY_BACKOFF_SECONDS": (float, "0.3", 0, True),
    "ESSENCE_FEATURED_LIMIT": (int, "6", 0, True),
}


def _numeric(name: str) -> float | int:
    kind, default, lowest, inclusive = _NUMERIC_SETTINGS[name]
    raw = (os.getenv(name) or default).strip()
    try:
        value = kind(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be {'an integer' if kind is int else 'a number'}, got {raw!r}") from exc
    if value < lowest or (value == lowest and not inclusive):
        bound = f">= {lowest}" if inclusive else f"> {lowest}"
        raise ConfigError(f"{name} must be {bound}, got {value}")
    return value


def _base_url(env_key: str) -> str:
    url = (
        (os.getenv(f"ESSENCE_API_BASE_URL_{env_key}") or "").strip()
        or (os.getenv("ESSENCE_API_BASE_URL") or "").strip()
    )
    if not url:
        raise ConfigError(f"ESSENCE_API_BASE_URL (or ESSENCE_API_BASE_URL_{env_key}) is required")
    parsed = urlparse(url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ConfigError(f"ESSENCE_API_BASE_URL must be an http(s) URL with a host, got {url!r}")
    return url.rstrip("/")


def load_config(env_file: str | None = None) -> ClientConfig:
    """Build the client config from ``ESSENCE_*`` variables.

    ``env_file`` (or a discovered ``.env``) fills in variables that are not
    already set. ``ESSENCE_API_BASE_URL_<ENV>`` wins over the generic base URL
    for the active ``ESSENCE_ENV``.
    """
    load_dotenv(env_file)

    env_name = (os.getenv("ESSENCE_ENV") or "dev").strip()
    verify_raw = os.getenv("ESSENCE_VERIFY_SSL")

    return ClientConfig(
        env_name=env_name,
        api_base_url=_base_url(env_name.upper()),
        timeout_seconds=float(_numeric("ESSENCE_TIMEOUT_SECONDS")),
        retries=int(_numeric("ESSENCE_RETRIES")),
        retry_backoff_seconds=float(_numeric("ESSENCE_RETRY_BACKOFF_SECONDS")),
        verify_ssl=True if verify_raw is None else verify_raw.strip().lower() not in {"0", "false", "no", "off"},
        featured_limit=int(_numeric("ESSENCE_FEATURED_LIMIT")),
    )
