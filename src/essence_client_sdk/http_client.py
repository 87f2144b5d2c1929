from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any
from urllib.parse import urljoin

import requests

from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import ServerError, TransportError
from .logging_utils import get_logger

logger = get_logger(__name__)


@dataclass
class LastOperation:
    module: str
    operation: str
    duration_ms: int
    result: str


@dataclass
class HttpClient:
    config: ClientConfig
    session: requests.Session | None = None
    _context_versions: dict[str, int] | None = None
    last_operation: LastOperation | None = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()
        if self._context_versions is None:
            self._context_versions = {}

    def _build_url(self, path: str) -> str:
        base = self.config.api_base_url.rstrip("/") + "/"
        return urljoin(base, path.lstrip("/"))

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        module: str = "unknown",
        operation: str = "unknown",
        context_key: str | None = None,
        context_version: int | None = None,
    ) -> dict[str, Any] | list[Any] | None:
        if self.session is None:
            raise RuntimeError("HTTP session not initialized")
        request_headers = {"Accept": "application/json"}
        if headers:
            request_headers.update(headers)

        normalized_method = method.upper()
        url = self._build_url(path)
        # only idempotent reads are retried; a login is attempted exactly once
        attempts = self.config.retries + 1 if normalized_method in {"GET", "HEAD"} else 1

        if context_key and context_version is None:
            context_version = self.get_context_version(context_key)
        if context_key and not self._context_is_current(context_key, context_version):
            raise TransportError(
                code="REQUEST_CANCELLED",
                message="Request cancelled before dispatch",
                details={"type": "context_switched"},
            )

        started = time.monotonic()
        response: requests.Response | None = None
        for attempt in range(attempts):
            try:
                response = self.session.request(
                    method=normalized_method,
                    url=url,
                    headers=request_headers,
                    json=json_body,
                    params=params,
                    timeout=self.config.timeout_seconds,
                    verify=self.config.verify_ssl,
                )
            except requests.RequestException as exc:
                if attempt >= attempts - 1:
                    self._record_operation(module, operation, started, "network_error")
                    raise TransportError(
                        code="NETWORK_ERROR",
                        message=str(exc),
                        details={"type": type(exc).__name__},
                    ) from exc
                logger.debug("retrying %s %s after %s", normalized_method, path, type(exc).__name__)
            else:
                if response.status_code < 500 or attempt >= attempts - 1:
                    break
            time.sleep(self.config.retry_backoff_seconds * (2**attempt))

        if response is None:
            raise RuntimeError(f"HTTP request to {path} finished without a response")

        if context_key and not self._context_is_current(context_key, context_version):
            self._record_operation(module, operation, started, "cancelled")
            raise TransportError(
                code="REQUEST_CANCELLED",
                message="Request cancelled due to context switch",
                details={"type": "context_switched"},
            )

        if response.ok:
            self._record_operation(module, operation, started, "success")
            if not response.content:
                return None
            try:
                return response.json()
            except ValueError as exc:
                raise ServerError(
                    code="INVALID_JSON",
                    message="",
                    details={"content_type": response.headers.get("Content-Type")},
                    status_code=response.status_code,
                ) from exc

        try:
            payload = response.json()
        except ValueError:
            payload = {"message": response.text}
        self._record_operation(module, operation, started, "error")
        raise map_error(response.status_code, payload if isinstance(payload, dict) else {})

    def switch_context(self, context_key: str) -> int:
        new_version = self.get_context_version(context_key) + 1
        if self._context_versions is None:
            self._context_versions = {}
        self._context_versions[context_key] = new_version
        return new_version

    def get_context_version(self, context_key: str) -> int:
        if self._context_versions is None:
            self._context_versions = {}
        return self._context_versions.get(context_key, 0)

    def _record_operation(self, module: str, operation: str, started: float, result: str) -> None:
        self.last_operation = LastOperation(
            module=module,
            operation=operation,
            duration_ms=int((time.monotonic() - started) * 1000),
            result=result,
        )

    def _context_is_current(self, context_key: str, context_version: int | None) -> bool:
        if context_version is None:
            return True
        return self.get_context_version(context_key) == context_version
