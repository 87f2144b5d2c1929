from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from platformdirs import user_data_dir


class SessionBackend(Protocol):
    def save(self, record: dict[str, Any]) -> None: ...

    def load(self) -> dict[str, Any] | None: ...

    def clear(self) -> None: ...


@dataclass
class AuthStore:
    """File-backed session record, the local equivalent of browser storage."""

    app_name: str = "essence"
    filename: str = "session.json"
    base_dir: Path | None = None

    def _path(self) -> Path:
        base = self.base_dir or Path(user_data_dir(self.app_name, "Essence"))
        base.mkdir(parents=True, exist_ok=True)
        return base / self.filename

    def save(self, record: dict[str, Any]) -> None:
        path = self._path()
        staging = path.with_suffix(".tmp")
        staging.write_text(json.dumps(record, indent=2), encoding="utf-8")
        try:
            staging.chmod(0o600)
        except OSError:
            pass
        os.replace(staging, path)

    def load(self) -> dict[str, Any] | None:
        path = self._path()
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError):
            self.clear()
            return None
        if not isinstance(data, dict):
            self.clear()
            return None
        return data

    def clear(self) -> None:
        path = self._path()
        if path.exists():
            path.unlink()


@dataclass
class MemoryAuthStore:
    record: dict[str, Any] | None = field(default=None)

    def save(self, record: dict[str, Any]) -> None:
        self.record = dict(record)

    def load(self) -> dict[str, Any] | None:
        return dict(self.record) if self.record is not None else None

    def clear(self) -> None:
        self.record = None
