from __future__ import annotations

from dataclasses import dataclass

from pydantic import ValidationError as PydanticValidationError

from .auth_store import AuthStore, SessionBackend
from .logging_utils import get_logger
from .models import Identity, SessionData

logger = get_logger(__name__)


@dataclass
class SessionStore:
    """Holds at most one identity/token pair.

    Reads observe both halves or neither: a persisted record missing one of
    them, or one that no longer validates, is cleared on read.
    """

    backend: SessionBackend | None = None

    def __post_init__(self) -> None:
        self.backend = self.backend or AuthStore()

    def _read(self) -> SessionData | None:
        record = self.backend.load()
        if record is None:
            return None
        token = record.get("token")
        user = record.get("user")
        if not token or not user:
            logger.warning("discarding partial session record")
            self.backend.clear()
            return None
        try:
            return SessionData(token=token, identity=Identity.model_validate(user))
        except PydanticValidationError:
            logger.warning("discarding unreadable session record")
            self.backend.clear()
            return None

    def get_current_identity(self) -> Identity | None:
        session = self._read()
        return session.identity if session else None

    def get_token(self) -> str | None:
        session = self._read()
        return session.token if session else None

    def get_session(self) -> SessionData | None:
        return self._read()

    def is_authenticated(self) -> bool:
        return self._read() is not None

    def set_session(self, identity: Identity, token: str) -> None:
        if not token:
            raise ValueError("token must not be empty")
        self.backend.save(
            {
                "token": token,
                "user": identity.model_dump(mode="json", by_alias=True),
            }
        )

    def clear_session(self) -> None:
        self.backend.clear()
