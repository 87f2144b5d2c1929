from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .access_gate import LOGIN_PATH, dashboard_for
from .clients.auth import AuthClient
from .exceptions import ApiError, RoleMismatchError, to_user_message
from .logging_utils import get_logger, log_action
from .models import Identity, Role
from .session import SessionStore

logger = get_logger(__name__)

MISSING_CREDENTIALS_MESSAGE = "Email y contraseña son obligatorios"
ROLE_MISMATCH_MESSAGES: dict[Role, str] = {
    Role.ADMIN: "No tienes permisos de administrador",
    Role.DISTRIBUTOR: "No tienes permisos de distribuidor",
}


class LoginState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    SUBMITTING = "submitting"
    AUTHENTICATED = "authenticated"
    FAILED = "failed"


@dataclass(frozen=True)
class LoginOutcome:
    state: LoginState
    identity: Identity | None = None
    error: str | None = None
    target: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.state is LoginState.AUTHENTICATED


def end_session(auth_client: AuthClient, session_store: SessionStore, token: str | None = None) -> bool:
    """Log out remotely when possible, then always clear the local session.

    Returns whether the backend acknowledged the logout.
    """
    token = token or session_store.get_token()
    acknowledged = False
    if token:
        try:
            AuthClient(http=auth_client.http, access_token=token).logout()
            acknowledged = True
        except ApiError as exc:
            logger.warning("remote logout failed: %s", exc.code)
    session_store.clear_session()
    return acknowledged


class LoginFlow:
    """Credential exchange for one login screen.

    ``expected_role`` pins the flow to a portal; with ``None`` the role
    returned by the backend decides the destination.
    """

    def __init__(
        self,
        auth_client: AuthClient,
        session_store: SessionStore,
        navigate: Callable[[str], None],
        expected_role: Role | None = None,
    ) -> None:
        self.auth_client = auth_client
        self.session_store = session_store
        self.navigate = navigate
        self.expected_role = expected_role
        self.state = LoginState.UNAUTHENTICATED
        self.identity: Identity | None = None
        self.error: str | None = None

    @property
    def module(self) -> str:
        return f"login.{self.expected_role.value}" if self.expected_role else "login"

    def check_existing_session(self) -> LoginOutcome:
        identity = self.session_store.get_current_identity()
        if identity is None:
            return self._outcome()
        if self.expected_role is not None and identity.role is not self.expected_role:
            self.session_store.clear_session()
            return self._fail(ROLE_MISMATCH_MESSAGES[self.expected_role], identity.role.value)
        return self._succeed(identity)

    def submit(self, email: str, password: str) -> LoginOutcome:
        email = (email or "").strip()
        if not email or not password:
            self.error = MISSING_CREDENTIALS_MESSAGE
            return self._outcome()

        self.state = LoginState.SUBMITTING
        self.error = None
        self.identity = None
        try:
            response = self.auth_client.login(email, password)
        except ApiError as exc:
            return self._fail(to_user_message(exc), None, code=exc.code)

        identity = Identity.model_validate(response.model_dump(exclude={"token"}))
        try:
            self._verify_role(identity)
        except RoleMismatchError as exc:
            # the backend already issued a token for the other portal
            end_session(self.auth_client, self.session_store, token=response.token)
            return self._fail(exc.message, identity.role.value, code=exc.code)

        self.session_store.set_session(identity, response.token)
        return self._succeed(identity)

    def _verify_role(self, identity: Identity) -> None:
        if self.expected_role is None or identity.role is self.expected_role:
            return
        raise RoleMismatchError(
            code="ROLE_MISMATCH",
            message=ROLE_MISMATCH_MESSAGES[self.expected_role],
            details={"expected": self.expected_role.value, "actual": identity.role.value},
            status_code=403,
        )

    def logout(self) -> None:
        identity = self.session_store.get_current_identity()
        end_session(self.auth_client, self.session_store)
        self.state = LoginState.UNAUTHENTICATED
        self.identity = None
        self.error = None
        log_action(logger, self.module, "logout", identity.role.value if identity else None, "success")
        self.navigate(LOGIN_PATH)

    def _succeed(self, identity: Identity) -> LoginOutcome:
        self.state = LoginState.AUTHENTICATED
        self.identity = identity
        self.error = None
        target = dashboard_for(identity.role)
        log_action(logger, self.module, "login", identity.role.value, "success", target=target)
        self.navigate(target)
        return self._outcome(target)

    def _fail(self, message: str, actor_role: str | None, code: str | None = None) -> LoginOutcome:
        self.state = LoginState.FAILED
        self.identity = None
        self.error = message
        log_action(logger, self.module, "login", actor_role, "failed", error_code=code)
        return self._outcome()

    def _outcome(self, target: str | None = None) -> LoginOutcome:
        return LoginOutcome(state=self.state, identity=self.identity, error=self.error, target=target)
