from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .logging_utils import get_logger, log_action
from .models import Identity, Role
from .session import SessionStore

logger = get_logger(__name__)

LOGIN_PATH = "/login"
DASHBOARD_PATHS: dict[Role, str] = {
    Role.ADMIN: "/admin/dashboard",
    Role.DISTRIBUTOR: "/distributor/dashboard",
}


class GateDecision(str, Enum):
    ALLOW = "allow"
    REDIRECT_TO_LOGIN = "redirect_to_login"
    REDIRECT_TO_OWN_PORTAL = "redirect_to_own_portal"


@dataclass(frozen=True)
class GateResult:
    decision: GateDecision
    target: str | None = None

    @property
    def allowed(self) -> bool:
        return self.decision is GateDecision.ALLOW

    def needs_navigation(self, current_path: str | None) -> bool:
        """Whether the caller must move; already standing on the target means no."""
        return self.target is not None and self.target != current_path


def dashboard_for(role: Role) -> str:
    return DASHBOARD_PATHS[role]


def check_access(
    required_role: Role | None,
    identity: Identity | None,
) -> GateResult:
    """Decide whether ``identity`` may enter a screen requiring ``required_role``.

    ``required_role=None`` marks a public screen.
    """
    if required_role is None:
        return GateResult(GateDecision.ALLOW)
    if identity is None:
        return GateResult(GateDecision.REDIRECT_TO_LOGIN, LOGIN_PATH)
    if identity.role is required_role:
        return GateResult(GateDecision.ALLOW)
    return GateResult(GateDecision.REDIRECT_TO_OWN_PORTAL, dashboard_for(identity.role))


class AccessGate:
    def __init__(self, session_store: SessionStore) -> None:
        self.session_store = session_store

    def require(self, required_role: Role | None, screen: str) -> GateResult:
        identity = self.session_store.get_current_identity()
        result = check_access(required_role, identity)
        log_action(
            logger,
            module=screen,
            action="gate",
            actor_role=identity.role.value if identity else None,
            outcome=result.decision.value,
            target=result.target,
        )
        return result
