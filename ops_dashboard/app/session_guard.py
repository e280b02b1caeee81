from __future__ import annotations

from collections.abc import Callable, Collection
from dataclasses import dataclass

from ops_dashboard.app.domain.contracts import Session, SessionProvider
from ops_dashboard.app.domain.errors import PersistenceError


@dataclass(frozen=True)
class SessionValidation:
    valid: bool
    reason: str | None = None
    session: Session | None = None


def validate_session(session: Session | None, allowed_roles: Collection[str]) -> SessionValidation:
    if session is None or not session.access_token:
        return SessionValidation(valid=False, reason="missing_session")
    if allowed_roles and (session.role or "").lower() not in allowed_roles:
        return SessionValidation(valid=False, reason="role_not_allowed", session=session)
    return SessionValidation(valid=True, session=session)


class SessionGuard:
    """Gates page loads on a signed-in session whose role may open the page."""

    def __init__(
        self,
        on_invalid_session: Callable[[str], None],
        allowed_roles: Collection[str] = ("admin", "user"),
    ) -> None:
        self._on_invalid_session = on_invalid_session
        self._allowed_roles = frozenset(role.lower() for role in allowed_roles)
        self.current_module: str | None = None

    def require_session(self, provider: SessionProvider, module: str) -> Session | None:
        self.current_module = module
        try:
            session = provider.current_session()
        except PersistenceError:
            self._on_invalid_session("session_unavailable")
            raise
        validation = validate_session(session, self._allowed_roles)
        if validation.valid:
            return validation.session

        self._on_invalid_session(validation.reason or "invalid_session")
        return None
