"""
Shared API dependencies.

Reusable FastAPI dependencies for authentication, role checks and the
dashboard access gate.
"""

from typing import Callable, Optional

from fastapi import Depends, HTTPException, Request, status
from sqlmodel import Session

from coachdesk.core.config import settings
from coachdesk.core.security import oauth2_scheme
from coachdesk.db.repositories.profile import ProfileRepository
from coachdesk.db.session import get_db
from coachdesk.models.enums import Role
from coachdesk.models.profile import Profile
from coachdesk.schemas.gate import GateContext
from coachdesk.services.access_gate import AccessGate
from coachdesk.services.identity_service import IdentityService


class GateRedirect(Exception):
    """Raised when a dashboard request must be redirected (303)."""

    def __init__(self, location: str, signed_out: bool = False):
        super().__init__(location)
        self.location = location
        self.signed_out = signed_out


def get_session_token(request: Request, bearer: Optional[str] = Depends(oauth2_scheme)) -> Optional[str]:
    """Access token from the ``Authorization`` header, else from the session cookie."""
    return bearer or request.cookies.get(settings.SESSION_COOKIE_NAME)


def get_current_user(token: Optional[str] = Depends(get_session_token), db: Session = Depends(get_db), ) -> Profile:
    """Resolve the profile behind the current session."""
    user = IdentityService(db).get_current_user(token)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired session",
                            headers={"WWW-Authenticate": "Bearer"}, )
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User account is inactive")
    return user


def require_roles(*roles: Role) -> Callable[..., Profile]:
    """Dependency factory: current user, provided they hold one of *roles*."""

    def checker(user: Profile = Depends(get_current_user)) -> Profile:
        if Role.parse(user.role) not in roles:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN,
                                detail=f"Requires role: {', '.join(r.value for r in roles)}")
        return user

    return checker


def get_gate_context(request: Request, token: Optional[str] = Depends(get_session_token),
                     db: Session = Depends(get_db), ) -> GateContext:
    """Run the access gate; redirect on denial, else return the frozen context."""
    gate = AccessGate(IdentityService(db), ProfileRepository(db))
    decision = gate.evaluate(token)
    if not decision.allowed:
        raise GateRedirect(decision.redirect_to, signed_out=decision.signed_out)
    request.state.gate = decision.context
    return decision.context
