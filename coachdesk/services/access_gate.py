"""
Dashboard access gate.

Runs before every page under the dashboard prefix and decides, in this
order:

1. **Session** -- no session: redirect to login.
2. **Profile lookup** -- lookup error: sign out, redirect to login.
3. **Profile present** -- no (active) profile: sign out, redirect to login.
4. **Role** -- empty or unknown role: sign out, redirect to the public
   entry point (the account exists but never finished onboarding).
5. Otherwise grant, exposing a frozen ``{session, profile}`` context.

The gate fails closed: any unexpected error in steps 2-4 is logged and
handled like an unavailable profile.  Lookups are never retried within
one evaluation; the next request evaluates again.
"""

from typing import Optional, Protocol

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from coachdesk.core.config import settings
from coachdesk.models.enums import Role
from coachdesk.models.profile import Profile
from coachdesk.schemas.gate import GateContext, GateDecision, GateOutcome, GateProfile, SessionInfo


class IdentityCollaborator(Protocol):
    def get_session(self, token: Optional[str]) -> Optional[SessionInfo]: ...

    def sign_out(self, token: Optional[str]) -> None: ...


class ProfileLookup(Protocol):
    def get_by_id(self, profile_id: int) -> Optional[Profile]: ...


class AccessGate:
    """Session/role gate for the dashboard."""

    def __init__(self, identity: IdentityCollaborator, profiles: ProfileLookup, login_path: Optional[str] = None,
                 public_path: Optional[str] = None, ):
        self.identity = identity
        self.profiles = profiles
        self.login_path = login_path or settings.LOGIN_PATH
        self.public_path = public_path or settings.PUBLIC_ENTRY_PATH

    def evaluate(self, token: Optional[str]) -> GateDecision:
        """Evaluate one request carrying *token* (which may be ``None``)."""
        try:
            session = self.identity.get_session(token)
        except Exception as e:
            logger.error(f"Session lookup failed, treating request as anonymous: {e}")
            session = None

        if session is None:
            logger.warning("No session found, redirecting to login")
            return GateDecision(outcome=GateOutcome.UNAUTHENTICATED, redirect_to=self.login_path)

        try:
            return self._check_profile(token, session)
        except Exception:
            logger.exception(f"Unexpected error in access gate for user {session.user_id}")
            return self._deny(token, GateOutcome.PROFILE_UNAVAILABLE, self.login_path)

    # ------------------------------------------------------------------
    # Steps 2-5
    # ------------------------------------------------------------------

    def _check_profile(self, token: Optional[str], session: SessionInfo) -> GateDecision:
        try:
            profile = self.profiles.get_by_id(session.user_id)
        except SQLAlchemyError as e:
            logger.warning(f"Error fetching profile {session.user_id}, user might have been deleted: {e}")
            return self._deny(token, GateOutcome.PROFILE_UNAVAILABLE, self.login_path)

        if profile is None or not profile.is_active:
            logger.warning(f"No active profile for user {session.user_id}, redirecting to login")
            return self._deny(token, GateOutcome.PROFILE_UNAVAILABLE, self.login_path)

        role = Role.parse(profile.role)
        if role is None:
            logger.warning(f"User {session.user_id} has no role assigned, redirecting to public entry")
            return self._deny(token, GateOutcome.ROLE_UNASSIGNED, self.public_path)

        context = GateContext(session=session, profile=GateProfile(id=profile.id, email=profile.email,
                                                                   name=profile.name, role=role))
        logger.debug(f"Gate granted for user {profile.id} as {role.value}")
        return GateDecision(outcome=GateOutcome.GRANTED, context=context)

    def _deny(self, token: Optional[str], outcome: GateOutcome, target: str) -> GateDecision:
        """Sign the caller out and redirect to *target*."""
        try:
            self.identity.sign_out(token)
        except Exception as e:
            logger.error(f"Sign-out during gate denial failed: {e}")
        return GateDecision(outcome=outcome, redirect_to=target, signed_out=True)
