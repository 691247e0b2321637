"""Tests for the dashboard access gate.

The identity and profile collaborators are in-memory fakes, so each
test controls exactly what the gate sees.
"""

from datetime import datetime, timedelta

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import OperationalError

from coachdesk.models.enums import Role
from coachdesk.models.profile import Profile
from coachdesk.schemas.gate import GateOutcome, SessionInfo
from coachdesk.services.access_gate import AccessGate

TOKEN = "token-abc"


# ======================================================================
# Fakes
# ======================================================================


class FakeIdentity:
    def __init__(self, session: SessionInfo | None = None, error: Exception | None = None,
                 sign_out_error: Exception | None = None):
        self.session = session
        self.error = error
        self.sign_out_error = sign_out_error
        self.sign_out_calls: list[str | None] = []

    def get_session(self, token):
        if self.error:
            raise self.error
        return self.session

    def sign_out(self, token):
        self.sign_out_calls.append(token)
        if self.sign_out_error:
            raise self.sign_out_error


class FakeProfiles:
    def __init__(self, profile: Profile | None = None, error: Exception | None = None):
        self.profile = profile
        self.error = error
        self.calls = 0

    def get_by_id(self, profile_id):
        self.calls += 1
        if self.error:
            raise self.error
        return self.profile


def _session(user_id: int = 7) -> SessionInfo:
    return SessionInfo(session_id="sid-1", user_id=user_id, expires_at=datetime.utcnow() + timedelta(hours=1))


def _profile(role: str | None = "trainer", is_active: bool = True) -> Profile:
    return Profile(id=7, email="tara@example.com", hashed_password="x", name="Tara", role=role, is_active=is_active)


def _gate(identity: FakeIdentity, profiles: FakeProfiles) -> AccessGate:
    return AccessGate(identity, profiles, login_path="/login", public_path="/")


# ======================================================================
# Unauthenticated
# ======================================================================


class TestNoSession:
    def test_redirects_to_login(self):
        identity = FakeIdentity(session=None)
        decision = _gate(identity, FakeProfiles()).evaluate(None)
        assert decision.outcome is GateOutcome.UNAUTHENTICATED
        assert decision.redirect_to == "/login"

    def test_does_not_sign_out_or_look_up_profile(self):
        identity, profiles = FakeIdentity(session=None), FakeProfiles(_profile())
        decision = _gate(identity, profiles).evaluate(TOKEN)
        assert identity.sign_out_calls == []
        assert profiles.calls == 0
        assert decision.signed_out is False

    def test_session_lookup_error_is_treated_as_absent(self):
        identity = FakeIdentity(error=RuntimeError("identity service down"))
        decision = _gate(identity, FakeProfiles(_profile())).evaluate(TOKEN)
        assert decision.outcome is GateOutcome.UNAUTHENTICATED
        assert decision.redirect_to == "/login"


# ======================================================================
# Profile unavailable
# ======================================================================


class TestProfileUnavailable:
    def test_missing_profile_signs_out_and_redirects_to_login(self):
        identity = FakeIdentity(session=_session())
        decision = _gate(identity, FakeProfiles(None)).evaluate(TOKEN)
        assert decision.outcome is GateOutcome.PROFILE_UNAVAILABLE
        assert decision.redirect_to == "/login"
        assert decision.signed_out is True
        assert identity.sign_out_calls == [TOKEN]

    def test_lookup_error_signs_out_and_redirects_to_login(self):
        identity = FakeIdentity(session=_session())
        error = OperationalError("SELECT", {}, Exception("connection refused"))
        decision = _gate(identity, FakeProfiles(error=error)).evaluate(TOKEN)
        assert decision.outcome is GateOutcome.PROFILE_UNAVAILABLE
        assert decision.redirect_to == "/login"
        assert identity.sign_out_calls == [TOKEN]

    def test_lookup_is_not_retried(self):
        profiles = FakeProfiles(error=OperationalError("SELECT", {}, Exception("timeout")))
        _gate(FakeIdentity(session=_session()), profiles).evaluate(TOKEN)
        assert profiles.calls == 1

    def test_unexpected_error_fails_closed(self):
        identity = FakeIdentity(session=_session())
        decision = _gate(identity, FakeProfiles(error=KeyError("boom"))).evaluate(TOKEN)
        assert decision.outcome is GateOutcome.PROFILE_UNAVAILABLE
        assert decision.redirect_to == "/login"
        assert identity.sign_out_calls == [TOKEN]

    def test_inactive_profile_is_unavailable(self):
        identity = FakeIdentity(session=_session())
        decision = _gate(identity, FakeProfiles(_profile(is_active=False))).evaluate(TOKEN)
        assert decision.outcome is GateOutcome.PROFILE_UNAVAILABLE
        assert decision.redirect_to == "/login"

    def test_sign_out_failure_is_swallowed(self):
        identity = FakeIdentity(session=_session(), sign_out_error=RuntimeError("already gone"))
        decision = _gate(identity, FakeProfiles(None)).evaluate(TOKEN)
        assert decision.outcome is GateOutcome.PROFILE_UNAVAILABLE
        assert decision.redirect_to == "/login"


# ======================================================================
# Role unassigned
# ======================================================================


class TestRoleUnassigned:
    @pytest.mark.parametrize("role", [None, "", "coach"])
    def test_signs_out_and_redirects_to_public_entry(self, role):
        identity = FakeIdentity(session=_session())
        decision = _gate(identity, FakeProfiles(_profile(role=role))).evaluate(TOKEN)
        assert decision.outcome is GateOutcome.ROLE_UNASSIGNED
        assert decision.redirect_to == "/"
        assert decision.signed_out is True
        assert identity.sign_out_calls == [TOKEN]
        assert decision.context is None


# ======================================================================
# Granted
# ======================================================================


class TestGranted:
    @pytest.mark.parametrize("role", ["admin", "trainer", "athlete"])
    def test_exposes_session_and_profile(self, role):
        identity = FakeIdentity(session=_session())
        decision = _gate(identity, FakeProfiles(_profile(role=role))).evaluate(TOKEN)
        assert decision.allowed
        assert decision.redirect_to is None
        assert decision.context.session.user_id == 7
        assert decision.context.profile.role is Role(role)
        assert identity.sign_out_calls == []

    def test_context_is_read_only(self):
        decision = _gate(FakeIdentity(session=_session()), FakeProfiles(_profile())).evaluate(TOKEN)
        with pytest.raises(ValidationError):
            decision.context.profile.role = Role.ADMIN

    def test_context_does_not_follow_later_profile_changes(self):
        profile = _profile()
        decision = _gate(FakeIdentity(session=_session()), FakeProfiles(profile)).evaluate(TOKEN)
        profile.role = "athlete"
        assert decision.context.profile.role is Role.TRAINER
