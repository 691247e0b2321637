"""
Access gate schemas.

The gate hands nested dashboard pages a frozen ``{session, profile}``
context; pages may read it but never change it.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from coachdesk.models.enums import Role


class SessionInfo(BaseModel):
    """An authenticated session as seen by the application."""
    session_id: str
    user_id: int
    expires_at: datetime

    class Config:
        frozen = True


class GateProfile(BaseModel):
    id: int
    email: str
    name: Optional[str] = None
    role: Role

    class Config:
        from_attributes = True
        frozen = True


class GateContext(BaseModel):
    session: SessionInfo
    profile: GateProfile

    class Config:
        frozen = True


class GateOutcome(str, Enum):
    GRANTED = "granted"
    UNAUTHENTICATED = "unauthenticated"
    PROFILE_UNAVAILABLE = "profile_unavailable"
    ROLE_UNASSIGNED = "role_unassigned"


class GateDecision(BaseModel):
    """Result of one gate evaluation."""
    outcome: GateOutcome
    redirect_to: Optional[str] = None
    signed_out: bool = False
    context: Optional[GateContext] = None

    @property
    def allowed(self) -> bool:
        return self.outcome is GateOutcome.GRANTED
