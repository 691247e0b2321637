"""
Roster API schemas.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr

from coachdesk.models.enums import RosterStatus


class RosterAdd(BaseModel):
    email: EmailStr


class RosterStatusUpdate(BaseModel):
    status: RosterStatus


class RosterEntry(BaseModel):
    """An athlete (or trainer) seen through a roster link."""
    id: int
    name: Optional[str] = None
    email: str
    status: RosterStatus = RosterStatus.ACTIVE
    linked_at: Optional[datetime.datetime] = None


class AthleteSearchResult(BaseModel):
    id: int
    name: Optional[str] = None
    email: str
    created_at: datetime.datetime
