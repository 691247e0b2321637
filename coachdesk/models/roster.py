"""
Trainer roster model.

Links a trainer to the athletes they coach.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from coachdesk.models.enums import RosterStatus


class TrainerAthlete(SQLModel, table=True):
    __tablename__ = "trainer_athletes"
    __table_args__ = (UniqueConstraint("trainer_id", "athlete_id", name="uq_trainer_athlete"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    trainer_id: int = Field(foreign_key="profiles.id", nullable=False, index=True)
    athlete_id: int = Field(foreign_key="profiles.id", nullable=False, index=True)
    status: str = Field(default=RosterStatus.ACTIVE.value, max_length=20, nullable=False)

    created_at: datetime = Field(default_factory=datetime.utcnow)
