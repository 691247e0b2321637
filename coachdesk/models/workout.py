"""
Workout database models.

A workout owns an ordered list of exercises and is assigned to athletes,
who mark each assignment completed or canceled.
"""

import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from coachdesk.models.assignment import AssignmentBase


class Workout(SQLModel, table=True):
    __tablename__ = "workouts"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(nullable=False, max_length=255)
    description: str = Field(default="", max_length=2000)
    created_by: int = Field(foreign_key="profiles.id", nullable=False, index=True)

    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)


class Exercise(SQLModel, table=True):
    __tablename__ = "exercises"

    id: Optional[int] = Field(default=None, primary_key=True)
    workout_id: int = Field(foreign_key="workouts.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=255)
    sets: int = Field(default=1, nullable=False)
    reps: int = Field(default=1, nullable=False)
    # Rest between sets, in seconds
    rest: int = Field(default=0, nullable=False)
    notes: str = Field(default="", max_length=1000)
    exercise_order: int = Field(default=1, nullable=False)


class WorkoutAssignment(AssignmentBase, table=True):
    __tablename__ = "workout_assignments"

    id: Optional[int] = Field(default=None, primary_key=True)
    workout_id: int = Field(foreign_key="workouts.id", nullable=False, index=True)
