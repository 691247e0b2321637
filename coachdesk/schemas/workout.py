"""
Workout API schemas.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field

from coachdesk.models.enums import WorkoutStatus
from coachdesk.schemas.user import ProfileSummary


class ExerciseCreate(BaseModel):
    """An exercise as sent by the editor.  ``exercise_order`` defaults to its position."""
    id: Optional[int] = Field(None, description="Existing exercise to keep on update")
    name: str = Field(..., min_length=1, max_length=255)
    sets: int = Field(1, ge=1, le=100)
    reps: int = Field(1, ge=1, le=1000)
    rest: int = Field(0, ge=0, le=3600, description="Rest between sets, in seconds")
    notes: Optional[str] = Field(None, max_length=1000)
    exercise_order: Optional[int] = Field(None, ge=1)


class WorkoutCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    exercises: list[ExerciseCreate] = Field(default_factory=list)


class WorkoutUpdate(WorkoutCreate):
    """Full replacement.  Exercises listed with an ``id`` are kept and updated,
    the rest of the stored ones are removed."""


class ExerciseResponse(BaseModel):
    id: int
    workout_id: int
    name: str
    sets: int
    reps: int
    rest: int
    notes: str = ""
    exercise_order: int

    class Config:
        from_attributes = True


class WorkoutSummary(BaseModel):
    id: int
    title: str
    description: str = ""
    created_by: int
    created_at: datetime.datetime
    exercise_count: int = 0


class WorkoutDetail(BaseModel):
    id: int
    title: str
    description: str = ""
    created_by: int
    created_at: datetime.datetime
    updated_at: datetime.datetime
    exercises: list[ExerciseResponse] = Field(default_factory=list)


class WorkoutStatusUpdate(BaseModel):
    status: WorkoutStatus


class WorkoutAssignmentResponse(BaseModel):
    id: int
    workout_id: int
    assigned_to: int
    assigned_by: int
    assigned_at: datetime.datetime
    status: WorkoutStatus
    due_date: Optional[datetime.date] = None
    workout: Optional[WorkoutSummary] = None
    athlete: Optional[ProfileSummary] = None
