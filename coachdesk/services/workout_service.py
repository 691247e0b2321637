"""
Workout service.

Workouts follow the shared lifecycle; an assignment ends either
completed or canceled.
"""

import datetime
from typing import Any, Optional

from coachdesk.db.repositories.workout import WorkoutAssignmentRepository, WorkoutRepository
from coachdesk.models.enums import WorkoutStatus
from coachdesk.models.profile import Profile
from coachdesk.models.workout import Exercise, Workout, WorkoutAssignment
from coachdesk.schemas.user import ProfileSummary
from coachdesk.schemas.workout import (ExerciseResponse, WorkoutAssignmentResponse, WorkoutCreate, WorkoutDetail,
                                       WorkoutSummary, )
from coachdesk.services.lifecycle import WORKOUT_TRANSITIONS, ContentLifecycleService, child_order


class WorkoutService(ContentLifecycleService[Workout, Exercise, WorkoutAssignment]):
    """Service for workout business logic."""

    label = "workout"
    child_label = "exercise"
    status_enum = WorkoutStatus
    transitions = WORKOUT_TRANSITIONS
    repository_class = WorkoutRepository
    assignment_repository_class = WorkoutAssignmentRepository

    def _new_content(self, owner_id: int, payload: WorkoutCreate) -> Workout:
        return Workout(title=payload.title, description=payload.description or "", created_by=owner_id)

    def _content_fields(self, payload: WorkoutCreate) -> dict[str, Any]:
        return {"title": payload.title, "description": payload.description or ""}

    def _new_children(self, payload: WorkoutCreate) -> list[Exercise]:
        return [Exercise(id=e.id, name=e.name, sets=e.sets, reps=e.reps, rest=e.rest, notes=e.notes or "",
                         exercise_order=child_order(e.exercise_order, index))
                for index, e in enumerate(payload.exercises)]

    def _new_assignment(self, content_id: int, athlete_id: int, assigner_id: int,
                        due_date: Optional[datetime.date]) -> WorkoutAssignment:
        return WorkoutAssignment(workout_id=content_id, assigned_to=athlete_id, assigned_by=assigner_id,
                                 due_date=due_date, status=WorkoutStatus.PENDING.value)

    def _to_summary(self, content: Workout, child_count: int) -> WorkoutSummary:
        return WorkoutSummary(id=content.id, title=content.title, description=content.description,
                              created_by=content.created_by, created_at=content.created_at,
                              exercise_count=child_count)

    def _to_detail(self, content: Workout, children: list[Exercise]) -> WorkoutDetail:
        return WorkoutDetail(id=content.id, title=content.title, description=content.description,
                             created_by=content.created_by, created_at=content.created_at,
                             updated_at=content.updated_at,
                             exercises=[ExerciseResponse.model_validate(e) for e in children])

    def _to_assignment(self, assignment: WorkoutAssignment, content: Optional[Workout] = None,
                       athlete: Optional[Profile] = None) -> WorkoutAssignmentResponse:
        return WorkoutAssignmentResponse(
            id=assignment.id, workout_id=assignment.workout_id, assigned_to=assignment.assigned_to,
            assigned_by=assignment.assigned_by, assigned_at=assignment.assigned_at, status=assignment.status,
            due_date=assignment.due_date,
            workout=self._to_summary(content, 0) if content is not None else None,
            athlete=ProfileSummary.model_validate(athlete) if athlete is not None else None, )
