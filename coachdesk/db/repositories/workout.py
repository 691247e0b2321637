"""
Workout repositories.

Workouts with their exercises, and workout assignments.  The listing
queries here stand in for the ``get_trainer_workouts`` and
``get_athlete_workouts`` aggregate calls.
"""

from typing import Optional

from coachdesk.db.repositories.assignment import AssignmentRepository
from coachdesk.db.repositories.content import ContentRepository
from coachdesk.models.workout import Exercise, Workout, WorkoutAssignment


class WorkoutRepository(ContentRepository[Workout, Exercise]):
    """Workouts and their ordered exercises."""

    model = Workout
    child_model = Exercise
    assignment_model = WorkoutAssignment
    parent_key = "workout_id"
    order_key = "exercise_order"
    child_fields = ("name", "sets", "reps", "rest", "notes", "exercise_order")

    def get_trainer_workouts(self, trainer_id: Optional[int]) -> list[tuple[Workout, int]]:
        """Workouts created by a trainer with their exercise count."""
        return self.list_with_child_counts(trainer_id)


class WorkoutAssignmentRepository(AssignmentRepository[WorkoutAssignment, Workout]):
    model = WorkoutAssignment
    content_model = Workout
    content_key = "workout_id"

    def get_athlete_workouts(self, athlete_id: int) -> list[tuple[WorkoutAssignment, Workout]]:
        """Workouts assigned to an athlete, newest assignment first."""
        return self.list_for_assignee(athlete_id)
