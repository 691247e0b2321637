"""Tests for the workout lifecycle."""

import pytest
from sqlmodel import select

from coachdesk.core.result import FailureKind
from coachdesk.models.workout import Exercise
from coachdesk.schemas.workout import ExerciseCreate, WorkoutCreate, WorkoutUpdate
from coachdesk.services.lifecycle import WORKOUT_TRANSITIONS, child_order, is_allowed_transition
from coachdesk.services.workout_service import WorkoutService


@pytest.fixture
def service(db) -> WorkoutService:
    return WorkoutService(db)


@pytest.fixture
def workout_id(service, trainer) -> int:
    payload = WorkoutCreate(title="Leg day", exercises=[
        ExerciseCreate(name="Squat", sets=5, reps=5, rest=180),
        ExerciseCreate(name="Lunge", sets=3, reps=10, rest=90, notes="Alternate legs"),
        ExerciseCreate(name="Calf raise", sets=3, reps=15), ])
    return service.create_content(trainer.id, payload).value


# ======================================================================
# Helpers
# ======================================================================


class TestHelpers:
    def test_child_order_defaults_to_position(self):
        assert [child_order(None, i) for i in range(3)] == [1, 2, 3]
        assert child_order(7, 0) == 7

    @pytest.mark.parametrize("current,new,allowed", [
        ("pending", "completed", True),
        ("pending", "canceled", True),
        ("pending", "pending", True),
        ("completed", "pending", False),
        ("canceled", "completed", False),
        ("completed", "canceled", False),
    ])
    def test_transition_table(self, current, new, allowed):
        assert is_allowed_transition(WORKOUT_TRANSITIONS, current, new) is allowed


# ======================================================================
# Content
# ======================================================================


class TestWorkoutContent:
    def test_create_persists_exercises(self, service, trainer, workout_id):
        detail = service.get_content(trainer, workout_id).value
        assert detail.description == ""
        assert [(e.name, e.exercise_order) for e in detail.exercises] == [("Squat", 1), ("Lunge", 2),
                                                                          ("Calf raise", 3)]
        assert detail.exercises[1].notes == "Alternate legs"
        assert detail.exercises[0].notes == ""

    def test_trainer_workouts_with_counts(self, service, trainer, workout_id):
        assert [(w.id, w.exercise_count) for w in service.list_owned(trainer).value] == [(workout_id, 3)]

    def test_update_replaces_exercises(self, service, db, trainer, workout_id):
        result = service.update_content(trainer, workout_id, WorkoutUpdate(
            title="Leg day v2", exercises=[ExerciseCreate(name="Deadlift"), ExerciseCreate(name="Step-up")]))
        assert [(e.name, e.exercise_order) for e in result.value.exercises] == [("Deadlift", 1), ("Step-up", 2)]
        assert len(db.exec(select(Exercise)).all()) == 2

    def test_update_to_empty_exercise_list(self, service, trainer, workout_id):
        result = service.update_content(trainer, workout_id, WorkoutUpdate(title="Rest day"))
        assert result.value.exercises == []


# ======================================================================
# Assignments
# ======================================================================


class TestWorkoutAssignments:
    def test_fan_out_and_athlete_view(self, service, trainer, athletes, workout_id):
        created = service.assign(trainer, workout_id, [a.id for a in athletes]).value
        assert len(created) == 3
        mine = service.list_assigned_to(athletes[2].id).value
        assert [a.workout.title for a in mine] == ["Leg day"]

    def test_filter_by_assigner(self, service, trainer, make_profile, athletes, workout_id):
        other = make_profile("other@example.com", "trainer")
        other_workout = service.create_content(other.id, WorkoutCreate(title="Intervals")).value
        service.assign(trainer, workout_id, [athletes[0].id])
        service.assign(other, other_workout, [athletes[0].id])
        assert len(service.list_assigned_to(athletes[0].id).value) == 2
        assert [a.workout_id for a in service.list_assigned_to(athletes[0].id, trainer.id).value] == [workout_id]

    def test_other_trainer_cannot_assign(self, service, make_profile, athletes, workout_id):
        other = make_profile("other@example.com", "trainer")
        assert service.assign(other, workout_id, [athletes[0].id]).failure is FailureKind.PERMISSION_DENIED

    def test_cancel_is_final(self, service, trainer, athletes, workout_id):
        assignment = service.assign(trainer, workout_id, [athletes[0].id]).value[0]
        assert service.update_assignment_status(trainer, assignment.id, "canceled").ok
        result = service.update_assignment_status(athletes[0], assignment.id, "completed")
        assert result.failure is FailureKind.INVALID

    def test_in_progress_is_not_a_workout_status(self, service, trainer, athletes, workout_id):
        assignment = service.assign(trainer, workout_id, [athletes[0].id]).value[0]
        result = service.update_assignment_status(athletes[0], assignment.id, "in_progress")
        assert result.failure is FailureKind.INVALID
