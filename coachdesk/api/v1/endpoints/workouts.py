"""
Workout endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from coachdesk.api.dependencies import get_current_user, require_roles
from coachdesk.api.errors import unwrap
from coachdesk.db.session import get_db
from coachdesk.models.enums import Role
from coachdesk.models.profile import Profile
from coachdesk.schemas.questionnaire import AssignmentCreate
from coachdesk.schemas.workout import (WorkoutAssignmentResponse, WorkoutCreate, WorkoutDetail, WorkoutStatusUpdate,
                                       WorkoutSummary, WorkoutUpdate, )
from coachdesk.services.workout_service import WorkoutService

router = APIRouter()

require_author = require_roles(Role.TRAINER, Role.ADMIN)


@router.post("", summary="Create a workout with its exercises.", response_model=WorkoutDetail,
             status_code=status.HTTP_201_CREATED, )
def create_workout(data: WorkoutCreate, db: Session = Depends(get_db), user: Profile = Depends(require_author), ):
    service = WorkoutService(db)
    workout_id = unwrap(service.create_content(user.id, data))
    return unwrap(service.get_content(user, workout_id))


@router.get("", summary="List own workouts with exercise counts.", response_model=list[WorkoutSummary], )
def list_workouts(db: Session = Depends(get_db), user: Profile = Depends(require_author), ):
    return unwrap(WorkoutService(db).list_owned(user))


@router.get("/assigned", summary="Workouts assigned to the current user.",
            response_model=list[WorkoutAssignmentResponse], )
def list_assigned(assigned_by: Optional[int] = Query(None, description="Only those assigned by this trainer"),
                  db: Session = Depends(get_db), user: Profile = Depends(get_current_user), ):
    return unwrap(WorkoutService(db).list_assigned_to(user.id, assigned_by))


@router.get("/{workout_id}", summary="Get a workout with its exercises.", response_model=WorkoutDetail, )
def get_workout(workout_id: int, db: Session = Depends(get_db), user: Profile = Depends(get_current_user), ):
    return unwrap(WorkoutService(db).get_content(user, workout_id))


@router.put("/{workout_id}", summary="Replace a workout and its exercises.", response_model=WorkoutDetail, )
def update_workout(workout_id: int, data: WorkoutUpdate, db: Session = Depends(get_db),
                   user: Profile = Depends(require_author), ):
    return unwrap(WorkoutService(db).update_content(user, workout_id, data))


@router.delete("/{workout_id}", summary="Delete a workout.", status_code=status.HTTP_204_NO_CONTENT, )
def delete_workout(workout_id: int, db: Session = Depends(get_db), user: Profile = Depends(require_author), ):
    unwrap(WorkoutService(db).delete_content(user, workout_id))


@router.post("/{workout_id}/assignments", summary="Assign a workout to athletes.",
             response_model=list[WorkoutAssignmentResponse], status_code=status.HTTP_201_CREATED, )
def assign_workout(workout_id: int, data: AssignmentCreate, db: Session = Depends(get_db),
                   user: Profile = Depends(require_author), ):
    return unwrap(WorkoutService(db).assign(user, workout_id, data.athlete_ids, data.due_date))


@router.get("/{workout_id}/assignments", summary="Assignments of a workout.",
            response_model=list[WorkoutAssignmentResponse], )
def list_workout_assignments(workout_id: int, db: Session = Depends(get_db),
                             user: Profile = Depends(require_author), ):
    return unwrap(WorkoutService(db).list_assignments(user, workout_id))


@router.get("/assignments/{assignment_id}", summary="Get one assignment.", response_model=WorkoutAssignmentResponse, )
def get_assignment(assignment_id: int, db: Session = Depends(get_db), user: Profile = Depends(get_current_user), ):
    return unwrap(WorkoutService(db).get_assignment(user, assignment_id))


@router.patch("/assignments/{assignment_id}/status", summary="Complete or cancel an assignment.",
              response_model=WorkoutAssignmentResponse, )
def update_assignment_status(assignment_id: int, data: WorkoutStatusUpdate, db: Session = Depends(get_db),
                             user: Profile = Depends(get_current_user), ):
    return unwrap(WorkoutService(db).update_assignment_status(user, assignment_id, data.status.value))
