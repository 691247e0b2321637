"""
Dashboard pages.

Every route runs behind the access gate.  Pages live in one subtree per
role (``/dashboard/{admin|trainer|athlete}/...``) and return the data the
page renders.  A request into another role's subtree is redirected to the
caller's own; a page that does not exist for the caller's role is a 404.

For athletes, the ``{item_id}`` of a questionnaire or workout page is an
assignment id; for trainers and admins it is the content id.
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse
from sqlmodel import Session

from coachdesk.api.dependencies import GateRedirect, get_gate_context
from coachdesk.api.errors import unwrap
from coachdesk.core.config import settings
from coachdesk.db.session import get_db
from coachdesk.models.enums import QuestionnaireStatus, Role, WorkoutStatus
from coachdesk.schemas.gate import GateContext
from coachdesk.services.athlete_service import AthleteService
from coachdesk.services.questionnaire_service import QuestionnaireService
from coachdesk.services.user_service import UserService
from coachdesk.services.workout_service import WorkoutService

router = APIRouter()

COACH_ROLES = (Role.TRAINER, Role.ADMIN)


def subtree_root(role: Role) -> str:
    return f"{settings.DASHBOARD_PREFIX}/{role.value}"


def get_role_context(role: str, context: GateContext = Depends(get_gate_context)) -> GateContext:
    """Gate context, provided the URL's role segment is the caller's own role."""
    requested = Role.parse(role)
    if requested is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Page not found")
    if requested is not context.profile.role:
        raise GateRedirect(subtree_root(context.profile.role))
    return context


def _only_for(context: GateContext, *roles: Role) -> None:
    if context.profile.role not in roles:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Page not found")


def _page(context: GateContext, **data: Any) -> dict[str, Any]:
    return {"profile": context.profile, **data}


# ----------------------------------------------------------------------
# Entry and role roots
# ----------------------------------------------------------------------


@router.get("", summary="Send the caller to their role's dashboard.")
def dashboard_entry(context: GateContext = Depends(get_gate_context)):
    return RedirectResponse(subtree_root(context.profile.role), status_code=status.HTTP_303_SEE_OTHER)


@router.get("/{role}", summary="Role home page.")
def role_home(context: GateContext = Depends(get_role_context), db: Session = Depends(get_db)):
    actor = context.profile
    if actor.role is Role.ATHLETE:
        questionnaires = unwrap(QuestionnaireService(db).list_assigned_to(actor.id))
        workouts = unwrap(WorkoutService(db).list_assigned_to(actor.id))
        open_questionnaires = [a for a in questionnaires if a.status is not QuestionnaireStatus.COMPLETED]
        return _page(context, pending_questionnaires=open_questionnaires,
                     pending_workouts=[a for a in workouts if a.status is WorkoutStatus.PENDING], )

    summary = {
        "questionnaires": len(unwrap(QuestionnaireService(db).list_owned(actor))),
        "workouts": len(unwrap(WorkoutService(db).list_owned(actor))),
        "athletes": len(unwrap(AthleteService(db).get_trainer_athletes(actor.id))),
    }
    if actor.role is Role.ADMIN:
        summary["users"] = len(unwrap(UserService(db).list_users(limit=10000)))
    return _page(context, summary=summary)


@router.get("/{role}/profile", summary="Own profile page.")
def profile_page(context: GateContext = Depends(get_role_context), db: Session = Depends(get_db)):
    return _page(context, account=unwrap(UserService(db).get_profile(context.profile.id)))


@router.get("/{role}/settings", summary="Account settings page.")
def settings_page(context: GateContext = Depends(get_role_context), db: Session = Depends(get_db)):
    return _page(context, account=unwrap(UserService(db).get_profile(context.profile.id)),
                 session_expires_at=context.session.expires_at)


# ----------------------------------------------------------------------
# Questionnaires
# ----------------------------------------------------------------------


@router.get("/{role}/questionnaires", summary="Questionnaire list.")
def questionnaires_page(context: GateContext = Depends(get_role_context), db: Session = Depends(get_db)):
    service = QuestionnaireService(db)
    if context.profile.role is Role.ATHLETE:
        return _page(context, assignments=unwrap(service.list_assigned_to(context.profile.id)))
    return _page(context, questionnaires=unwrap(service.list_owned(context.profile)))


@router.get("/{role}/questionnaires/{item_id}", summary="Questionnaire page.")
def questionnaire_page(item_id: int, context: GateContext = Depends(get_role_context),
                       db: Session = Depends(get_db)):
    service = QuestionnaireService(db)
    actor = context.profile
    if actor.role is Role.ATHLETE:
        assignment = unwrap(service.get_assignment(actor, item_id))
        return _page(context, assignment=assignment,
                     questionnaire=unwrap(service.get_content(actor, assignment.questionnaire_id)),
                     responses=unwrap(service.get_assignment_responses(actor, item_id)),
                     submitted=unwrap(service.has_submitted_responses(item_id, actor.id)), )
    return _page(context, questionnaire=unwrap(service.get_content(actor, item_id)),
                 assignments=unwrap(service.list_assignments(actor, item_id)), )


@router.get("/{role}/questionnaires/{item_id}/edit", summary="Questionnaire editor.")
def questionnaire_editor(item_id: int, context: GateContext = Depends(get_role_context),
                         db: Session = Depends(get_db)):
    _only_for(context, *COACH_ROLES)
    return _page(context, questionnaire=unwrap(QuestionnaireService(db).get_content(context.profile, item_id)))


# ----------------------------------------------------------------------
# Workouts
# ----------------------------------------------------------------------


@router.get("/{role}/workouts", summary="Workout list.")
def workouts_page(context: GateContext = Depends(get_role_context), db: Session = Depends(get_db)):
    service = WorkoutService(db)
    if context.profile.role is Role.ATHLETE:
        return _page(context, assignments=unwrap(service.list_assigned_to(context.profile.id)))
    return _page(context, workouts=unwrap(service.list_owned(context.profile)))


@router.get("/{role}/workouts/{item_id}", summary="Workout page.")
def workout_page(item_id: int, context: GateContext = Depends(get_role_context), db: Session = Depends(get_db)):
    service = WorkoutService(db)
    actor = context.profile
    if actor.role is Role.ATHLETE:
        assignment = unwrap(service.get_assignment(actor, item_id))
        return _page(context, assignment=assignment, workout=unwrap(service.get_content(actor, assignment.workout_id)))
    return _page(context, workout=unwrap(service.get_content(actor, item_id)),
                 assignments=unwrap(service.list_assignments(actor, item_id)), )


# ----------------------------------------------------------------------
# Roster (trainers and admins)
# ----------------------------------------------------------------------


@router.get("/{role}/athletes", summary="Roster page.")
def athletes_page(context: GateContext = Depends(get_role_context), db: Session = Depends(get_db)):
    _only_for(context, *COACH_ROLES)
    return _page(context, athletes=unwrap(AthleteService(db).get_trainer_athletes(context.profile.id)))


@router.get("/{role}/athletes/{athlete_id}", summary="One athlete's assignments.")
def athlete_page(athlete_id: int, context: GateContext = Depends(get_role_context), db: Session = Depends(get_db)):
    _only_for(context, *COACH_ROLES)
    actor = context.profile
    assigned_by = None
    if actor.role is Role.TRAINER:
        if not unwrap(AthleteService(db).is_on_roster(actor.id, athlete_id)):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Athlete is not on your roster")
        assigned_by = actor.id
    return _page(context, athlete=unwrap(UserService(db).get_profile(athlete_id)),
                 questionnaires=unwrap(QuestionnaireService(db).list_assigned_to(athlete_id, assigned_by)),
                 workouts=unwrap(WorkoutService(db).list_assigned_to(athlete_id, assigned_by)), )


# ----------------------------------------------------------------------
# Users (admins)
# ----------------------------------------------------------------------


@router.get("/{role}/users", summary="User administration page.")
def users_page(context: GateContext = Depends(get_role_context), db: Session = Depends(get_db)):
    _only_for(context, Role.ADMIN)
    return _page(context, users=unwrap(UserService(db).list_users()))


@router.get("/{role}/users/{user_id}", summary="One user's administration page.")
def user_page(user_id: int, context: GateContext = Depends(get_role_context), db: Session = Depends(get_db)):
    _only_for(context, Role.ADMIN)
    return _page(context, user=unwrap(UserService(db).get_profile(user_id)))
