"""Database repositories."""

from coachdesk.db.repositories.profile import ProfileRepository
from coachdesk.db.repositories.auth_session import AuthSessionRepository
from coachdesk.db.repositories.roster import RosterRepository
from coachdesk.db.repositories.questionnaire import (
    QuestionnaireAssignmentRepository,
    QuestionnaireRepository,
    ResponseRepository,
)
from coachdesk.db.repositories.workout import WorkoutAssignmentRepository, WorkoutRepository

__all__ = [
    "ProfileRepository",
    "AuthSessionRepository",
    "RosterRepository",
    "QuestionnaireRepository",
    "QuestionnaireAssignmentRepository",
    "ResponseRepository",
    "WorkoutRepository",
    "WorkoutAssignmentRepository",
]
