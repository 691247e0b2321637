"""Business logic services."""

from coachdesk.services.access_gate import AccessGate
from coachdesk.services.athlete_service import AthleteService
from coachdesk.services.identity_service import IdentityService
from coachdesk.services.questionnaire_service import QuestionnaireService
from coachdesk.services.user_service import UserService
from coachdesk.services.workout_service import WorkoutService

__all__ = [
    "AccessGate",
    "AthleteService",
    "IdentityService",
    "QuestionnaireService",
    "UserService",
    "WorkoutService",
]
