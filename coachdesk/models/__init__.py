"""SQLModel database models."""

from coachdesk.models.profile import Profile
from coachdesk.models.auth_session import AuthSession
from coachdesk.models.roster import TrainerAthlete
from coachdesk.models.questionnaire import Question, Questionnaire, QuestionnaireAssignment, Response
from coachdesk.models.workout import Exercise, Workout, WorkoutAssignment

__all__ = [
    "Profile",
    "AuthSession",
    "TrainerAthlete",
    "Questionnaire",
    "Question",
    "QuestionnaireAssignment",
    "Response",
    "Workout",
    "Exercise",
    "WorkoutAssignment",
]
