"""
Base database configuration.

Import all models here so Alembic can detect them for migrations.
"""

from coachdesk.models.profile import Profile  # noqa: F401
from coachdesk.models.auth_session import AuthSession  # noqa: F401
from coachdesk.models.roster import TrainerAthlete  # noqa: F401
from coachdesk.models.questionnaire import Question, Questionnaire, QuestionnaireAssignment, Response  # noqa: F401
from coachdesk.models.workout import Exercise, Workout, WorkoutAssignment  # noqa: F401
