"""Pydantic schemas for request/response validation."""

from coachdesk.schemas.token import Token, TokenData
from coachdesk.schemas.user import (
    PasswordChange,
    ProfileResponse,
    ProfileSummary,
    ProfileUpdate,
    RoleUpdate,
    UserCreate,
    UserLogin,
)
from coachdesk.schemas.gate import GateContext, GateDecision, GateOutcome, GateProfile, SessionInfo
from coachdesk.schemas.questionnaire import (
    AnswerCreate,
    AnswerResponse,
    AssignmentCreate,
    QuestionCreate,
    QuestionnaireAssignmentResponse,
    QuestionnaireCreate,
    QuestionnaireDetail,
    QuestionnaireStatusUpdate,
    QuestionnaireSummary,
    QuestionnaireUpdate,
    QuestionResponse,
    ResponsesSubmit,
    SubmissionState,
)
from coachdesk.schemas.workout import (
    ExerciseCreate,
    ExerciseResponse,
    WorkoutAssignmentResponse,
    WorkoutCreate,
    WorkoutDetail,
    WorkoutStatusUpdate,
    WorkoutSummary,
    WorkoutUpdate,
)
from coachdesk.schemas.athlete import AthleteSearchResult, RosterAdd, RosterEntry, RosterStatusUpdate

__all__ = [
    "Token",
    "TokenData",
    "UserCreate",
    "UserLogin",
    "ProfileUpdate",
    "PasswordChange",
    "RoleUpdate",
    "ProfileResponse",
    "ProfileSummary",
    "SessionInfo",
    "GateProfile",
    "GateContext",
    "GateOutcome",
    "GateDecision",
    "QuestionCreate",
    "QuestionnaireCreate",
    "QuestionnaireUpdate",
    "QuestionResponse",
    "QuestionnaireSummary",
    "QuestionnaireDetail",
    "AssignmentCreate",
    "QuestionnaireStatusUpdate",
    "QuestionnaireAssignmentResponse",
    "AnswerCreate",
    "ResponsesSubmit",
    "AnswerResponse",
    "SubmissionState",
    "ExerciseCreate",
    "WorkoutCreate",
    "WorkoutUpdate",
    "ExerciseResponse",
    "WorkoutSummary",
    "WorkoutDetail",
    "WorkoutStatusUpdate",
    "WorkoutAssignmentResponse",
    "RosterAdd",
    "RosterStatusUpdate",
    "RosterEntry",
    "AthleteSearchResult",
]
