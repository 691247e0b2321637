"""
Questionnaire API schemas.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from coachdesk.models.enums import QuestionnaireStatus, QuestionType
from coachdesk.schemas.user import ProfileSummary


class QuestionCreate(BaseModel):
    """A question as sent by the editor.  ``question_order`` defaults to its position.

    On update, ``id`` names an existing question to keep; questions without
    one are added.
    """
    id: Optional[int] = None
    text: str = Field(..., min_length=1, max_length=1000)
    type: QuestionType = QuestionType.SHORT_TEXT
    question_order: Optional[int] = Field(None, ge=1)


class QuestionnaireCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    questions: list[QuestionCreate] = Field(default_factory=list)


class QuestionnaireUpdate(QuestionnaireCreate):
    """Full replacement of the fields.  Questions are matched by ``id``: listed ones
    are kept and updated, new ones added, missing ones removed."""


class QuestionResponse(BaseModel):
    id: int
    questionnaire_id: int
    text: str
    type: QuestionType
    question_order: int

    class Config:
        from_attributes = True


class QuestionnaireSummary(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    created_by: int
    created_at: datetime.datetime
    question_count: int = 0


class QuestionnaireDetail(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    created_by: int
    created_at: datetime.datetime
    updated_at: datetime.datetime
    questions: list[QuestionResponse] = Field(default_factory=list)


class AssignmentCreate(BaseModel):
    """Fan-out request: one assignment per athlete id."""
    athlete_ids: list[int] = Field(..., min_length=1)
    due_date: Optional[datetime.date] = None


class QuestionnaireStatusUpdate(BaseModel):
    status: QuestionnaireStatus


class QuestionnaireAssignmentResponse(BaseModel):
    id: int
    questionnaire_id: int
    assigned_to: int
    assigned_by: int
    assigned_at: datetime.datetime
    status: QuestionnaireStatus
    due_date: Optional[datetime.date] = None
    questionnaire: Optional[QuestionnaireSummary] = None
    athlete: Optional[ProfileSummary] = None


class AnswerCreate(BaseModel):
    """One answer; at least one of ``text`` / ``number`` must be given."""
    question_id: int
    text: Optional[str] = Field(None, max_length=5000)
    number: Optional[float] = None

    @model_validator(mode="after")
    def _has_value(self) -> "AnswerCreate":
        if self.text is None and self.number is None:
            raise ValueError("answer needs a text or a number")
        return self


class ResponsesSubmit(BaseModel):
    answers: list[AnswerCreate] = Field(..., min_length=1)


class AnswerResponse(BaseModel):
    id: int
    question_id: int
    assignment_id: int
    user_id: int
    response_text: Optional[str] = None
    response_number: Optional[float] = None
    submitted_at: datetime.datetime
    question: Optional[QuestionResponse] = None


class SubmissionState(BaseModel):
    assignment_id: int
    submitted: bool
