"""
Questionnaire database models.

A questionnaire owns an ordered list of questions, is assigned to
athletes, and collects one response row per answered question.
"""

import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from coachdesk.models.assignment import AssignmentBase


class Questionnaire(SQLModel, table=True):
    __tablename__ = "questionnaires"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(nullable=False, max_length=255)
    description: Optional[str] = Field(default=None, max_length=2000)
    created_by: int = Field(foreign_key="profiles.id", nullable=False, index=True)

    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)


class Question(SQLModel, table=True):
    __tablename__ = "questions"

    id: Optional[int] = Field(default=None, primary_key=True)
    questionnaire_id: int = Field(foreign_key="questionnaires.id", nullable=False, index=True)
    text: str = Field(nullable=False, max_length=1000)
    type: str = Field(nullable=False, max_length=20)
    question_order: int = Field(default=1, nullable=False)

    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)


class QuestionnaireAssignment(AssignmentBase, table=True):
    __tablename__ = "questionnaire_assignments"

    id: Optional[int] = Field(default=None, primary_key=True)
    questionnaire_id: int = Field(foreign_key="questionnaires.id", nullable=False, index=True)


class Response(SQLModel, table=True):
    """A single answer.  Rows are only ever inserted, never updated."""

    __tablename__ = "responses"

    id: Optional[int] = Field(default=None, primary_key=True)
    question_id: int = Field(foreign_key="questions.id", nullable=False, index=True)
    assignment_id: int = Field(foreign_key="questionnaire_assignments.id", nullable=False, index=True)
    user_id: int = Field(foreign_key="profiles.id", nullable=False, index=True)
    response_text: Optional[str] = Field(default=None, max_length=5000)
    response_number: Optional[float] = Field(default=None)

    submitted_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
