"""
Questionnaire repositories.

Questionnaires with their questions, questionnaire assignments, and the
append-only responses table.
"""

from typing import Optional

from sqlalchemy import delete, func, or_
from sqlmodel import Session, select

from coachdesk.db.repositories.assignment import AssignmentRepository
from coachdesk.db.repositories.content import ContentRepository
from coachdesk.models.questionnaire import Question, Questionnaire, QuestionnaireAssignment, Response


class QuestionnaireRepository(ContentRepository[Questionnaire, Question]):
    """Questionnaires and their ordered questions."""

    model = Questionnaire
    child_model = Question
    assignment_model = QuestionnaireAssignment
    parent_key = "questionnaire_id"
    order_key = "question_order"
    child_fields = ("text", "type", "question_order")

    def referenced_children(self, child_ids: set[int]) -> set[int]:
        """Questions among *child_ids* that already have answers."""
        if not child_ids:
            return set()
        statement = select(Response.question_id).where(Response.question_id.in_(child_ids)).distinct()
        return set(self.session.exec(statement).all())

    def _delete_dependents(self, content_id: int) -> None:
        question_ids = select(Question.id).where(Question.questionnaire_id == content_id)
        assignment_ids = select(QuestionnaireAssignment.id).where(
            QuestionnaireAssignment.questionnaire_id == content_id)
        self.session.exec(delete(Response).where(
            or_(Response.question_id.in_(question_ids), Response.assignment_id.in_(assignment_ids))))


class QuestionnaireAssignmentRepository(AssignmentRepository[QuestionnaireAssignment, Questionnaire]):
    model = QuestionnaireAssignment
    content_model = Questionnaire
    content_key = "questionnaire_id"


class ResponseRepository:
    """Repository for Response rows.  No update method: responses are append-only."""

    def __init__(self, session: Session):
        self.session = session

    def create_many(self, responses: list[Response]) -> list[Response]:
        self.session.add_all(responses)
        self.session.commit()
        for response in responses:
            self.session.refresh(response)
        return responses

    def list_for_assignment(self, assignment_id: int) -> list[tuple[Response, Optional[Question]]]:
        """Responses of an assignment with their question, in question order."""
        statement = (select(Response, Question).outerjoin(Question, Question.id == Response.question_id).where(
            Response.assignment_id == assignment_id).order_by(Question.question_order, Response.id))
        return [(response, question) for response, question in self.session.exec(statement).all()]

    def count_for_assignment(self, assignment_id: int, user_id: Optional[int] = None) -> int:
        statement = select(func.count()).select_from(Response).where(Response.assignment_id == assignment_id)
        if user_id is not None:
            statement = statement.where(Response.user_id == user_id)
        return self.session.exec(statement).first() or 0
