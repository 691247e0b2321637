"""
Questionnaire service.

Questionnaire lifecycle plus the response side: athletes submit one
answer per question, after which the assignment is marked completed.
"""

import datetime
from typing import Any, Optional

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from coachdesk.core.result import Result
from coachdesk.db.repositories.questionnaire import (QuestionnaireAssignmentRepository, QuestionnaireRepository,
                                                     ResponseRepository, )
from coachdesk.models.enums import QuestionnaireStatus
from coachdesk.models.profile import Profile
from coachdesk.models.questionnaire import Question, Questionnaire, QuestionnaireAssignment, Response
from coachdesk.schemas.questionnaire import (AnswerCreate, AnswerResponse, QuestionnaireAssignmentResponse,
                                             QuestionnaireCreate, QuestionnaireDetail, QuestionnaireSummary,
                                             QuestionResponse, )
from coachdesk.schemas.user import ProfileSummary
from coachdesk.services.lifecycle import QUESTIONNAIRE_TRANSITIONS, Actor, ContentLifecycleService, child_order


class QuestionnaireService(ContentLifecycleService[Questionnaire, Question, QuestionnaireAssignment]):
    """Service for questionnaire business logic."""

    label = "questionnaire"
    child_label = "question"
    status_enum = QuestionnaireStatus
    transitions = QUESTIONNAIRE_TRANSITIONS
    repository_class = QuestionnaireRepository
    assignment_repository_class = QuestionnaireAssignmentRepository

    def __init__(self, session: Session):
        super().__init__(session)
        self.responses = ResponseRepository(session)

    # ------------------------------------------------------------------
    # Responses
    # ------------------------------------------------------------------

    def submit_responses(self, actor: Actor, assignment_id: int, answers: list[AnswerCreate]) -> Result[list]:
        """
        Store the athlete's answers, then mark the assignment completed.

        The answers are committed before the status changes.  If the
        status update fails, the answers stay stored, the assignment keeps
        its previous status, and the status failure is returned.
        """
        if not answers:
            return Result.invalid("No answers submitted")
        try:
            assignment = self.assignments.get_by_id(assignment_id)
            if not assignment:
                return Result.not_found("Assignment not found")
            if assignment.assigned_to != actor.id:
                return Result.denied("Only the assigned athlete can answer this questionnaire")

            question_ids = {q.id for q in self.repository.get_children(assignment.questionnaire_id)}
            foreign = [a.question_id for a in answers if a.question_id not in question_ids]
            if foreign:
                return Result.invalid(f"Questions {foreign} do not belong to this questionnaire")

            rows = self.responses.create_many([
                Response(assignment_id=assignment_id, question_id=a.question_id, user_id=actor.id,
                         response_text=a.text, response_number=a.number, ) for a in answers])
            saved = [self._to_answer(r) for r in rows]
        except SQLAlchemyError as e:
            return self._storage_failure("submit responses", e)

        logger.info(f"{len(saved)} response(s) stored for assignment {assignment_id}")
        completed = self.update_assignment_status(actor, assignment_id, QuestionnaireStatus.COMPLETED.value)
        if not completed.ok:
            logger.warning(f"Responses for assignment {assignment_id} stored but status not updated: "
                           f"{completed.detail}")
            return Result.fail(completed.failure,
                               f"Responses saved but the assignment could not be completed: {completed.detail}")
        return Result.success(saved)

    def get_assignment_responses(self, actor: Actor, assignment_id: int) -> Result[list]:
        """All answers of an assignment with their question, in question order."""
        try:
            assignment = self.assignments.get_by_id(assignment_id)
            if not assignment:
                return Result.not_found("Assignment not found")
            if not self._takes_part(actor, assignment):
                return Result.denied("Not allowed to view these responses")
            rows = self.responses.list_for_assignment(assignment_id)
        except SQLAlchemyError as e:
            return self._storage_failure("get assignment responses", e)
        return Result.success([self._to_answer(r, q) for r, q in rows])

    def has_submitted_responses(self, assignment_id: int, user_id: int) -> Result[bool]:
        """Whether *user_id* stored at least one answer for the assignment.

        Partial submissions count as submitted.
        """
        try:
            count = self.responses.count_for_assignment(assignment_id, user_id)
        except SQLAlchemyError as e:
            return self._storage_failure("check submitted responses", e)
        return Result.success(count > 0)

    # ------------------------------------------------------------------
    # Lifecycle hooks
    # ------------------------------------------------------------------

    def _new_content(self, owner_id: int, payload: QuestionnaireCreate) -> Questionnaire:
        return Questionnaire(title=payload.title, description=payload.description or None, created_by=owner_id)

    def _content_fields(self, payload: QuestionnaireCreate) -> dict[str, Any]:
        return {"title": payload.title, "description": payload.description or None}

    def _new_children(self, payload: QuestionnaireCreate) -> list[Question]:
        return [Question(id=q.id, text=q.text, type=q.type.value,
                         question_order=child_order(q.question_order, index))
                for index, q in enumerate(payload.questions)]

    def _new_assignment(self, content_id: int, athlete_id: int, assigner_id: int,
                        due_date: Optional[datetime.date]) -> QuestionnaireAssignment:
        return QuestionnaireAssignment(questionnaire_id=content_id, assigned_to=athlete_id, assigned_by=assigner_id,
                                       due_date=due_date, status=QuestionnaireStatus.PENDING.value)

    def _to_summary(self, content: Questionnaire, child_count: int) -> QuestionnaireSummary:
        return QuestionnaireSummary(id=content.id, title=content.title, description=content.description,
                                    created_by=content.created_by, created_at=content.created_at,
                                    question_count=child_count)

    def _to_detail(self, content: Questionnaire, children: list[Question]) -> QuestionnaireDetail:
        return QuestionnaireDetail(id=content.id, title=content.title, description=content.description,
                                   created_by=content.created_by, created_at=content.created_at,
                                   updated_at=content.updated_at,
                                   questions=[QuestionResponse.model_validate(q) for q in children])

    def _to_assignment(self, assignment: QuestionnaireAssignment, content: Optional[Questionnaire] = None,
                       athlete: Optional[Profile] = None) -> QuestionnaireAssignmentResponse:
        return QuestionnaireAssignmentResponse(
            id=assignment.id, questionnaire_id=assignment.questionnaire_id, assigned_to=assignment.assigned_to,
            assigned_by=assignment.assigned_by, assigned_at=assignment.assigned_at, status=assignment.status,
            due_date=assignment.due_date,
            questionnaire=self._to_summary(content, 0) if content is not None else None,
            athlete=ProfileSummary.model_validate(athlete) if athlete is not None else None, )

    @staticmethod
    def _to_answer(response: Response, question: Optional[Question] = None) -> AnswerResponse:
        return AnswerResponse(id=response.id, question_id=response.question_id, assignment_id=response.assignment_id,
                              user_id=response.user_id, response_text=response.response_text,
                              response_number=response.response_number, submitted_at=response.submitted_at,
                              question=QuestionResponse.model_validate(question) if question is not None else None, )
