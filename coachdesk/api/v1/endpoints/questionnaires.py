"""
Questionnaire endpoints.

Authoring and assignment for trainers; answering for athletes.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from coachdesk.api.dependencies import get_current_user, require_roles
from coachdesk.api.errors import unwrap
from coachdesk.db.session import get_db
from coachdesk.models.enums import Role
from coachdesk.models.profile import Profile
from coachdesk.schemas.questionnaire import (AnswerResponse, AssignmentCreate, QuestionnaireAssignmentResponse,
                                             QuestionnaireCreate, QuestionnaireDetail, QuestionnaireStatusUpdate,
                                             QuestionnaireSummary, QuestionnaireUpdate, ResponsesSubmit,
                                             SubmissionState, )
from coachdesk.services.questionnaire_service import QuestionnaireService

router = APIRouter()

require_author = require_roles(Role.TRAINER, Role.ADMIN)


@router.post("", summary="Create a questionnaire with its questions.", response_model=QuestionnaireDetail,
             status_code=status.HTTP_201_CREATED, )
def create_questionnaire(data: QuestionnaireCreate, db: Session = Depends(get_db),
                         user: Profile = Depends(require_author), ):
    service = QuestionnaireService(db)
    questionnaire_id = unwrap(service.create_content(user.id, data))
    return unwrap(service.get_content(user, questionnaire_id))


@router.get("", summary="List own questionnaires with question counts.", response_model=list[QuestionnaireSummary], )
def list_questionnaires(db: Session = Depends(get_db), user: Profile = Depends(require_author), ):
    return unwrap(QuestionnaireService(db).list_owned(user))


@router.get("/assigned", summary="Questionnaires assigned to the current user.",
            response_model=list[QuestionnaireAssignmentResponse], )
def list_assigned(assigned_by: Optional[int] = Query(None, description="Only those assigned by this trainer"),
                  db: Session = Depends(get_db), user: Profile = Depends(get_current_user), ):
    return unwrap(QuestionnaireService(db).list_assigned_to(user.id, assigned_by))


@router.get("/{questionnaire_id}", summary="Get a questionnaire with its questions.",
            response_model=QuestionnaireDetail, )
def get_questionnaire(questionnaire_id: int, db: Session = Depends(get_db),
                      user: Profile = Depends(get_current_user), ):
    return unwrap(QuestionnaireService(db).get_content(user, questionnaire_id))


@router.put("/{questionnaire_id}", summary="Replace a questionnaire and its questions.",
            response_model=QuestionnaireDetail, )
def update_questionnaire(questionnaire_id: int, data: QuestionnaireUpdate, db: Session = Depends(get_db),
                         user: Profile = Depends(require_author), ):
    return unwrap(QuestionnaireService(db).update_content(user, questionnaire_id, data))


@router.delete("/{questionnaire_id}", summary="Delete a questionnaire.", status_code=status.HTTP_204_NO_CONTENT, )
def delete_questionnaire(questionnaire_id: int, db: Session = Depends(get_db),
                         user: Profile = Depends(require_author), ):
    unwrap(QuestionnaireService(db).delete_content(user, questionnaire_id))


@router.post("/{questionnaire_id}/assignments", summary="Assign a questionnaire to athletes.",
             response_model=list[QuestionnaireAssignmentResponse], status_code=status.HTTP_201_CREATED, )
def assign_questionnaire(questionnaire_id: int, data: AssignmentCreate, db: Session = Depends(get_db),
                         user: Profile = Depends(require_author), ):
    return unwrap(QuestionnaireService(db).assign(user, questionnaire_id, data.athlete_ids, data.due_date))


@router.get("/{questionnaire_id}/assignments", summary="Assignments of a questionnaire.",
            response_model=list[QuestionnaireAssignmentResponse], )
def list_questionnaire_assignments(questionnaire_id: int, db: Session = Depends(get_db),
                                   user: Profile = Depends(require_author), ):
    return unwrap(QuestionnaireService(db).list_assignments(user, questionnaire_id))


@router.get("/assignments/{assignment_id}", summary="Get one assignment.",
            response_model=QuestionnaireAssignmentResponse, )
def get_assignment(assignment_id: int, db: Session = Depends(get_db), user: Profile = Depends(get_current_user), ):
    return unwrap(QuestionnaireService(db).get_assignment(user, assignment_id))


@router.patch("/assignments/{assignment_id}/status", summary="Move an assignment forward.",
              response_model=QuestionnaireAssignmentResponse, )
def update_assignment_status(assignment_id: int, data: QuestionnaireStatusUpdate, db: Session = Depends(get_db),
                             user: Profile = Depends(get_current_user), ):
    return unwrap(QuestionnaireService(db).update_assignment_status(user, assignment_id, data.status.value))


@router.post("/assignments/{assignment_id}/responses", summary="Submit answers and complete the assignment.",
             response_model=list[AnswerResponse], status_code=status.HTTP_201_CREATED, )
def submit_responses(assignment_id: int, data: ResponsesSubmit, db: Session = Depends(get_db),
                     user: Profile = Depends(get_current_user), ):
    return unwrap(QuestionnaireService(db).submit_responses(user, assignment_id, data.answers))


@router.get("/assignments/{assignment_id}/responses", summary="Answers of an assignment.",
            response_model=list[AnswerResponse], )
def get_responses(assignment_id: int, db: Session = Depends(get_db), user: Profile = Depends(get_current_user), ):
    return unwrap(QuestionnaireService(db).get_assignment_responses(user, assignment_id))


@router.get("/assignments/{assignment_id}/submitted", summary="Whether the current user already answered.",
            response_model=SubmissionState, )
def get_submission_state(assignment_id: int, db: Session = Depends(get_db),
                         user: Profile = Depends(get_current_user), ):
    submitted = unwrap(QuestionnaireService(db).has_submitted_responses(assignment_id, user.id))
    return SubmissionState(assignment_id=assignment_id, submitted=submitted)
