"""Tests for the questionnaire lifecycle and response submission."""

import datetime

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import select

from coachdesk.core.result import FailureKind
from coachdesk.models.questionnaire import Question, QuestionnaireAssignment, Response
from coachdesk.schemas.questionnaire import AnswerCreate, QuestionCreate, QuestionnaireCreate, QuestionnaireUpdate
from coachdesk.services.questionnaire_service import QuestionnaireService


# ======================================================================
# Helpers
# ======================================================================


def _payload(*texts: str, title: str = "Weekly check-in") -> QuestionnaireCreate:
    return QuestionnaireCreate(title=title, description="How was your week?",
                               questions=[QuestionCreate(text=t) for t in texts])


@pytest.fixture
def service(db) -> QuestionnaireService:
    return QuestionnaireService(db)


@pytest.fixture
def questionnaire_id(service, trainer) -> int:
    return service.create_content(trainer.id, _payload("Sleep quality?", "Soreness?", "Mood?")).value


@pytest.fixture
def assignment(service, trainer, athletes, questionnaire_id):
    return service.assign(trainer, questionnaire_id, [athletes[0].id]).value[0]


# ======================================================================
# Create / read
# ======================================================================


class TestCreate:
    def test_children_get_parent_id_and_positional_order(self, service, db, trainer, questionnaire_id):
        questions = db.exec(select(Question).where(Question.questionnaire_id == questionnaire_id)).all()
        assert len(questions) == 3
        assert sorted(q.question_order for q in questions) == [1, 2, 3]

    def test_explicit_order_is_kept(self, service, trainer):
        payload = QuestionnaireCreate(title="Ordered", questions=[QuestionCreate(text="b", question_order=5),
                                                                  QuestionCreate(text="a", question_order=2)])
        detail = service.get_content(trainer, service.create_content(trainer.id, payload).value).value
        assert [(q.text, q.question_order) for q in detail.questions] == [("a", 2), ("b", 5)]

    def test_detail_lists_questions_in_order(self, service, trainer, questionnaire_id):
        detail = service.get_content(trainer, questionnaire_id).value
        assert [q.text for q in detail.questions] == ["Sleep quality?", "Soreness?", "Mood?"]

    def test_unknown_id_is_not_found(self, service, trainer):
        assert service.get_content(trainer, 999).failure is FailureKind.NOT_FOUND

    def test_stranger_cannot_read(self, service, athletes, questionnaire_id):
        assert service.get_content(athletes[1], questionnaire_id).failure is FailureKind.PERMISSION_DENIED

    def test_assignee_can_read(self, service, athletes, questionnaire_id, assignment):
        assert service.get_content(athletes[0], questionnaire_id).ok

    def test_list_owned_with_counts(self, service, trainer, make_profile, questionnaire_id):
        other = make_profile("other@example.com", "trainer")
        service.create_content(other.id, _payload("Only one"))
        summaries = service.list_owned(trainer).value
        assert [(s.id, s.question_count) for s in summaries] == [(questionnaire_id, 3)]

    def test_admin_lists_everything(self, service, admin, trainer, make_profile, questionnaire_id):
        other = make_profile("other@example.com", "trainer")
        service.create_content(other.id, _payload())
        assert len(service.list_owned(admin).value) == 2


# ======================================================================
# Update / delete
# ======================================================================


class TestUpdate:
    def test_replaces_children_and_reorders(self, service, db, trainer, questionnaire_id):
        before = service.get_content(trainer, questionnaire_id).value
        result = service.update_content(trainer, questionnaire_id,
                                        QuestionnaireUpdate(title="Renamed", questions=[QuestionCreate(text="New A"),
                                                                                        QuestionCreate(text="New B")]))
        assert result.ok
        assert result.value.title == "Renamed"
        assert [(q.text, q.question_order) for q in result.value.questions] == [("New A", 1), ("New B", 2)]
        stored = db.exec(select(Question).where(Question.questionnaire_id == questionnaire_id)).all()
        assert len(stored) == 2
        assert result.value.updated_at >= before.updated_at

    def test_only_author_can_update(self, service, make_profile, questionnaire_id):
        other = make_profile("other@example.com", "trainer")
        result = service.update_content(other, questionnaire_id, QuestionnaireUpdate(title="Hijack"))
        assert result.failure is FailureKind.PERMISSION_DENIED

    def test_admin_can_update(self, service, admin, questionnaire_id):
        assert service.update_content(admin, questionnaire_id, QuestionnaireUpdate(title="Fixed typo")).ok

    def test_storage_error_leaves_old_children(self, service, db, trainer, questionnaire_id, monkeypatch):
        def broken_commit():
            raise OperationalError("COMMIT", {}, Exception("connection lost"))

        monkeypatch.setattr(db, "commit", broken_commit)
        result = service.update_content(trainer, questionnaire_id,
                                        QuestionnaireUpdate(title="Lost", questions=[QuestionCreate(text="x")]))
        monkeypatch.undo()

        assert result.failure is FailureKind.TRANSIENT
        detail = service.get_content(trainer, questionnaire_id).value
        assert detail.title == "Weekly check-in"
        assert len(detail.questions) == 3

    def test_edit_after_answers_keeps_answered_question(self, service, db, trainer, athletes, questionnaire_id,
                                                         assignment):
        questions = service.get_content(trainer, questionnaire_id).value.questions
        service.submit_responses(athletes[0], assignment.id,
                                 [AnswerCreate(question_id=questions[0].id, text="7 hours")])

        payload = QuestionnaireUpdate(title="Weekly check-in", questions=[
            QuestionCreate(id=questions[0].id, text="Sleep quality (1-10)?"),
            QuestionCreate(id=questions[1].id, text="Soreness?"),
            QuestionCreate(text="Motivation?")])
        result = service.update_content(trainer, questionnaire_id, payload)

        assert result.ok
        assert [(q.id, q.text) for q in result.value.questions[:2]] == [(questions[0].id, "Sleep quality (1-10)?"),
                                                                        (questions[1].id, "Soreness?")]
        assert result.value.questions[2].text == "Motivation?"
        assert result.value.questions[2].id not in {q.id for q in questions}
        assert db.exec(select(Question).where(Question.id == questions[2].id)).first() is None
        stored = db.exec(select(Response)).all()
        assert [(r.question_id, r.response_text) for r in stored] == [(questions[0].id, "7 hours")]

    def test_answered_question_cannot_be_removed(self, service, trainer, athletes, questionnaire_id, assignment):
        questions = service.get_content(trainer, questionnaire_id).value.questions
        service.submit_responses(athletes[0], assignment.id,
                                 [AnswerCreate(question_id=questions[0].id, text="7 hours")])

        result = service.update_content(trainer, questionnaire_id, QuestionnaireUpdate(
            title="Trimmed", questions=[QuestionCreate(id=questions[1].id, text="Soreness?")]))

        assert result.failure is FailureKind.INVALID
        assert "Answered questions cannot be removed" in result.detail
        assert str(questions[0].id) in result.detail
        detail = service.get_content(trainer, questionnaire_id).value
        assert detail.title == "Weekly check-in"
        assert [q.id for q in detail.questions] == [q.id for q in questions]

    def test_question_from_another_questionnaire_is_invalid(self, service, trainer, questionnaire_id):
        other_id = service.create_content(trainer.id, _payload("Elsewhere")).value
        foreign = service.get_content(trainer, other_id).value.questions[0]
        result = service.update_content(trainer, questionnaire_id, QuestionnaireUpdate(
            title="Weekly check-in", questions=[QuestionCreate(id=foreign.id, text="Moved")]))
        assert result.failure is FailureKind.INVALID
        assert service.get_content(trainer, other_id).value.questions[0].text == "Elsewhere"

    def test_question_listed_twice_is_invalid(self, service, trainer, questionnaire_id):
        kept = service.get_content(trainer, questionnaire_id).value.questions[0]
        result = service.update_content(trainer, questionnaire_id, QuestionnaireUpdate(
            title="Weekly check-in", questions=[QuestionCreate(id=kept.id, text="a"),
                                                QuestionCreate(id=kept.id, text="b")]))
        assert result.failure is FailureKind.INVALID

    def test_ids_are_ignored_on_create(self, service, trainer, questionnaire_id):
        existing = service.get_content(trainer, questionnaire_id).value.questions[0]
        payload = QuestionnaireCreate(title="Copy", questions=[QuestionCreate(id=existing.id, text="Sleep?")])
        copy = service.get_content(trainer, service.create_content(trainer.id, payload).value).value
        assert copy.questions[0].id != existing.id
        assert service.get_content(trainer, questionnaire_id).value.questions[0].text == "Sleep quality?"


class TestDelete:
    def test_removes_children_assignments_and_responses(self, service, db, trainer, athletes, questionnaire_id,
                                                         assignment):
        question = service.get_content(trainer, questionnaire_id).value.questions[0]
        service.submit_responses(athletes[0], assignment.id, [AnswerCreate(question_id=question.id, text="ok")])

        assert service.delete_content(trainer, questionnaire_id).ok
        assert service.get_content(trainer, questionnaire_id).failure is FailureKind.NOT_FOUND
        assert db.exec(select(Question)).all() == []
        assert db.exec(select(QuestionnaireAssignment)).all() == []
        assert db.exec(select(Response)).all() == []

    def test_athlete_cannot_delete(self, service, athletes, questionnaire_id, assignment):
        assert service.delete_content(athletes[0], questionnaire_id).failure is FailureKind.PERMISSION_DENIED


# ======================================================================
# Assignment
# ======================================================================


class TestAssign:
    def test_one_assignment_per_athlete(self, service, trainer, athletes, questionnaire_id):
        due = datetime.date(2026, 11, 1)
        result = service.assign(trainer, questionnaire_id, [a.id for a in athletes], due)
        assert result.ok
        assert sorted(a.assigned_to for a in result.value) == sorted(a.id for a in athletes)
        assert {a.questionnaire_id for a in result.value} == {questionnaire_id}
        assert {a.assigned_by for a in result.value} == {trainer.id}
        assert {a.status.value for a in result.value} == {"pending"}
        assert {a.due_date for a in result.value} == {due}

    def test_duplicate_ids_are_collapsed(self, service, trainer, athletes, questionnaire_id):
        result = service.assign(trainer, questionnaire_id, [athletes[0].id, athletes[0].id])
        assert len(result.value) == 1

    def test_empty_list_is_invalid(self, service, trainer, questionnaire_id):
        assert service.assign(trainer, questionnaire_id, []).failure is FailureKind.INVALID

    def test_non_athlete_is_invalid(self, service, trainer, admin, questionnaire_id):
        assert service.assign(trainer, questionnaire_id, [admin.id]).failure is FailureKind.INVALID

    def test_unknown_questionnaire(self, service, trainer, athletes):
        assert service.assign(trainer, 999, [athletes[0].id]).failure is FailureKind.NOT_FOUND

    def test_listing_views(self, service, trainer, athletes, questionnaire_id):
        service.assign(trainer, questionnaire_id, [athletes[0].id, athletes[1].id])
        by_content = service.list_assignments(trainer, questionnaire_id).value
        assert {a.athlete.email for a in by_content} == {athletes[0].email, athletes[1].email}
        mine = service.list_assigned_to(athletes[0].id).value
        assert len(mine) == 1
        assert mine[0].questionnaire.title == "Weekly check-in"


# ======================================================================
# Status transitions
# ======================================================================


class TestStatus:
    def test_forward_moves(self, service, athletes, assignment):
        assert service.update_assignment_status(athletes[0], assignment.id, "in_progress").value.status.value == \
               "in_progress"
        assert service.update_assignment_status(athletes[0], assignment.id, "completed").value.status.value == \
               "completed"

    def test_backward_move_is_invalid(self, service, athletes, assignment):
        service.update_assignment_status(athletes[0], assignment.id, "completed")
        result = service.update_assignment_status(athletes[0], assignment.id, "pending")
        assert result.failure is FailureKind.INVALID

    def test_same_status_is_a_no_op(self, service, athletes, assignment):
        service.update_assignment_status(athletes[0], assignment.id, "completed")
        assert service.update_assignment_status(athletes[0], assignment.id, "completed").ok

    def test_unknown_status_is_invalid(self, service, athletes, assignment):
        assert service.update_assignment_status(athletes[0], assignment.id, "done").failure is FailureKind.INVALID

    def test_stranger_is_denied(self, service, athletes, assignment):
        result = service.update_assignment_status(athletes[1], assignment.id, "completed")
        assert result.failure is FailureKind.PERMISSION_DENIED

    def test_missing_assignment(self, service, athletes):
        assert service.update_assignment_status(athletes[0], 999, "completed").failure is FailureKind.NOT_FOUND


# ======================================================================
# Responses
# ======================================================================


class TestSubmitResponses:
    def _answers(self, service, trainer, questionnaire_id, count=2):
        questions = service.get_content(trainer, questionnaire_id).value.questions[:count]
        return [AnswerCreate(question_id=q.id, text=f"answer {q.question_order}") for q in questions]

    def test_stores_rows_and_completes(self, service, db, trainer, athletes, questionnaire_id, assignment):
        result = service.submit_responses(athletes[0], assignment.id,
                                          self._answers(service, trainer, questionnaire_id))
        assert result.ok
        assert len(result.value) == 2
        assert len(db.exec(select(Response)).all()) == 2
        assert service.get_assignment(athletes[0], assignment.id).value.status.value == "completed"
        assert service.has_submitted_responses(assignment.id, athletes[0].id).value is True

    def test_status_failure_keeps_rows(self, service, db, trainer, athletes, questionnaire_id, assignment,
                                       monkeypatch):
        def broken_update(_assignment):
            raise OperationalError("UPDATE", {}, Exception("connection lost"))

        monkeypatch.setattr(service.assignments, "update", broken_update)
        result = service.submit_responses(athletes[0], assignment.id,
                                          self._answers(service, trainer, questionnaire_id))
        monkeypatch.undo()

        assert not result.ok
        assert result.failure is FailureKind.TRANSIENT
        assert "Responses saved" in result.detail
        assert len(db.exec(select(Response)).all()) == 2
        assert service.get_assignment(athletes[0], assignment.id).value.status.value == "pending"

    def test_only_assignee_can_submit(self, service, trainer, athletes, questionnaire_id, assignment):
        result = service.submit_responses(athletes[1], assignment.id,
                                          self._answers(service, trainer, questionnaire_id))
        assert result.failure is FailureKind.PERMISSION_DENIED

    def test_foreign_question_is_invalid(self, service, db, trainer, athletes, assignment):
        other_id = service.create_content(trainer.id, _payload("Unrelated")).value
        foreign = service.get_content(trainer, other_id).value.questions[0]
        result = service.submit_responses(athletes[0], assignment.id,
                                          [AnswerCreate(question_id=foreign.id, text="nope")])
        assert result.failure is FailureKind.INVALID
        assert db.exec(select(Response)).all() == []

    def test_empty_submission_is_invalid(self, service, athletes, assignment):
        assert service.submit_responses(athletes[0], assignment.id, []).failure is FailureKind.INVALID

    def test_responses_come_back_in_question_order(self, service, trainer, athletes, questionnaire_id, assignment):
        answers = list(reversed(self._answers(service, trainer, questionnaire_id, count=3)))
        service.submit_responses(athletes[0], assignment.id, answers)
        stored = service.get_assignment_responses(trainer, assignment.id).value
        assert [a.question.question_order for a in stored] == [1, 2, 3]

    def test_not_submitted_before_answering(self, service, athletes, assignment):
        assert service.has_submitted_responses(assignment.id, athletes[0].id).value is False
