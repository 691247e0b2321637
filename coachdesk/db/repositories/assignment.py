"""
Assignment repository.

Shared by questionnaire and workout assignments; concrete subclasses
declare the assignment table, the content table and the column linking
them.
"""

from typing import Generic, Optional, Type, TypeVar

from sqlmodel import Session, SQLModel, select

from coachdesk.models.profile import Profile

AssignmentT = TypeVar("AssignmentT", bound=SQLModel)
ContentT = TypeVar("ContentT", bound=SQLModel)


class AssignmentRepository(Generic[AssignmentT, ContentT]):
    """Base repository for an assignment table."""

    model: Type[AssignmentT]
    content_model: Type[ContentT]
    content_key: str

    def __init__(self, session: Session):
        self.session = session

    def create_many(self, assignments: list[AssignmentT]) -> list[AssignmentT]:
        """Insert a batch of assignments in one transaction."""
        self.session.add_all(assignments)
        self.session.commit()
        for assignment in assignments:
            self.session.refresh(assignment)
        return assignments

    def get_by_id(self, assignment_id: int) -> Optional[AssignmentT]:
        return self.session.get(self.model, assignment_id)

    def list_for_content(self, content_id: int) -> list[tuple[AssignmentT, Optional[Profile]]]:
        """Assignments of one content item with the assignee's profile."""
        statement = (select(self.model, Profile).outerjoin(Profile, Profile.id == self.model.assigned_to).where(
            self._content_fk() == content_id).order_by(self.model.assigned_at, self.model.id))
        return [(assignment, profile) for assignment, profile in self.session.exec(statement).all()]

    def list_for_assignee(self, athlete_id: int, assigned_by: Optional[int] = None, ) -> list[
        tuple[AssignmentT, ContentT]]:
        """Assignments of one athlete with their content, newest first."""
        statement = (select(self.model, self.content_model).join(self.content_model,
                                                                 self.content_model.id == self._content_fk()).where(
            self.model.assigned_to == athlete_id))
        if assigned_by is not None:
            statement = statement.where(self.model.assigned_by == assigned_by)
        statement = statement.order_by(self.model.assigned_at.desc(), self.model.id.desc())
        return [(assignment, content) for assignment, content in self.session.exec(statement).all()]

    def update(self, assignment: AssignmentT) -> AssignmentT:
        self.session.add(assignment)
        self.session.commit()
        self.session.refresh(assignment)
        return assignment

    def _content_fk(self):
        return getattr(self.model, self.content_key)
