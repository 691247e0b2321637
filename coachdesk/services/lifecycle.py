"""
Assignment lifecycle shared by questionnaires and workouts.

Both content kinds follow the same path: a trainer creates an item with
ordered children, edits it (children are matched by id and kept, added
or removed; answered ones cannot be removed), fans
it out to athletes as one assignment per athlete, and the assignment
then moves forward through its status lifecycle.

Every operation returns a :class:`~coachdesk.core.result.Result`.
Storage errors are rolled back, logged and reported as a failure kind
instead of being raised, so callers can tell not-found, denied, invalid
and transient failures apart.

Status transitions are forward-only.  Re-applying the current status is
accepted as a no-op; any move not listed in the lifecycle table is
rejected as ``INVALID``.
"""

import datetime
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Generic, Optional, Type, TypeVar, Union

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel

from coachdesk.core.result import Result, storage_failure
from coachdesk.db.repositories.assignment import AssignmentRepository
from coachdesk.db.repositories.content import ContentRepository
from coachdesk.db.repositories.profile import ProfileRepository
from coachdesk.models.enums import QuestionnaireStatus, Role, WorkoutStatus
from coachdesk.models.profile import Profile
from coachdesk.schemas.gate import GateProfile

# Anything with ``id`` and ``role``: an ORM profile or the gate's frozen copy
Actor = Union[Profile, GateProfile]

ContentT = TypeVar("ContentT", bound=SQLModel)
ChildT = TypeVar("ChildT", bound=SQLModel)
AssignmentT = TypeVar("AssignmentT", bound=SQLModel)

QUESTIONNAIRE_TRANSITIONS: dict[str, frozenset[str]] = {
    QuestionnaireStatus.PENDING.value: frozenset({QuestionnaireStatus.IN_PROGRESS.value,
                                                  QuestionnaireStatus.COMPLETED.value}),
    QuestionnaireStatus.IN_PROGRESS.value: frozenset({QuestionnaireStatus.COMPLETED.value}),
    QuestionnaireStatus.COMPLETED.value: frozenset(),
}

WORKOUT_TRANSITIONS: dict[str, frozenset[str]] = {
    WorkoutStatus.PENDING.value: frozenset({WorkoutStatus.COMPLETED.value, WorkoutStatus.CANCELED.value}),
    WorkoutStatus.COMPLETED.value: frozenset(),
    WorkoutStatus.CANCELED.value: frozenset(),
}


def is_admin(actor: Actor) -> bool:
    return actor.role == Role.ADMIN


def is_allowed_transition(transitions: dict[str, frozenset[str]], current: str, new: str) -> bool:
    """``True`` if *current* -> *new* is a forward move (or no move at all)."""
    return new == current or new in transitions.get(current, frozenset())


def child_order(explicit: Optional[int], index: int) -> int:
    """Order index of a child: the explicit one, else its 1-based position."""
    return explicit if explicit else index + 1


class ContentLifecycleService(ABC, Generic[ContentT, ChildT, AssignmentT]):
    """Create -> assign -> progress lifecycle for one content kind."""

    label: str
    child_label: str
    status_enum: Type[Enum]
    transitions: dict[str, frozenset[str]]
    repository_class: Type[ContentRepository]
    assignment_repository_class: Type[AssignmentRepository]

    def __init__(self, session: Session):
        self.session = session
        self.repository = self.repository_class(session)
        self.assignments = self.assignment_repository_class(session)
        self.profiles = ProfileRepository(session)

    # ------------------------------------------------------------------
    # Kind-specific hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def _new_content(self, owner_id: int, payload: Any) -> ContentT:
        ...

    @abstractmethod
    def _content_fields(self, payload: Any) -> dict[str, Any]:
        """Parent columns an update overwrites."""
        ...

    @abstractmethod
    def _new_children(self, payload: Any) -> list[ChildT]:
        ...

    @abstractmethod
    def _new_assignment(self, content_id: int, athlete_id: int, assigner_id: int,
                        due_date: Optional[datetime.date]) -> AssignmentT:
        ...

    @abstractmethod
    def _to_summary(self, content: ContentT, child_count: int) -> Any:
        ...

    @abstractmethod
    def _to_detail(self, content: ContentT, children: list[ChildT]) -> Any:
        ...

    @abstractmethod
    def _to_assignment(self, assignment: AssignmentT, content: Optional[ContentT] = None,
                       athlete: Optional[Profile] = None) -> Any:
        ...

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    def create_content(self, owner_id: int, payload: Any) -> Result[int]:
        """Persist a new item and its children.  Returns the new id."""
        children = self._new_children(payload)
        for child in children:
            child.id = None
        try:
            content = self.repository.create_with_children(self._new_content(owner_id, payload), children)
        except SQLAlchemyError as e:
            return self._storage_failure(f"create {self.label}", e)
        logger.info(f"{self.label.capitalize()} {content.id} created by user {owner_id}")
        return Result.success(content.id)

    def get_content(self, actor: Actor, content_id: int) -> Result[Any]:
        """Item with ordered children; readable by its owner, admins and assignees."""
        try:
            content = self.repository.get_by_id(content_id)
            if not content:
                return Result.not_found(f"{self.label.capitalize()} not found")
            if not self._can_read(actor, content):
                return Result.denied(f"Not allowed to view this {self.label}")
            return Result.success(self._to_detail(content, self.repository.get_children(content_id)))
        except SQLAlchemyError as e:
            return self._storage_failure(f"get {self.label}", e)

    def list_owned(self, actor: Actor) -> Result[list]:
        """Items authored by *actor* (every item for admins), newest first."""
        try:
            rows = self.repository.list_with_child_counts(None if is_admin(actor) else actor.id)
        except SQLAlchemyError as e:
            return self._storage_failure(f"list {self.label}s", e)
        return Result.success([self._to_summary(content, count) for content, count in rows])

    def update_content(self, actor: Actor, content_id: int, payload: Any) -> Result[Any]:
        """Overwrite the parent fields and reconcile the child list.

        Children sent with an ``id`` update that child in place, the others
        are added, and stored children missing from the payload are removed.
        Removing a child that other rows reference (an answered question)
        is rejected as ``INVALID`` and nothing is written.
        """
        try:
            content = self.repository.get_by_id(content_id)
            if not content:
                return Result.not_found(f"{self.label.capitalize()} not found")
            if not self._can_edit(actor, content):
                return Result.denied(f"Only the author can edit this {self.label}")
            children = self._new_children(payload)
            rejected = self._check_children(content_id, children)
            if rejected is not None:
                return rejected
            content = self.repository.replace(content, self._content_fields(payload), children)
            detail = self._to_detail(content, self.repository.get_children(content_id))
        except SQLAlchemyError as e:
            return self._storage_failure(f"update {self.label}", e)
        logger.info(f"{self.label.capitalize()} {content_id} updated by user {actor.id}")
        return Result.success(detail)

    def delete_content(self, actor: Actor, content_id: int) -> Result[None]:
        """Delete an item together with its children, assignments and answers."""
        try:
            content = self.repository.get_by_id(content_id)
            if not content:
                return Result.not_found(f"{self.label.capitalize()} not found")
            if not self._can_edit(actor, content):
                return Result.denied(f"Only the author can delete this {self.label}")
            self.repository.delete(content_id)
        except SQLAlchemyError as e:
            return self._storage_failure(f"delete {self.label}", e)
        logger.info(f"{self.label.capitalize()} {content_id} deleted by user {actor.id}")
        return Result.success()

    # ------------------------------------------------------------------
    # Assignments
    # ------------------------------------------------------------------

    def assign(self, actor: Actor, content_id: int, athlete_ids: list[int],
               due_date: Optional[datetime.date] = None) -> Result[list]:
        """Create one assignment per distinct athlete, all pointing at *content_id*."""
        unique_ids = list(dict.fromkeys(athlete_ids))
        if not unique_ids:
            return Result.invalid("At least one athlete is required")
        try:
            content = self.repository.get_by_id(content_id)
            if not content:
                return Result.not_found(f"{self.label.capitalize()} not found")
            if not self._can_edit(actor, content):
                return Result.denied(f"Only the author can assign this {self.label}")

            athletes = {p.id: p for p in self.profiles.get_many(unique_ids) if p.role == Role.ATHLETE}
            unknown = [athlete_id for athlete_id in unique_ids if athlete_id not in athletes]
            if unknown:
                return Result.invalid(f"Not athletes: {unknown}")

            created = self.assignments.create_many(
                [self._new_assignment(content_id, athlete_id, actor.id, due_date) for athlete_id in unique_ids])
        except SQLAlchemyError as e:
            return self._storage_failure(f"assign {self.label}", e)
        logger.info(f"{self.label.capitalize()} {content_id} assigned to {len(created)} athlete(s)")
        return Result.success([self._to_assignment(a, content, athletes.get(a.assigned_to)) for a in created])

    def list_assignments(self, actor: Actor, content_id: int) -> Result[list]:
        """Assignments of one item with the athlete each one targets."""
        try:
            content = self.repository.get_by_id(content_id)
            if not content:
                return Result.not_found(f"{self.label.capitalize()} not found")
            if not self._can_edit(actor, content):
                return Result.denied(f"Not allowed to view assignments of this {self.label}")
            rows = self.assignments.list_for_content(content_id)
        except SQLAlchemyError as e:
            return self._storage_failure(f"list {self.label} assignments", e)
        return Result.success([self._to_assignment(a, athlete=athlete) for a, athlete in rows])

    def list_assigned_to(self, athlete_id: int, assigned_by: Optional[int] = None) -> Result[list]:
        """Assignments of one athlete with their content, newest first."""
        try:
            rows = self.assignments.list_for_assignee(athlete_id, assigned_by)
        except SQLAlchemyError as e:
            return self._storage_failure(f"list assigned {self.label}s", e)
        return Result.success([self._to_assignment(a, content) for a, content in rows])

    def get_assignment(self, actor: Actor, assignment_id: int) -> Result[Any]:
        try:
            assignment = self.assignments.get_by_id(assignment_id)
            if not assignment:
                return Result.not_found("Assignment not found")
            if not self._takes_part(actor, assignment):
                return Result.denied("Not allowed to view this assignment")
            content = self.repository.get_by_id(self._content_id(assignment))
        except SQLAlchemyError as e:
            return self._storage_failure(f"get {self.label} assignment", e)
        return Result.success(self._to_assignment(assignment, content))

    def update_assignment_status(self, actor: Actor, assignment_id: int, new_status: str) -> Result[Any]:
        """Move an assignment forward in its lifecycle."""
        try:
            target = self.status_enum(new_status).value
        except ValueError:
            return Result.invalid(f"Unknown {self.label} status '{new_status}'")
        try:
            assignment = self.assignments.get_by_id(assignment_id)
            if not assignment:
                return Result.not_found("Assignment not found")
            if not self._takes_part(actor, assignment):
                return Result.denied("Not allowed to change this assignment")
            if not is_allowed_transition(self.transitions, assignment.status, target):
                return Result.invalid(f"Cannot move {self.label} assignment from '{assignment.status}' to '{target}'")
            if assignment.status != target:
                assignment.status = target
                assignment = self.assignments.update(assignment)
                logger.info(f"{self.label.capitalize()} assignment {assignment_id} -> {target}")
        except SQLAlchemyError as e:
            return self._storage_failure(f"update {self.label} assignment status", e)
        return Result.success(self._to_assignment(assignment))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _content_id(self, assignment: AssignmentT) -> int:
        return getattr(assignment, self.assignments.content_key)

    def _check_children(self, content_id: int, children: list[ChildT]) -> Optional[Result]:
        """Failure for an edit whose child ids cannot be applied, else ``None``."""
        stored = {child.id for child in self.repository.get_children(content_id)}
        sent = [child.id for child in children if child.id is not None]
        if len(sent) != len(set(sent)):
            return Result.invalid(f"Each {self.child_label} may only be listed once")
        unknown = set(sent) - stored
        if unknown:
            return Result.invalid(f"Unknown {self.child_label} ids for this {self.label}: {sorted(unknown)}")
        locked = self.repository.referenced_children(stored - set(sent))
        if locked:
            return Result.invalid(f"Answered {self.child_label}s cannot be removed: {sorted(locked)}")
        return None

    @staticmethod
    def _can_edit(actor: Actor, content: ContentT) -> bool:
        return is_admin(actor) or content.created_by == actor.id

    def _can_read(self, actor: Actor, content: ContentT) -> bool:
        if self._can_edit(actor, content):
            return True
        return any(a.assigned_to == actor.id for a, _ in self.assignments.list_for_content(content.id))

    @staticmethod
    def _takes_part(actor: Actor, assignment: AssignmentT) -> bool:
        return is_admin(actor) or actor.id in (assignment.assigned_to, assignment.assigned_by)

    def _storage_failure(self, action: str, exc: Exception) -> Result:
        return storage_failure(self.session, action, exc)
