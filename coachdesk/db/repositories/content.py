"""
Trainer-authored content repository.

Questionnaires and workouts share one storage shape: a parent row owned
by a trainer plus an ordered list of child rows (questions, exercises)
pointing back at it.  Concrete repositories only declare which tables
and columns play those parts.

Multi-row writes (create with children, edit children, delete with
dependents) are committed once, so readers never see a parent without
its children or a transiently empty child list.  Editing keeps child ids
stable: rows other tables point at are updated in place, not recreated.
"""

import datetime
from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy import delete, func
from sqlmodel import Session, SQLModel, select

ContentT = TypeVar("ContentT", bound=SQLModel)
ChildT = TypeVar("ChildT", bound=SQLModel)


class ContentRepository(Generic[ContentT, ChildT]):
    """Base repository for a content table and its ordered children."""

    model: Type[ContentT]
    child_model: Type[ChildT]
    assignment_model: Type[SQLModel]
    # Foreign-key column pointing at the parent, on both children and assignments
    parent_key: str
    # Ordering column on the children
    order_key: str
    # Child columns an edit may overwrite in place
    child_fields: tuple[str, ...]

    def __init__(self, session: Session):
        self.session = session

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_by_id(self, content_id: int) -> Optional[ContentT]:
        return self.session.get(self.model, content_id)

    def get_children(self, content_id: int) -> list[ChildT]:
        statement = (select(self.child_model).where(self._child_fk() == content_id).order_by(
            getattr(self.child_model, self.order_key), self.child_model.id))
        return list(self.session.exec(statement).all())

    def list_with_child_counts(self, owner_id: Optional[int] = None) -> list[tuple[ContentT, int]]:
        """List content newest first with the number of children of each.

        ``owner_id=None`` lists every item.
        """
        child_count = (select(self._child_fk().label("parent_id"), func.count().label("n")).group_by(
            self._child_fk()).subquery())
        statement = (select(self.model, func.coalesce(child_count.c.n, 0)).outerjoin(
            child_count, child_count.c.parent_id == self.model.id).order_by(self.model.created_at.desc(),
                                                                             self.model.id.desc()))
        if owner_id is not None:
            statement = statement.where(self.model.created_by == owner_id)
        return [(item, int(count)) for item, count in self.session.exec(statement).all()]

    def referenced_children(self, child_ids: set[int]) -> set[int]:
        """Subset of *child_ids* that other rows still point at.  None by default."""
        return set()

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def create_with_children(self, content: ContentT, children: list[ChildT]) -> ContentT:
        """Insert the parent and its children in a single transaction."""
        self.session.add(content)
        self.session.flush()
        for child in children:
            setattr(child, self.parent_key, content.id)
        self.session.add_all(children)
        self.session.commit()
        self.session.refresh(content)
        return content

    def replace(self, content: ContentT, fields: dict[str, Any], children: list[ChildT]) -> ContentT:
        """Update parent fields and reconcile the child list in one transaction.

        A child carrying the id of an existing child updates that row in
        place, one without an id is inserted, and existing children left
        out of *children* are deleted.  Callers check
        :meth:`referenced_children` first: deleting a referenced child
        violates a foreign key.
        """
        for name, value in fields.items():
            setattr(content, name, value)
        content.updated_at = datetime.datetime.utcnow()
        self.session.add(content)

        existing = {child.id: child for child in self.get_children(content.id)}
        kept = set()
        for child in children:
            current = existing.get(child.id) if child.id is not None else None
            if current is None:
                child.id = None
                setattr(child, self.parent_key, content.id)
                self.session.add(child)
                continue
            for name in self.child_fields:
                setattr(current, name, getattr(child, name))
            self.session.add(current)
            kept.add(current.id)

        removed = set(existing) - kept
        if removed:
            self.session.exec(delete(self.child_model).where(self.child_model.id.in_(removed)))
        self.session.commit()
        self.session.refresh(content)
        return content

    def delete(self, content_id: int) -> bool:
        """Delete the parent with its children, assignments and their dependents."""
        content = self.get_by_id(content_id)
        if not content:
            return False
        self._delete_dependents(content_id)
        assignment_fk = getattr(self.assignment_model, self.parent_key)
        self.session.exec(delete(self.assignment_model).where(assignment_fk == content_id))
        self.session.exec(delete(self.child_model).where(self._child_fk() == content_id))
        self.session.delete(content)
        self.session.commit()
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _child_fk(self):
        return getattr(self.child_model, self.parent_key)

    def _delete_dependents(self, content_id: int) -> None:
        """Hook for rows that reference children or assignments (no commit)."""
