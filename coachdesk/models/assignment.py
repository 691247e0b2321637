"""
Shared assignment shape.

Questionnaire and workout assignments both link one content item to one
athlete, record who assigned it and carry a lifecycle status.  The
content reference column is declared by each concrete table.
"""

import datetime
from typing import Optional

from sqlmodel import Field, SQLModel


class AssignmentBase(SQLModel):
    """Columns common to every assignment table."""

    assigned_to: int = Field(foreign_key="profiles.id", nullable=False, index=True)
    assigned_by: int = Field(foreign_key="profiles.id", nullable=False, index=True)
    assigned_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow, nullable=False)
    due_date: Optional[datetime.date] = Field(default=None)
    status: str = Field(default="pending", max_length=20, nullable=False)
