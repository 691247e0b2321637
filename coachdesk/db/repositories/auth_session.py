"""
Authentication session repository.
"""

from typing import Optional

from sqlalchemy import delete
from sqlmodel import Session

from coachdesk.models.auth_session import AuthSession


class AuthSessionRepository:
    """Repository for AuthSession database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, entry: AuthSession) -> AuthSession:
        self.session.add(entry)
        self.session.commit()
        self.session.refresh(entry)
        return entry

    def get_by_id(self, session_id: str) -> Optional[AuthSession]:
        return self.session.get(AuthSession, session_id)

    def delete(self, session_id: str) -> bool:
        """Delete a session.  Returns ``False`` when it was already gone."""
        entry = self.get_by_id(session_id)
        if entry:
            self.session.delete(entry)
            self.session.commit()
            return True
        return False

    def delete_for_user(self, user_id: int, except_id: Optional[str] = None) -> int:
        """Delete every session of a user but *except_id*.  Returns the number removed."""
        statement = delete(AuthSession).where(AuthSession.user_id == user_id)
        if except_id is not None:
            statement = statement.where(AuthSession.id != except_id)
        result = self.session.exec(statement)
        self.session.commit()
        return result.rowcount or 0
