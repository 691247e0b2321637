"""
Identity service.

Registration, sign-in and the session lookups the access gate depends
on.  A session is an ``auth_sessions`` row referenced by the ``sid``
claim of a signed access token; signing out deletes the row.
"""

import uuid
from datetime import datetime, timedelta
from typing import Optional

from fastapi import HTTPException, status
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from coachdesk.core.config import settings
from coachdesk.core.security import create_access_token, decode_access_token, get_password_hash, verify_password
from coachdesk.db.repositories.auth_session import AuthSessionRepository
from coachdesk.db.repositories.profile import ProfileRepository
from coachdesk.models.auth_session import AuthSession
from coachdesk.models.profile import Profile
from coachdesk.schemas.gate import SessionInfo
from coachdesk.schemas.token import Token, TokenData
from coachdesk.schemas.user import UserCreate, UserLogin


class IdentityService:
    """Service for authentication and session management."""

    def __init__(self, session: Session):
        """
        Initialize service with database session.

        Args:
            session: SQLModel database session
        """
        self.session = session
        self.profiles = ProfileRepository(session)
        self.sessions = AuthSessionRepository(session)

    def register(self, user_data: UserCreate) -> Profile:
        """
        Register a new user.

        Args:
            user_data: Registration data

        Returns:
            Created profile

        Raises:
            HTTPException: If email already exists
        """
        if self.profiles.exists_by_email(user_data.email):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already registered")

        profile = Profile(email=user_data.email.lower(), hashed_password=get_password_hash(user_data.password),
                          name=user_data.name, role=user_data.role, )
        profile = self.profiles.create(profile)
        logger.info(f"Registered user {profile.id} with role={profile.role}")
        return profile

    def sign_in(self, login_data: UserLogin, user_agent: Optional[str] = None) -> Token:
        """
        Authenticate a user, open a session and return its access token.

        Raises:
            HTTPException: If credentials are invalid or the account is inactive
        """
        profile = self.profiles.get_by_email(login_data.email)

        if not profile or not verify_password(login_data.password, profile.hashed_password):
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect email or password",
                                headers={"WWW-Authenticate": "Bearer"}, )

        if not profile.is_active:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User account is inactive")

        lifetime = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        entry = self.sessions.create(AuthSession(id=uuid.uuid4().hex, user_id=profile.id,
                                                 user_agent=(user_agent or "")[:255] or None,
                                                 expires_at=datetime.utcnow() + lifetime))
        access_token = create_access_token(data={"sub": str(profile.id), "sid": entry.id}, expires_delta=lifetime)
        logger.info(f"User {profile.id} signed in (session {entry.id[:8]})")
        return Token(access_token=access_token, token_type="bearer")

    def get_session(self, token: Optional[str]) -> Optional[SessionInfo]:
        """
        Resolve the session behind an access token.

        Returns:
            The session, or ``None`` when the token is missing, invalid,
            expired, or its session was signed out
        """
        data = self._token_data(token)
        if data is None:
            return None

        entry = self.sessions.get_by_id(data.session_id)
        if not entry or entry.user_id != data.user_id or entry.expires_at <= datetime.utcnow():
            return None
        return SessionInfo(session_id=entry.id, user_id=entry.user_id, expires_at=entry.expires_at)

    def get_current_user(self, token: Optional[str]) -> Optional[Profile]:
        """Return the profile owning the session, if any."""
        session_info = self.get_session(token)
        if session_info is None:
            return None
        return self.profiles.get_by_id(session_info.user_id)

    def sign_out(self, token: Optional[str]) -> None:
        """
        Close the session behind *token*.

        Calling it again, or with no/garbage token, does nothing.
        """
        data = self._token_data(token, verify_exp=False)
        if data is None:
            return
        try:
            removed = self.sessions.delete(data.session_id)
        except SQLAlchemyError:
            # An earlier failed statement leaves the transaction unusable on Postgres
            self.session.rollback()
            removed = self.sessions.delete(data.session_id)
        if removed:
            logger.info(f"User {data.user_id} signed out (session {data.session_id[:8]})")

    def sign_out_everywhere(self, user_id: int) -> int:
        """Close every session of a user.  Returns the number closed."""
        return self.sessions.delete_for_user(user_id)

    @staticmethod
    def _token_data(token: Optional[str], verify_exp: bool = True) -> Optional[TokenData]:
        if not token:
            return None
        payload = decode_access_token(token, verify_exp=verify_exp)
        if not payload or not payload.get("sid"):
            return None
        try:
            user_id = int(payload.get("sub"))
        except (TypeError, ValueError):
            return None
        return TokenData(user_id=user_id, session_id=payload["sid"])
