"""
User service.

Profile self-service (name, email, password) and admin user management.
Accounts are never hard-deleted: deactivation closes every session and
the gate refuses inactive profiles from then on.  A password change
signs out every session but the one that made it.
"""

import datetime
from typing import Optional

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from coachdesk.core.result import Result, storage_failure
from coachdesk.core.security import get_password_hash, verify_password
from coachdesk.db.repositories.auth_session import AuthSessionRepository
from coachdesk.db.repositories.profile import ProfileRepository
from coachdesk.models.enums import Role
from coachdesk.models.profile import Profile
from coachdesk.schemas.user import PasswordChange, ProfileResponse, ProfileUpdate


class UserService:
    """Service for profile and user administration."""

    def __init__(self, session: Session):
        self.session = session
        self.repository = ProfileRepository(session)
        self.sessions = AuthSessionRepository(session)

    # ------------------------------------------------------------------
    # Own profile
    # ------------------------------------------------------------------

    def get_profile(self, profile_id: int) -> Result[ProfileResponse]:
        try:
            profile = self.repository.get_by_id(profile_id)
        except SQLAlchemyError as e:
            return storage_failure(self.session, "get profile", e)
        if not profile:
            return Result.not_found("User not found")
        return Result.success(ProfileResponse.model_validate(profile))

    def update_profile(self, profile_id: int, data: ProfileUpdate) -> Result[ProfileResponse]:
        try:
            profile = self.repository.get_by_id(profile_id)
            if not profile:
                return Result.not_found("User not found")
            if data.email is not None and data.email.lower() != profile.email.lower():
                if self.repository.exists_by_email(data.email):
                    return Result.invalid("Email already in use")
                profile.email = data.email.lower()
            if data.name is not None:
                profile.name = data.name
            profile.updated_at = datetime.datetime.utcnow()
            profile = self.repository.update(profile)
        except SQLAlchemyError as e:
            return storage_failure(self.session, "update profile", e)
        return Result.success(ProfileResponse.model_validate(profile))

    def change_password(self, profile_id: int, data: PasswordChange,
                        keep_session_id: Optional[str] = None) -> Result[None]:
        """Set a new password and sign out every other session of the user.

        The session *keep_session_id* (the caller's own) stays open.
        """
        try:
            profile = self.repository.get_by_id(profile_id)
            if not profile:
                return Result.not_found("User not found")
            if not verify_password(data.current_password, profile.hashed_password):
                return Result.invalid("Current password is incorrect")
            profile.hashed_password = get_password_hash(data.new_password)
            profile.updated_at = datetime.datetime.utcnow()
            self.repository.update(profile)
            closed = self.sessions.delete_for_user(profile_id, except_id=keep_session_id)
        except SQLAlchemyError as e:
            return storage_failure(self.session, "change password", e)
        logger.info(f"User {profile_id} changed password ({closed} other session(s) closed)")
        return Result.success()

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    def list_users(self, skip: int = 0, limit: int = 100, role: Optional[Role] = None) -> Result[
        list[ProfileResponse]]:
        try:
            profiles = self.repository.get_all(skip, limit, role.value if role else None)
        except SQLAlchemyError as e:
            return storage_failure(self.session, "list users", e)
        return Result.success([ProfileResponse.model_validate(p) for p in profiles])

    def set_role(self, admin: Profile, user_id: int, role: Optional[Role]) -> Result[ProfileResponse]:
        """Assign or clear a user's role.  Admins cannot change their own."""
        if admin.id == user_id:
            return Result.invalid("You cannot change your own role")
        try:
            profile = self.repository.get_by_id(user_id)
            if not profile:
                return Result.not_found("User not found")
            profile.role = role.value if role else None
            profile.updated_at = datetime.datetime.utcnow()
            profile = self.repository.update(profile)
        except SQLAlchemyError as e:
            return storage_failure(self.session, "set role", e)
        logger.info(f"Admin {admin.id} set role of user {user_id} to {profile.role}")
        return Result.success(ProfileResponse.model_validate(profile))

    def deactivate_user(self, admin: Profile, user_id: int) -> Result[ProfileResponse]:
        """Disable an account and close all of its sessions."""
        if admin.id == user_id:
            return Result.invalid("You cannot deactivate your own account")
        try:
            profile = self.repository.get_by_id(user_id)
            if not profile:
                return Result.not_found("User not found")
            profile.is_active = False
            profile.updated_at = datetime.datetime.utcnow()
            profile = self.repository.update(profile)
            closed = self.sessions.delete_for_user(user_id)
        except SQLAlchemyError as e:
            return storage_failure(self.session, "deactivate user", e)
        logger.info(f"Admin {admin.id} deactivated user {user_id} ({closed} session(s) closed)")
        return Result.success(ProfileResponse.model_validate(profile))
