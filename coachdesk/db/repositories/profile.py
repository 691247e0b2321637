"""
Profile repository.

Handles database operations for the Profile model.
"""

from typing import Optional

from sqlalchemy import func, or_
from sqlmodel import Session, select

from coachdesk.models.enums import Role
from coachdesk.models.profile import Profile


class ProfileRepository:
    """Repository for Profile database operations."""

    def __init__(self, session: Session):
        """
        Initialize repository with database session.

        Args:
            session: SQLModel database session
        """
        self.session = session

    def create(self, profile: Profile) -> Profile:
        """
        Create a new profile in the database.

        Args:
            profile: Profile instance to create

        Returns:
            Created profile with generated id
        """
        self.session.add(profile)
        self.session.commit()
        self.session.refresh(profile)
        return profile

    def get_by_id(self, profile_id: int) -> Optional[Profile]:
        """
        Get profile by ID.

        Args:
            profile_id: Profile ID

        Returns:
            Profile instance if found, None otherwise
        """
        return self.session.get(Profile, profile_id)

    def get_by_email(self, email: str) -> Optional[Profile]:
        """
        Get profile by email address (case-insensitive).

        Args:
            email: Profile email

        Returns:
            Profile instance if found, None otherwise
        """
        statement = select(Profile).where(func.lower(Profile.email) == email.lower())
        return self.session.exec(statement).first()

    def get_many(self, profile_ids: list[int]) -> list[Profile]:
        """Get all profiles whose id is in *profile_ids*."""
        if not profile_ids:
            return []
        statement = select(Profile).where(Profile.id.in_(profile_ids))
        return list(self.session.exec(statement).all())

    def get_all(self, skip: int = 0, limit: int = 100, role: Optional[str] = None) -> list[Profile]:
        """
        Get all profiles with pagination, optionally filtered by role.

        Args:
            skip: Number of records to skip
            limit: Maximum number of records to return
            role: Only return profiles with this role

        Returns:
            List of profiles
        """
        statement = select(Profile)
        if role is not None:
            statement = statement.where(Profile.role == role)
        statement = statement.order_by(Profile.id).offset(skip).limit(limit)
        return list(self.session.exec(statement).all())

    def search_athletes(self, term: str = "", limit: int = 50) -> list[Profile]:
        """
        Find athlete profiles whose name or email contains *term*.

        Args:
            term: Case-insensitive substring; empty matches every athlete
            limit: Maximum number of records to return

        Returns:
            List of athlete profiles ordered by name
        """
        statement = select(Profile).where(Profile.role == Role.ATHLETE.value, Profile.is_active == True)  # noqa: E712
        if term:
            pattern = f"%{term.lower()}%"
            statement = statement.where(or_(func.lower(Profile.name).like(pattern),
                                            func.lower(Profile.email).like(pattern)))
        statement = statement.order_by(Profile.name, Profile.email).limit(limit)
        return list(self.session.exec(statement).all())

    def update(self, profile: Profile) -> Profile:
        """
        Update an existing profile.

        Args:
            profile: Profile instance with updated data

        Returns:
            Updated profile
        """
        self.session.add(profile)
        self.session.commit()
        self.session.refresh(profile)
        return profile

    def exists_by_email(self, email: str) -> bool:
        """
        Check if a profile with the given email exists.

        Args:
            email: Email to check

        Returns:
            True if profile exists, False otherwise
        """
        return self.get_by_email(email) is not None
