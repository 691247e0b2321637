"""
Database initialization.

Creates all tables and, optionally, a first admin account.
"""

from typing import Optional

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel

from coachdesk.core.security import get_password_hash
from coachdesk.db.repositories.profile import ProfileRepository
from coachdesk.db.session import engine
from coachdesk.models.enums import Role
from coachdesk.models.profile import Profile


def init_db(admin_email: Optional[str] = None, admin_password: Optional[str] = None) -> None:
    """
    Initialize database schema.

    - Creates all SQLModel tables
    - Creates an admin profile when credentials are given and the email is free
    """
    import coachdesk.db.base  # noqa: F401

    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)
    logger.info("Tables created successfully")

    if admin_email and admin_password:
        try:
            with Session(engine) as session:
                repository = ProfileRepository(session)
                if repository.exists_by_email(admin_email):
                    logger.info(f"Admin {admin_email} already exists")
                else:
                    repository.create(Profile(email=admin_email, hashed_password=get_password_hash(admin_password),
                                              name="Administrator", role=Role.ADMIN.value))
                    logger.info(f"Admin {admin_email} created")
        except SQLAlchemyError as e:
            logger.error(f"Admin bootstrap failed: {e}")
            raise

    logger.info("Database initialization complete!")


if __name__ == "__main__":
    init_db()
