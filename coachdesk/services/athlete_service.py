"""
Roster service.

Which athletes a trainer coaches, and the reverse view for athletes.
"""

from typing import Optional

from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session

from coachdesk.core.result import Result, storage_failure
from coachdesk.db.repositories.profile import ProfileRepository
from coachdesk.db.repositories.roster import RosterRepository
from coachdesk.models.enums import Role, RosterStatus
from coachdesk.models.profile import Profile
from coachdesk.models.roster import TrainerAthlete
from coachdesk.schemas.athlete import AthleteSearchResult, RosterEntry


class AthleteService:
    """Service for trainer/athlete roster management."""

    def __init__(self, session: Session):
        self.session = session
        self.repository = RosterRepository(session)
        self.profiles = ProfileRepository(session)

    def get_trainer_athletes(self, trainer_id: int) -> Result[list[RosterEntry]]:
        try:
            rows = self.repository.get_trainer_athletes(trainer_id)
        except SQLAlchemyError as e:
            return self._storage_failure("get trainer athletes", e)
        return Result.success([self._to_entry(link, profile) for link, profile in rows])

    def get_athlete_trainers(self, athlete_id: int) -> Result[list[RosterEntry]]:
        try:
            rows = self.repository.get_athlete_trainers(athlete_id)
        except SQLAlchemyError as e:
            return self._storage_failure("get athlete trainers", e)
        return Result.success([self._to_entry(link, profile) for link, profile in rows])

    def is_on_roster(self, trainer_id: int, athlete_id: int) -> Result[bool]:
        try:
            return Result.success(self.repository.get(trainer_id, athlete_id) is not None)
        except SQLAlchemyError as e:
            return self._storage_failure("check roster", e)

    def add_athlete_by_email(self, trainer_id: int, email: str) -> Result[RosterEntry]:
        """Put the athlete registered under *email* on the trainer's roster.

        Adding an athlete who is already on the roster succeeds and
        returns the existing entry.
        """
        try:
            athlete = self.profiles.get_by_email(email)
            if not athlete or athlete.role != Role.ATHLETE:
                return Result.not_found("Athlete not found with that email")

            link = self.repository.get(trainer_id, athlete.id)
            if link is None:
                try:
                    link = self.repository.create(TrainerAthlete(trainer_id=trainer_id, athlete_id=athlete.id))
                    logger.info(f"Athlete {athlete.id} added to roster of trainer {trainer_id}")
                except IntegrityError:
                    # Added concurrently by another request
                    self.session.rollback()
                    link = self.repository.get(trainer_id, athlete.id)
                    if link is None:
                        raise
            return Result.success(self._to_entry(link, athlete))
        except SQLAlchemyError as e:
            return self._storage_failure("add athlete", e)

    def remove_athlete(self, trainer_id: int, athlete_id: int) -> Result[None]:
        try:
            if not self.repository.delete(trainer_id, athlete_id):
                return Result.not_found("Athlete is not on your roster")
        except SQLAlchemyError as e:
            return self._storage_failure("remove athlete", e)
        logger.info(f"Athlete {athlete_id} removed from roster of trainer {trainer_id}")
        return Result.success()

    def update_athlete_status(self, trainer_id: int, athlete_id: int, status: str) -> Result[RosterEntry]:
        try:
            new_status = RosterStatus(status).value
        except ValueError:
            return Result.invalid(f"Unknown roster status '{status}'")
        try:
            link = self.repository.get(trainer_id, athlete_id)
            if link is None:
                return Result.not_found("Athlete is not on your roster")
            link.status = new_status
            link = self.repository.update(link)
            athlete = self.profiles.get_by_id(athlete_id)
        except SQLAlchemyError as e:
            return self._storage_failure("update athlete status", e)
        return Result.success(self._to_entry(link, athlete))

    def search_athletes(self, term: str = "") -> Result[list[AthleteSearchResult]]:
        """Athletes whose name or email contains *term* (case-insensitive)."""
        try:
            athletes = self.profiles.search_athletes(term.strip())
        except SQLAlchemyError as e:
            return self._storage_failure("search athletes", e)
        return Result.success([AthleteSearchResult(id=p.id, name=p.name, email=p.email, created_at=p.created_at)
                               for p in athletes])

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _to_entry(link: TrainerAthlete, profile: Optional[Profile]) -> RosterEntry:
        return RosterEntry(id=profile.id, name=profile.name, email=profile.email, status=link.status,
                           linked_at=link.created_at)

    def _storage_failure(self, action: str, exc: Exception) -> Result:
        return storage_failure(self.session, action, exc)
