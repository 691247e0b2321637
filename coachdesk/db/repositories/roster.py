"""
Roster repository.

Trainer/athlete links plus the two join queries the dashboard relies on:
a trainer's athletes and an athlete's trainers.
"""

from typing import Optional

from sqlmodel import Session, select

from coachdesk.models.profile import Profile
from coachdesk.models.roster import TrainerAthlete


class RosterRepository:
    """Repository for TrainerAthlete database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, link: TrainerAthlete) -> TrainerAthlete:
        self.session.add(link)
        self.session.commit()
        self.session.refresh(link)
        return link

    def get(self, trainer_id: int, athlete_id: int) -> Optional[TrainerAthlete]:
        statement = select(TrainerAthlete).where(TrainerAthlete.trainer_id == trainer_id,
                                                 TrainerAthlete.athlete_id == athlete_id)
        return self.session.exec(statement).first()

    # ------------------------------------------------------------------
    # Join queries
    # ------------------------------------------------------------------

    def get_trainer_athletes(self, trainer_id: int) -> list[tuple[TrainerAthlete, Profile]]:
        """Athletes on a trainer's roster, oldest link first."""
        statement = (select(TrainerAthlete, Profile).join(Profile, Profile.id == TrainerAthlete.athlete_id).where(
            TrainerAthlete.trainer_id == trainer_id).order_by(TrainerAthlete.created_at, TrainerAthlete.id))
        return [(link, profile) for link, profile in self.session.exec(statement).all()]

    def get_athlete_trainers(self, athlete_id: int) -> list[tuple[TrainerAthlete, Profile]]:
        """Trainers who have the athlete on their roster."""
        statement = (select(TrainerAthlete, Profile).join(Profile, Profile.id == TrainerAthlete.trainer_id).where(
            TrainerAthlete.athlete_id == athlete_id).order_by(TrainerAthlete.created_at, TrainerAthlete.id))
        return [(link, profile) for link, profile in self.session.exec(statement).all()]

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def update(self, link: TrainerAthlete) -> TrainerAthlete:
        self.session.add(link)
        self.session.commit()
        self.session.refresh(link)
        return link

    def delete(self, trainer_id: int, athlete_id: int) -> bool:
        link = self.get(trainer_id, athlete_id)
        if link:
            self.session.delete(link)
            self.session.commit()
            return True
        return False
