"""
Roster endpoints.

Trainers manage the athletes they coach; athletes can list their trainers.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from coachdesk.api.dependencies import require_roles
from coachdesk.api.errors import unwrap
from coachdesk.db.session import get_db
from coachdesk.models.enums import Role
from coachdesk.models.profile import Profile
from coachdesk.schemas.athlete import AthleteSearchResult, RosterAdd, RosterEntry, RosterStatusUpdate
from coachdesk.services.athlete_service import AthleteService

router = APIRouter()

require_coach = require_roles(Role.TRAINER, Role.ADMIN)


@router.get("", summary="Athletes on the current trainer's roster.", response_model=list[RosterEntry], )
def list_roster(db: Session = Depends(get_db), user: Profile = Depends(require_coach), ):
    return unwrap(AthleteService(db).get_trainer_athletes(user.id))


@router.post("", summary="Add an athlete to the roster by email.", response_model=RosterEntry,
             status_code=status.HTTP_201_CREATED, )
def add_athlete(data: RosterAdd, db: Session = Depends(get_db), user: Profile = Depends(require_coach), ):
    return unwrap(AthleteService(db).add_athlete_by_email(user.id, data.email))


@router.get("/search", summary="Search athletes by name or email.", response_model=list[AthleteSearchResult], )
def search_athletes(q: str = Query("", max_length=255), db: Session = Depends(get_db),
                    user: Profile = Depends(require_coach), ):
    return unwrap(AthleteService(db).search_athletes(q))


@router.get("/trainers", summary="Trainers coaching the current athlete.", response_model=list[RosterEntry], )
def list_trainers(db: Session = Depends(get_db), user: Profile = Depends(require_roles(Role.ATHLETE)), ):
    return unwrap(AthleteService(db).get_athlete_trainers(user.id))


@router.patch("/{athlete_id}", summary="Mark a roster entry active or inactive.", response_model=RosterEntry, )
def update_athlete_status(athlete_id: int, data: RosterStatusUpdate, db: Session = Depends(get_db),
                          user: Profile = Depends(require_coach), ):
    return unwrap(AthleteService(db).update_athlete_status(user.id, athlete_id, data.status.value))


@router.delete("/{athlete_id}", summary="Remove an athlete from the roster.",
               status_code=status.HTTP_204_NO_CONTENT, )
def remove_athlete(athlete_id: int, db: Session = Depends(get_db), user: Profile = Depends(require_coach), ):
    unwrap(AthleteService(db).remove_athlete(user.id, athlete_id))
