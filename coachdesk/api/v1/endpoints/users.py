"""
User administration endpoints (admin only).
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from coachdesk.api.dependencies import require_roles
from coachdesk.api.errors import unwrap
from coachdesk.db.session import get_db
from coachdesk.models.enums import Role
from coachdesk.models.profile import Profile
from coachdesk.schemas.user import ProfileResponse, RoleUpdate
from coachdesk.services.user_service import UserService

router = APIRouter()

require_admin = require_roles(Role.ADMIN)


@router.get("", summary="List users.", response_model=list[ProfileResponse], )
def list_users(skip: int = Query(0, ge=0), limit: int = Query(100, ge=1, le=500),
               role: Optional[Role] = Query(None), db: Session = Depends(get_db),
               admin: Profile = Depends(require_admin), ):
    return unwrap(UserService(db).list_users(skip, limit, role))


@router.get("/{user_id}", summary="Get a user.", response_model=ProfileResponse, )
def get_user(user_id: int, db: Session = Depends(get_db), admin: Profile = Depends(require_admin), ):
    return unwrap(UserService(db).get_profile(user_id))


@router.put("/{user_id}/role", summary="Set or clear a user's role.", response_model=ProfileResponse, )
def set_role(user_id: int, data: RoleUpdate, db: Session = Depends(get_db),
             admin: Profile = Depends(require_admin), ):
    return unwrap(UserService(db).set_role(admin, user_id, data.role))


@router.delete("/{user_id}", summary="Deactivate a user and close their sessions.", response_model=ProfileResponse, )
def deactivate_user(user_id: int, db: Session = Depends(get_db), admin: Profile = Depends(require_admin), ):
    return unwrap(UserService(db).deactivate_user(admin, user_id))
