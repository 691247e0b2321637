"""
Authentication endpoints.

Handles registration, login/logout and the caller's own profile.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel import Session

from coachdesk.api.dependencies import get_current_user, get_session_token
from coachdesk.api.errors import unwrap
from coachdesk.core.config import settings
from coachdesk.db.session import get_db
from coachdesk.models.profile import Profile
from coachdesk.schemas.token import Token
from coachdesk.schemas.user import PasswordChange, ProfileResponse, ProfileUpdate, UserCreate, UserLogin
from coachdesk.services.identity_service import IdentityService
from coachdesk.services.user_service import UserService

router = APIRouter()


def _set_session_cookie(response: Response, token: Token) -> None:
    response.set_cookie(key=settings.SESSION_COOKIE_NAME, value=token.access_token, httponly=True,
                        secure=settings.SESSION_COOKIE_SECURE, samesite="lax",
                        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60, )


@router.post("/register",
             summary="User registration endpoint.",
             response_model=ProfileResponse,
             status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """
    Register a new user.

    Args:
        user_data: Registration data (email, password, name, optional role)
        db: Database session

    Returns:
        Created profile (without password)

    Raises:
        HTTPException 400: If email already registered
    """
    return IdentityService(db).register(user_data)


@router.post("/login",
             summary="User login endpoint via OAuth2 form (for Swagger UI).",
             response_model=Token)
def login(request: Request, response: Response, form_data: OAuth2PasswordRequestForm = Depends(),
          db: Session = Depends(get_db)):
    """
    Authenticate user via OAuth2 form (for Swagger UI).

    Use email as username.
    """
    login_data = UserLogin(email=form_data.username, password=form_data.password)
    token = IdentityService(db).sign_in(login_data, request.headers.get("user-agent"))
    _set_session_cookie(response, token)
    return token


@router.post("/token",
             summary="User login endpoint via Json.",
             response_model=Token)
def login_json(login_data: UserLogin, request: Request, response: Response, db: Session = Depends(get_db)):
    """Authenticate user via JSON body; also sets the session cookie."""
    token = IdentityService(db).sign_in(login_data, request.headers.get("user-agent"))
    _set_session_cookie(response, token)
    return token


@router.post("/logout",
             summary="Close the current session.",
             status_code=status.HTTP_204_NO_CONTENT)
def logout(response: Response, token: Optional[str] = Depends(get_session_token), db: Session = Depends(get_db)):
    IdentityService(db).sign_out(token)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)


@router.get("/me",
            summary="User info endpoint.",
            response_model=ProfileResponse)
def me(user: Profile = Depends(get_current_user)):
    return user


@router.patch("/me",
              summary="Update own name or email.",
              response_model=ProfileResponse)
def update_me(data: ProfileUpdate, user: Profile = Depends(get_current_user), db: Session = Depends(get_db)):
    return unwrap(UserService(db).update_profile(user.id, data))


@router.put("/me/password",
            summary="Change own password.",
            status_code=status.HTTP_204_NO_CONTENT)
def change_password(data: PasswordChange, user: Profile = Depends(get_current_user),
                    token: Optional[str] = Depends(get_session_token), db: Session = Depends(get_db)):
    """Change the password; the caller's other sessions are signed out."""
    current = IdentityService(db).get_session(token)
    keep = current.session_id if current else None
    unwrap(UserService(db).change_password(user.id, data, keep_session_id=keep))
