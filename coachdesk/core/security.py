"""
Security utilities.

Provides:
- Password hashing (bcrypt)
- JWT access tokens carrying the user id (``sub``) and session id (``sid``)
- The OAuth2 bearer scheme used by the API
"""

from datetime import datetime, timedelta
from typing import Dict, Optional

import bcrypt
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt

from coachdesk.core.config import settings

# auto_error is off: the session may also arrive as a cookie
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash."""
    if not plain_password or not hashed_password:
        return False
    return bcrypt.checkpw(plain_password.encode("utf-8")[:72], hashed_password.encode("utf-8"))


def get_password_hash(password: str) -> str:
    """Hash a password (bcrypt only looks at the first 72 bytes)."""
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode("utf-8")[:72], salt).decode("utf-8")


def create_access_token(data: Dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str, verify_exp: bool = True) -> Optional[Dict]:
    """Decode and validate a JWT token. Returns ``None`` if invalid or expired.

    ``verify_exp=False`` still checks the signature; sign-out uses it so an
    expired token can still close its session.
    """
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM],
                          options={"verify_exp": verify_exp})
    except JWTError:
        return None
