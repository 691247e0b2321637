"""
User API schemas.

Pydantic models for registration, login and profile data.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field

from coachdesk.models.enums import Role


# Shared properties
class UserBase(BaseModel):
    """Base user schema with common fields."""
    email: EmailStr
    name: Optional[str] = None


# Request schemas
class UserCreate(UserBase):
    """Schema for user registration.  Admins are only created by other admins."""
    password: str = Field(..., min_length=8, description="Password (min 8 characters)")
    role: Optional[Literal["trainer", "athlete"]] = Field(
        None, description="Leave empty to finish onboarding later")


class UserLogin(BaseModel):
    """Schema for user login."""
    email: EmailStr
    password: str


class ProfileUpdate(BaseModel):
    """Schema for updating one's own profile."""
    email: Optional[EmailStr] = None
    name: Optional[str] = Field(None, max_length=255)


class PasswordChange(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=8)


class RoleUpdate(BaseModel):
    """Schema for an admin setting (or clearing) a user's role."""
    role: Optional[Role] = None


# Response schemas
class ProfileResponse(UserBase):
    """Profile data in API responses (no sensitive data)."""
    id: int
    role: Optional[str] = None
    is_active: bool = True
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProfileSummary(BaseModel):
    """Compact profile used inside assignment and roster listings."""
    id: int
    name: Optional[str] = None
    email: str

    class Config:
        from_attributes = True
