"""
Pydantic schemas for users and authentication.
"""

from pydantic import BaseModel, EmailStr, Field
from typing import List, Optional

from app.schemas.base import CamelModel


class UserRegisterRequest(CamelModel):
    """Request schema for self-registration. Registered users are never admins."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(
        ...,
        min_length=5,
        max_length=72,  # bcrypt limit
    )
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr


class UserCreateRequest(UserRegisterRequest):
    """Admin-only request schema for creating a user, optionally an admin."""
    is_admin: bool = False


class UserUpdateRequest(CamelModel):
    """Partial user update. The username and admin flag cannot change here."""
    password: Optional[str] = Field(None, min_length=5, max_length=72)
    first_name: Optional[str] = Field(None, min_length=1, max_length=30)
    last_name: Optional[str] = Field(None, min_length=1, max_length=30)
    email: Optional[EmailStr] = None

    class Config:
        extra = "forbid"


class UserLoginRequest(BaseModel):
    """Request schema for token login."""
    username: str
    password: str


class TokenResponse(BaseModel):
    """JWT token response."""
    access_token: str
    token_type: str = "bearer"


class UserResponse(CamelModel):
    """User profile response (no sensitive data)."""
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool


class UserDetailResponse(UserResponse):
    """User profile with the ids of jobs applied to."""
    jobs: List[int] = []


class UserCreateResponse(BaseModel):
    """Response for admin user creation: the profile plus a token for it."""
    user: UserResponse
    access_token: str
    token_type: str = "bearer"
