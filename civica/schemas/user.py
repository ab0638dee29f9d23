"""Pydantic schemas for User."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


class UserBase(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    display_name: str | None = Field(None, max_length=100)


class UserCreate(UserBase):
    email: EmailStr
    password: str = Field(..., min_length=8)


class UserResponse(UserBase):
    id: UUID
    email: str | None = None  # Only in own profile
    is_moderator: bool = False
    is_banned: bool = False
    created_at: datetime

    model_config = {"from_attributes": True}


class UserPublic(UserBase):
    id: UUID
    is_moderator: bool = False

    model_config = {"from_attributes": True}


class Token(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: UserResponse


class TokenRefresh(BaseModel):
    refresh_token: str


class LoginRequest(BaseModel):
    email: EmailStr
    password: str
