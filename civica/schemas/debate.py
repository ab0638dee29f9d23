"""Pydantic schemas for Debate."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from civica.schemas.comment import CommentView
from civica.schemas.user import UserPublic


class DebateCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""


class DebateResponse(BaseModel):
    id: UUID
    title: str
    description: str = ""
    comments_count: int = 0
    created_at: datetime
    user: UserPublic | None = None

    model_config = {"from_attributes": True}


class DebateThread(DebateResponse):
    comments: list[CommentView] = []
