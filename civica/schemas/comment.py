"""Pydantic schemas for Comment as rendered for a particular viewer."""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from civica.schemas.user import UserPublic


class CommentCreate(BaseModel):
    body: str = Field(..., min_length=1)
    parent_id: UUID | None = None


class ActionLink(BaseModel):
    label: str  # "Hide", "Ban author", "Mark as reviewed"
    method: str = "POST"
    href: str


class CommentView(BaseModel):
    id: UUID
    debate_id: UUID
    parent_id: UUID | None = None
    body: str
    faded: bool = False
    is_hidden: bool = False
    user: UserPublic | None = None  # None when the comment is redacted for the viewer
    flags_count: int = 0
    is_flagged_by_me: bool = False
    created_at: datetime
    actions: list[ActionLink] = []
    children: list[CommentView] = []
