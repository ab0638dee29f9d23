"""Pydantic schemas for Notification."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class NotificationResponse(BaseModel):
    id: UUID
    type: str
    text: str
    target_comment_id: UUID | None = None
    is_read: bool = False
    created_at: datetime

    model_config = {"from_attributes": True}
