"""Comment model with its moderation state."""
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import relationship

from civica.db.session import Base


class Comment(Base):
    __tablename__ = "comments"

    id = Column(PG_UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(PG_UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    debate_id = Column(PG_UUID(as_uuid=True), ForeignKey("debates.id", ondelete="CASCADE"), nullable=False, index=True)
    parent_id = Column(PG_UUID(as_uuid=True), ForeignKey("comments.id", ondelete="CASCADE"), nullable=True)
    body = Column(Text, nullable=False)
    flags_count = Column(Integer, default=0, nullable=False)
    hidden_at = Column(DateTime, nullable=True)  # soft delete, never cleared by moderation
    reviewed_at = Column(DateTime, nullable=True)  # flag dismissed by a moderator
    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    user = relationship("User", back_populates="comments")
    debate = relationship("Debate", back_populates="comments")
    parent = relationship("Comment", remote_side="Comment.id", backref="replies")
    flags = relationship("Flag", back_populates="comment", cascade="all, delete-orphan")

    @property
    def is_hidden(self) -> bool:
        return self.hidden_at is not None

    @property
    def is_reviewed(self) -> bool:
        return self.reviewed_at is not None

    @property
    def is_flagged(self) -> bool:
        return (self.flags_count or 0) > 0
