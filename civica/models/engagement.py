"""Engagement models: Flag (abuse report on a comment)."""
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import relationship

from civica.db.session import Base


class Flag(Base):
    """One abuse report per user and comment. Comment.flags_count mirrors the number of rows."""
    __tablename__ = "flags"
    __table_args__ = (UniqueConstraint("user_id", "comment_id", name="uq_flags_user_comment"),)

    id = Column(PG_UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(PG_UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    comment_id = Column(PG_UUID(as_uuid=True), ForeignKey("comments.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="flags")
    comment = relationship("Comment", back_populates="flags")
