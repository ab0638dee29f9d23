"""Debates, comments and abuse flags written by citizens."""
import logging
from uuid import UUID

from sqlalchemy import desc, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from civica.core.exceptions import InvalidTransitionError, NotFoundError
from civica.models.comment import Comment
from civica.models.debate import Debate
from civica.models.engagement import Flag
from civica.models.user import User
from civica.schemas.comment import CommentCreate
from civica.schemas.debate import DebateCreate

logger = logging.getLogger(__name__)


async def create_debate(db: AsyncSession, user_id: UUID, data: DebateCreate) -> Debate:
    debate = Debate(user_id=user_id, title=data.title, description=data.description)
    db.add(debate)
    await db.flush()
    return debate


async def list_debates(db: AsyncSession, skip: int = 0, limit: int = 20) -> list[Debate]:
    result = await db.execute(
        select(Debate)
        .order_by(desc(Debate.created_at))
        .offset(skip)
        .limit(limit)
        .options(selectinload(Debate.user))
    )
    return list(result.scalars().all())


async def get_debate(db: AsyncSession, debate_id: UUID) -> Debate:
    result = await db.execute(
        select(Debate).where(Debate.id == debate_id).options(selectinload(Debate.user))
    )
    debate = result.scalar_one_or_none()
    if not debate:
        raise NotFoundError("Debate not found")
    return debate


async def add_comment(db: AsyncSession, debate_id: UUID, author: User, data: CommentCreate) -> Comment:
    """Attach a comment (or a reply when parent_id is set) to a debate."""
    debate = await get_debate(db, debate_id)
    if data.parent_id:
        parent = await db.scalar(select(Comment).where(Comment.id == data.parent_id))
        if not parent or parent.debate_id != debate.id:
            raise NotFoundError("Parent comment not found")
    comment = Comment(
        user_id=author.id,
        debate_id=debate.id,
        parent_id=data.parent_id,
        body=data.body,
        flags_count=0,
        hidden_at=None,
        reviewed_at=None,
    )
    db.add(comment)
    debate.comments_count = (debate.comments_count or 0) + 1
    await db.flush()
    comment.user = author
    logger.info("Comment %s added to debate %s by %s", comment.id, debate.id, author.id)
    return comment


async def _get_comment(db: AsyncSession, comment_id: UUID) -> Comment:
    comment = await db.scalar(select(Comment).where(Comment.id == comment_id))
    if not comment:
        raise NotFoundError("Comment not found")
    return comment


async def flag_comment(db: AsyncSession, comment_id: UUID, user: User) -> Comment:
    """Report a comment as inappropriate. Reporting the same comment twice counts once."""
    comment = await _get_comment(db, comment_id)
    if comment.user_id == user.id:
        raise InvalidTransitionError("You cannot flag your own comment")
    try:
        async with db.begin_nested():
            db.add(Flag(user_id=user.id, comment_id=comment_id))
    except IntegrityError:
        # uq_flags_user_comment: this user already reported the comment
        return comment
    comment.flags_count = (comment.flags_count or 0) + 1
    await db.flush()
    logger.info("Comment %s flagged by %s (%d flags)", comment.id, user.id, comment.flags_count)
    return comment


async def unflag_comment(db: AsyncSession, comment_id: UUID, user: User) -> Comment:
    comment = await _get_comment(db, comment_id)
    existing = await db.scalar(
        select(Flag).where(Flag.comment_id == comment_id, Flag.user_id == user.id)
    )
    if existing:
        await db.delete(existing)
        comment.flags_count = max(0, (comment.flags_count or 0) - 1)
        await db.flush()
    return comment


async def get_user_flagged_comment_ids(db: AsyncSession, user_id: UUID, comment_ids: list[UUID]) -> set[UUID]:
    if not comment_ids:
        return set()
    result = await db.execute(
        select(Flag.comment_id).where(
            Flag.comment_id.in_(comment_ids),
            Flag.user_id == user_id,
        )
    )
    return {r[0] for r in result.all()}
