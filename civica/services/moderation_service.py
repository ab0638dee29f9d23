"""Moderation queue and moderator actions on comments."""
import logging
import math
from datetime import datetime
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from civica.core.config import settings
from civica.core.exceptions import AuthorizationError, InvalidTransitionError, NotFoundError
from civica.models.comment import Comment
from civica.models.user import User
from civica.schemas.comment import ActionLink
from civica.schemas.moderation import (
    FILTER_LABELS,
    CommentableRef,
    MenuLink,
    QueueFilter,
    QueuePage,
    QueueRow,
    QueueViewState,
)
from civica.services.auth_service import user_to_public
from civica.services.notification_service import create_notification
from civica.services.visibility import Viewer, can_ban_author, can_moderate

logger = logging.getLogger(__name__)

QUEUE_PATH = "/api/v1/moderation/comments"
DEBATES_PATH = "/api/v1/debates"


def _filter_clauses(queue_filter: QueueFilter) -> list:
    # Hidden comments have been dealt with and never show up in the queue.
    clauses = [Comment.flags_count > 0, Comment.hidden_at.is_(None)]
    if queue_filter is QueueFilter.PENDING_REVIEW:
        clauses.append(Comment.reviewed_at.is_(None))
    elif queue_filter is QueueFilter.REVIEWED:
        clauses.append(Comment.reviewed_at.is_not(None))
    return clauses


def filter_menu(state: QueueViewState) -> list[MenuLink]:
    """Navigation links to the filters other than the active one."""
    return [
        MenuLink(label=label, filter=queue_filter, href=state.with_filter(queue_filter).href(QUEUE_PATH))
        for queue_filter, label in FILTER_LABELS.items()
        if queue_filter is not state.filter
    ]


async def get_queue(
    db: AsyncSession,
    state: QueueViewState,
    per_page: int | None = None,
) -> tuple[list[Comment], int]:
    """One page of flagged comments under the state's filter, oldest first, plus the total count."""
    per_page = per_page or settings.MODERATION_PER_PAGE
    clauses = _filter_clauses(state.filter)
    total = await db.scalar(select(func.count(Comment.id)).where(*clauses))
    result = await db.execute(
        select(Comment)
        .where(*clauses)
        .order_by(Comment.created_at, Comment.id)
        .offset((state.page - 1) * per_page)
        .limit(per_page)
        .options(selectinload(Comment.user), selectinload(Comment.debate))
    )
    return list(result.scalars().all()), total or 0


def queue_actions(viewer: Viewer, comment: Comment, state: QueueViewState) -> list[ActionLink]:
    if not can_moderate(viewer, comment):
        return []
    query = state.href("")
    actions = [ActionLink(label="Hide", href=f"{QUEUE_PATH}/{comment.id}/hide{query}")]
    if not comment.is_reviewed:
        actions.append(ActionLink(label="Mark as reviewed", href=f"{QUEUE_PATH}/{comment.id}/review{query}"))
    if can_ban_author(viewer, comment):
        actions.append(ActionLink(label="Ban author", href=f"{QUEUE_PATH}/{comment.id}/ban_author{query}"))
    return actions


def comment_to_row(viewer: Viewer, comment: Comment, state: QueueViewState) -> QueueRow:
    debate = comment.debate
    return QueueRow(
        id=comment.id,
        body=comment.body,
        commentable=CommentableRef(id=debate.id, title=debate.title, href=f"{DEBATES_PATH}/{debate.id}"),
        flags_count=comment.flags_count or 0,
        status="Reviewed" if comment.is_reviewed else "Pending",
        user=user_to_public(comment.user) if comment.user else None,
        created_at=comment.created_at,
        actions=queue_actions(viewer, comment, state),
    )


async def render_queue(
    db: AsyncSession,
    viewer: Viewer,
    state: QueueViewState,
    per_page: int | None = None,
) -> QueuePage:
    per_page = per_page or settings.MODERATION_PER_PAGE
    comments, total = await get_queue(db, state, per_page=per_page)
    total_pages = max(math.ceil(total / per_page), 1)
    return QueuePage(
        filter=state.filter,
        page=state.page,
        per_page=per_page,
        total=total,
        total_pages=total_pages,
        menu=filter_menu(state),
        comments=[comment_to_row(viewer, c, state) for c in comments],
        prev_page_href=state.with_page(state.page - 1).href(QUEUE_PATH) if state.page > 1 else None,
        next_page_href=state.with_page(state.page + 1).href(QUEUE_PATH) if state.page < total_pages else None,
    )


async def get_comment(db: AsyncSession, comment_id: UUID) -> Comment:
    result = await db.execute(
        select(Comment)
        .where(Comment.id == comment_id)
        .options(selectinload(Comment.user), selectinload(Comment.debate))
        .execution_options(populate_existing=True)
    )
    comment = result.scalar_one_or_none()
    if not comment:
        raise NotFoundError("Comment not found")
    return comment


def _authorize(actor: Viewer, comment: Comment, action: str) -> None:
    if not can_moderate(actor, comment):
        logger.warning("Refused %s on comment %s by %s", action, comment.id, actor.id)
        raise AuthorizationError("You are not allowed to moderate this comment")


async def hide_comment(db: AsyncSession, comment_id: UUID, actor: Viewer) -> Comment:
    """Soft-delete a comment. Replies, flags and review state are left alone; hiding twice is a no-op."""
    comment = await get_comment(db, comment_id)
    _authorize(actor, comment, "hide")
    if comment.is_hidden:
        logger.info("Comment %s already hidden", comment.id)
        return comment
    comment.hidden_at = datetime.utcnow()
    await create_notification(
        db,
        user_id=comment.user_id,
        actor_id=actor.id,
        notification_type="comment_hidden",
        text="A moderator hid one of your comments",
        target_comment_id=comment.id,
    )
    await db.flush()
    logger.info("Comment %s hidden by %s", comment.id, actor.id)
    return comment


async def mark_reviewed(db: AsyncSession, comment_id: UUID, actor: Viewer) -> Comment:
    """Dismiss the flags on a comment without hiding it."""
    comment = await get_comment(db, comment_id)
    _authorize(actor, comment, "review")
    if not comment.is_flagged:
        raise InvalidTransitionError("Only flagged comments can be marked as reviewed")
    if comment.reviewed_at is None:
        comment.reviewed_at = datetime.utcnow()
        await db.flush()
    logger.info("Comment %s marked as reviewed by %s", comment.id, actor.id)
    return comment


async def ban_author(db: AsyncSession, comment_id: UUID, actor: Viewer) -> Comment:
    """Ban the comment's author and hide everything they have written."""
    comment = await get_comment(db, comment_id)
    _authorize(actor, comment, "ban_author")
    author: User = comment.user
    if author.is_moderator:
        raise InvalidTransitionError("Cannot ban a moderator")
    if author.is_banned:
        logger.info("User %s already banned", author.id)
        return comment
    now = datetime.utcnow()
    author.is_banned = True
    author.banned_at = now
    await db.execute(
        update(Comment)
        .where(Comment.user_id == author.id, Comment.hidden_at.is_(None))
        .values(hidden_at=now)
        .execution_options(synchronize_session="fetch")
    )
    await create_notification(
        db,
        user_id=author.id,
        actor_id=actor.id,
        notification_type="user_banned",
        text="Your account has been banned by a moderator",
        target_comment_id=comment.id,
    )
    await db.flush()
    logger.info("User %s banned by %s from comment %s", author.id, actor.id, comment.id)
    return comment
