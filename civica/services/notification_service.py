"""Notification creation and queries."""
from uuid import UUID

from sqlalchemy import desc, event, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from civica.models.notification import Notification

PENDING_PUSHES = "pending_pushes"


@event.listens_for(Session, "after_commit")
def _send_pending_pushes(session: Session) -> None:
    pushes = session.info.pop(PENDING_PUSHES, [])
    if not pushes:
        return
    from civica.workers.notifications import send_push_notification

    for user_id, text in pushes:
        send_push_notification.delay(user_id, "civica", text)


@event.listens_for(Session, "after_soft_rollback")
def _drop_pending_pushes(session: Session, previous_transaction) -> None:
    # Only a rollback of the outermost transaction discards the whole unit of work.
    if previous_transaction.parent is None:
        session.info.pop(PENDING_PUSHES, None)


async def create_notification(
    db: AsyncSession,
    *,
    user_id: UUID,
    actor_id: UUID,
    notification_type: str,
    text: str,
    target_comment_id: UUID | None = None,
) -> Notification | None:
    """Create a notification. The push is queued once the session commits; no self-notify."""
    if user_id == actor_id:
        return None
    notification = Notification(
        user_id=user_id,
        actor_id=actor_id,
        type=notification_type,
        text=text,
        target_comment_id=target_comment_id,
    )
    db.add(notification)
    db.info.setdefault(PENDING_PUSHES, []).append((str(user_id), text))
    return notification


async def get_notifications(
    db: AsyncSession,
    user_id: UUID,
    *,
    skip: int = 0,
    limit: int = 50,
) -> list[Notification]:
    """Get notifications for user, most recent first."""
    result = await db.execute(
        select(Notification)
        .where(Notification.user_id == user_id)
        .order_by(desc(Notification.created_at))
        .offset(skip)
        .limit(limit)
    )
    return list(result.scalars().all())


async def mark_all_read(db: AsyncSession, user_id: UUID) -> int:
    """Mark all notifications as read. Returns count updated."""
    stmt = (
        update(Notification)
        .where(Notification.user_id == user_id, Notification.is_read.is_(False))
        .values(is_read=True)
    )
    result = await db.execute(stmt)
    return result.rowcount or 0
