"""Moderation queue for flagged comments.

Every action redirects back to the queue with the filter and page the
moderator was looking at, so they land on the same page after acting.
"""
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from civica.api.deps import get_db, get_current_moderator
from civica.models.user import User
from civica.schemas.moderation import QueuePage, QueueViewState
from civica.services import moderation_service
from civica.services.visibility import Viewer

router = APIRouter(prefix="/moderation", tags=["moderation"])


def queue_state(
    filter: str | None = Query(None, description="all | pending_review | reviewed"),
    page: int = Query(1, ge=1),
) -> QueueViewState:
    return QueueViewState.from_query(filter, page)


def _back_to_queue(state: QueueViewState) -> RedirectResponse:
    return RedirectResponse(
        url=state.href(moderation_service.QUEUE_PATH),
        status_code=status.HTTP_303_SEE_OTHER,
    )


@router.get("/comments", response_model=QueuePage)
async def list_flagged_comments(
    state: QueueViewState = Depends(queue_state),
    current_user: User = Depends(get_current_moderator),
    db: AsyncSession = Depends(get_db),
):
    return await moderation_service.render_queue(db, Viewer.for_user(current_user), state)


@router.post("/comments/{comment_id}/hide")
async def hide_comment(
    comment_id: UUID,
    state: QueueViewState = Depends(queue_state),
    current_user: User = Depends(get_current_moderator),
    db: AsyncSession = Depends(get_db),
):
    await moderation_service.hide_comment(db, comment_id, Viewer.for_user(current_user))
    await db.commit()
    return _back_to_queue(state)


@router.post("/comments/{comment_id}/review")
async def review_comment(
    comment_id: UUID,
    state: QueueViewState = Depends(queue_state),
    current_user: User = Depends(get_current_moderator),
    db: AsyncSession = Depends(get_db),
):
    await moderation_service.mark_reviewed(db, comment_id, Viewer.for_user(current_user))
    await db.commit()
    return _back_to_queue(state)


@router.post("/comments/{comment_id}/ban_author")
async def ban_comment_author(
    comment_id: UUID,
    state: QueueViewState = Depends(queue_state),
    current_user: User = Depends(get_current_moderator),
    db: AsyncSession = Depends(get_db),
):
    await moderation_service.ban_author(db, comment_id, Viewer.for_user(current_user))
    await db.commit()
    return _back_to_queue(state)
