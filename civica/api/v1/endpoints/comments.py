"""Actions on a single comment from the debate page: flagging, and moderator hide/ban."""
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from civica.api.deps import get_db, get_current_user
from civica.models.user import User
from civica.schemas.comment import CommentView
from civica.services import moderation_service
from civica.services.debate_service import flag_comment, unflag_comment
from civica.services.thread_service import comment_to_view
from civica.services.visibility import Viewer

router = APIRouter(prefix="/comments", tags=["comments"])


async def _render(db: AsyncSession, viewer: Viewer, comment_id: UUID, flagged: bool = False) -> CommentView:
    comment = await moderation_service.get_comment(db, comment_id)
    return comment_to_view(viewer, comment, {comment.id} if flagged else set())


@router.post("/{comment_id}/flag", response_model=CommentView)
async def flag(
    comment_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await flag_comment(db, comment_id, current_user)
    await db.commit()
    return await _render(db, Viewer.for_user(current_user), comment_id, flagged=True)


@router.delete("/{comment_id}/flag", response_model=CommentView)
async def unflag(
    comment_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await unflag_comment(db, comment_id, current_user)
    await db.commit()
    return await _render(db, Viewer.for_user(current_user), comment_id)


@router.post("/{comment_id}/hide", response_model=CommentView)
async def hide(
    comment_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    viewer = Viewer.for_user(current_user)
    comment = await moderation_service.hide_comment(db, comment_id, viewer)
    await db.commit()
    return comment_to_view(viewer, comment)


@router.post("/{comment_id}/ban_author", response_model=CommentView)
async def ban_author(
    comment_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    viewer = Viewer.for_user(current_user)
    comment = await moderation_service.ban_author(db, comment_id, viewer)
    await db.commit()
    return comment_to_view(viewer, comment)
