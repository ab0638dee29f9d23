"""Debates and their comment threads."""
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from civica.api.deps import get_db, get_current_user, get_viewer
from civica.models.user import User
from civica.schemas.comment import CommentCreate, CommentView
from civica.schemas.debate import DebateCreate, DebateResponse, DebateThread
from civica.services.auth_service import user_to_public
from civica.services.debate_service import add_comment, create_debate, get_debate, list_debates
from civica.services.thread_service import comment_to_view, render_thread
from civica.services.visibility import Viewer

router = APIRouter(prefix="/debates", tags=["debates"])


@router.post("", response_model=DebateResponse, status_code=status.HTTP_201_CREATED)
async def create_debate_endpoint(
    data: DebateCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    debate = await create_debate(db, current_user.id, data)
    await db.commit()
    return DebateResponse(
        id=debate.id,
        title=debate.title,
        description=debate.description or "",
        comments_count=debate.comments_count or 0,
        created_at=debate.created_at,
        user=user_to_public(current_user),
    )


@router.get("", response_model=list[DebateResponse])
async def list_debates_endpoint(
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=50),
    db: AsyncSession = Depends(get_db),
):
    debates = await list_debates(db, skip=skip, limit=limit)
    return [
        DebateResponse(
            id=d.id,
            title=d.title,
            description=d.description or "",
            comments_count=d.comments_count or 0,
            created_at=d.created_at,
            user=user_to_public(d.user) if d.user else None,
        )
        for d in debates
    ]


@router.get("/{debate_id}", response_model=DebateThread)
async def show_debate(
    debate_id: UUID,
    viewer: Viewer = Depends(get_viewer),
    db: AsyncSession = Depends(get_db),
):
    """Debate with its full comment tree, rendered for the current viewer."""
    debate = await get_debate(db, debate_id)
    return await render_thread(db, debate, viewer)


@router.post("/{debate_id}/comments", response_model=CommentView, status_code=status.HTTP_201_CREATED)
async def create_debate_comment(
    debate_id: UUID,
    data: CommentCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    comment = await add_comment(db, debate_id, current_user, data)
    await db.commit()
    return comment_to_view(Viewer.for_user(current_user), comment)
