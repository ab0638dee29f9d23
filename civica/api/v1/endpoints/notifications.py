"""Notifications API."""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from civica.api.deps import get_db, get_current_user
from civica.models.user import User
from civica.schemas.notification import NotificationResponse
from civica.services.notification_service import get_notifications, mark_all_read

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationResponse])
async def list_notifications(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    notifications = await get_notifications(db, current_user.id, skip=skip, limit=limit)
    return [NotificationResponse.model_validate(n) for n in notifications]


@router.post("/mark-all-read")
async def mark_all_as_read(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    updated = await mark_all_read(db, current_user.id)
    await db.commit()
    return {"updated": updated}
