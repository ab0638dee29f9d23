"""V1 API router aggregation."""
from fastapi import APIRouter

from civica.api.v1.endpoints import auth, debates, comments, moderation, notifications

api_router = APIRouter(prefix="/v1")
api_router.include_router(auth.router)
api_router.include_router(debates.router)
api_router.include_router(comments.router)
api_router.include_router(moderation.router)
api_router.include_router(notifications.router)
