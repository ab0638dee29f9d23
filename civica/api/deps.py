"""API dependencies: auth, db session, viewer."""
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from civica.db.session import get_db
from civica.models.user import User
from civica.core.security import decode_token
from civica.services.auth_service import get_user_by_id
from civica.services.visibility import Viewer

security = HTTPBearer(auto_error=False)


async def get_current_user_optional(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User | None:
    if not credentials:
        return None
    user_id = decode_token(credentials.credentials)
    if user_id is None:
        return None
    return await get_user_by_id(db, user_id)


async def get_current_user(
    user: User | None = Depends(get_current_user_optional),
) -> User:
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if user.is_banned:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Your account has been banned by a moderator",
        )

    return user


async def get_current_moderator(
    user: User = Depends(get_current_user),
) -> User:
    if not user.is_moderator:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="The user does not have enough privileges",
        )
    return user


async def get_viewer(
    user: User | None = Depends(get_current_user_optional),
) -> Viewer:
    """Viewer for read-only pages. Anonymous visitors and banned users read as citizens."""
    if user is None or user.is_banned:
        return Viewer()
    return Viewer.for_user(user)
