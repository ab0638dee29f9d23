from civica.schemas.user import (
    UserCreate,
    UserResponse,
    UserPublic,
    Token,
    LoginRequest,
)
from civica.schemas.comment import CommentCreate, CommentView, ActionLink
from civica.schemas.debate import DebateCreate, DebateResponse, DebateThread
from civica.schemas.moderation import QueueFilter, QueueViewState, QueuePage
