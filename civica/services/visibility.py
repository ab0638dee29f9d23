"""Who may moderate a comment and what body a viewer gets to see.

Everything here is a pure read-time decision: no database access, no
mutation. Callers resolve the viewer once per request and pass it in.
"""
from dataclasses import dataclass
from enum import Enum
from uuid import UUID

from civica.models.comment import Comment
from civica.models.user import User

HIDDEN_PLACEHOLDER = "This comment has been deleted"


class Role(str, Enum):
    CITIZEN = "citizen"
    MODERATOR = "moderator"


@dataclass(frozen=True)
class Viewer:
    role: Role = Role.CITIZEN
    id: UUID | None = None  # None for anonymous visitors

    @classmethod
    def for_user(cls, user: User | None) -> "Viewer":
        if user is None:
            return cls()
        role = Role.MODERATOR if getattr(user, "is_moderator", False) else Role.CITIZEN
        return cls(role=role, id=user.id)

    @property
    def is_moderator(self) -> bool:
        return self.role is Role.MODERATOR


def can_moderate(viewer: Viewer, comment: Comment) -> bool:
    """Moderators may act on any comment except their own."""
    if not viewer.is_moderator:
        return False
    return viewer.id is not None and viewer.id != comment.user_id


def visible_body(viewer: Viewer, comment: Comment) -> str:
    if comment.is_hidden and not viewer.is_moderator:
        return HIDDEN_PLACEHOLDER
    return comment.body


def is_faded(viewer: Viewer, comment: Comment) -> bool:
    """Moderators still read hidden comments, rendered faded instead of redacted."""
    return comment.is_hidden and viewer.is_moderator


def can_ban_author(viewer: Viewer, comment: Comment) -> bool:
    """Citizens can be banned once. Other moderators cannot be banned at all."""
    author = comment.user
    if author is None or author.is_moderator or author.is_banned:
        return False
    return can_moderate(viewer, comment)
