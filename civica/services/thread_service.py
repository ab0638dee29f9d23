"""Render a debate's comment tree for a given viewer."""
from collections import defaultdict
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from civica.models.comment import Comment
from civica.models.debate import Debate
from civica.schemas.comment import ActionLink, CommentView
from civica.schemas.debate import DebateThread
from civica.services.auth_service import user_to_public
from civica.services.debate_service import get_user_flagged_comment_ids
from civica.services.visibility import Viewer, can_ban_author, can_moderate, is_faded, visible_body

COMMENTS_PATH = "/api/v1/comments"


def comment_actions(viewer: Viewer, comment: Comment) -> list[ActionLink]:
    if not can_moderate(viewer, comment):
        return []
    actions = []
    if not comment.is_hidden:
        actions.append(ActionLink(label="Hide", href=f"{COMMENTS_PATH}/{comment.id}/hide"))
    if can_ban_author(viewer, comment):
        actions.append(ActionLink(label="Ban author", href=f"{COMMENTS_PATH}/{comment.id}/ban_author"))
    return actions


def comment_to_view(
    viewer: Viewer,
    comment: Comment,
    flagged_ids: set[UUID] | None = None,
    children: list[CommentView] | None = None,
) -> CommentView:
    redacted = comment.is_hidden and not viewer.is_moderator
    return CommentView(
        id=comment.id,
        debate_id=comment.debate_id,
        parent_id=comment.parent_id,
        body=visible_body(viewer, comment),
        faded=is_faded(viewer, comment),
        is_hidden=comment.is_hidden,
        user=user_to_public(comment.user) if comment.user and not redacted else None,
        flags_count=comment.flags_count or 0,
        is_flagged_by_me=comment.id in (flagged_ids or set()),
        created_at=comment.created_at,
        actions=comment_actions(viewer, comment),
        children=children or [],
    )


def build_tree(viewer: Viewer, comments: list[Comment], flagged_ids: set[UUID] | None = None) -> list[CommentView]:
    """Nest replies under their parents. Every comment yields exactly one node, hidden or not."""
    known = {c.id for c in comments}
    by_parent: dict[UUID | None, list[Comment]] = defaultdict(list)
    for c in comments:
        # Orphans (parent outside this thread) are shown at the top level.
        by_parent[c.parent_id if c.parent_id in known else None].append(c)

    def render(parent_id: UUID | None) -> list[CommentView]:
        return [
            comment_to_view(viewer, c, flagged_ids, children=render(c.id))
            for c in by_parent.get(parent_id, [])
        ]

    return render(None)


def count_nodes(nodes: list[CommentView]) -> int:
    return sum(1 + count_nodes(n.children) for n in nodes)


async def render_thread(db: AsyncSession, debate: Debate, viewer: Viewer) -> DebateThread:
    result = await db.execute(
        select(Comment)
        .where(Comment.debate_id == debate.id)
        .order_by(Comment.created_at, Comment.id)
        .options(selectinload(Comment.user))
    )
    comments = list(result.scalars().all())
    flagged_ids = (
        await get_user_flagged_comment_ids(db, viewer.id, [c.id for c in comments]) if viewer.id else set()
    )
    tree = build_tree(viewer, comments, flagged_ids)
    return DebateThread(
        id=debate.id,
        title=debate.title,
        description=debate.description or "",
        comments_count=count_nodes(tree),
        created_at=debate.created_at,
        user=user_to_public(debate.user) if debate.user else None,
        comments=tree,
    )
