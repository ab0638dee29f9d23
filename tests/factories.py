"""
Test data factories.
Instances are built with factory_boy and saved through the test's AsyncSession.
"""
from datetime import datetime

import factory
from factory import LazyAttribute, LazyFunction, Sequence, SubFactory
from sqlalchemy.ext.asyncio import AsyncSession

from civica.core.security import create_access_token
from civica.models import Comment, Debate, Flag, User


class UserFactory(factory.Factory):
    class Meta:
        model = User

    username = Sequence(lambda n: f"user{n}")
    email = LazyAttribute(lambda o: f"{o.username}@example.com")
    password_hash = "not-a-real-hash"
    display_name = factory.Faker("name")
    is_moderator = False
    is_banned = False
    banned_at = None

    class Params:
        moderator = factory.Trait(is_moderator=True)
        banned = factory.Trait(is_banned=True, banned_at=LazyFunction(datetime.utcnow))


class DebateFactory(factory.Factory):
    class Meta:
        model = Debate

    user = SubFactory(UserFactory)
    title = factory.Faker("sentence", nb_words=4)
    description = factory.Faker("paragraph")
    comments_count = 0


class CommentFactory(factory.Factory):
    """Comment with its moderation state. `flags` sets flags_count; hidden and reviewed stamp the time."""

    class Meta:
        model = Comment

    user = SubFactory(UserFactory)
    debate = SubFactory(DebateFactory)
    parent = None
    body = factory.Faker("sentence")
    flags_count = LazyAttribute(lambda o: o.flags)
    hidden_at = None
    reviewed_at = None

    class Params:
        flags = 0
        hidden = factory.Trait(hidden_at=LazyFunction(datetime.utcnow))
        reviewed = factory.Trait(reviewed_at=LazyFunction(datetime.utcnow))


class FlagFactory(factory.Factory):
    class Meta:
        model = Flag

    user = SubFactory(UserFactory)
    comment = SubFactory(CommentFactory)


async def save(db: AsyncSession, obj):
    db.add(obj)
    await db.commit()
    return obj


async def create_user(db: AsyncSession, **kwargs) -> User:
    return await save(db, UserFactory.build(**kwargs))


async def create_debate(db: AsyncSession, **kwargs) -> Debate:
    return await save(db, DebateFactory.build(**kwargs))


async def create_comment(db: AsyncSession, **kwargs) -> Comment:
    return await save(db, CommentFactory.build(**kwargs))


async def create_flagged_comment(db: AsyncSession, **kwargs) -> Comment:
    kwargs.setdefault("flags", 1)
    return await create_comment(db, **kwargs)


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


def find_comment(nodes: list[dict], comment_id) -> dict | None:
    """Depth-first search of a rendered comment tree."""
    for node in nodes:
        if node["id"] == str(comment_id):
            return node
        found = find_comment(node["children"], comment_id)
        if found:
            return found
    return None


def action_labels(node: dict) -> set[str]:
    return {a["label"] for a in node["actions"]}


def action_href(node: dict, label: str) -> str:
    return next(a["href"] for a in node["actions"] if a["label"] == label)
