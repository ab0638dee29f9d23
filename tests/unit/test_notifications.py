"""Moderation notices are pushed only for work that was committed."""
import pytest

from civica.services import moderation_service
from civica.services.visibility import Viewer
from tests.factories import create_comment, create_user


class PushRecorder:
    def __init__(self):
        self.calls = []

    def delay(self, *args):
        self.calls.append(args)


@pytest.fixture
def pushes(monkeypatch):
    recorder = PushRecorder()
    monkeypatch.setattr("civica.workers.notifications.send_push_notification", recorder)
    return recorder


async def test_push_waits_for_commit(db, pushes):
    moderator = await create_user(db, moderator=True)
    comment = await create_comment(db)
    author_id = comment.user_id

    await moderation_service.hide_comment(db, comment.id, Viewer.for_user(moderator))
    assert pushes.calls == []

    await db.commit()
    assert pushes.calls == [(str(author_id), "civica", "A moderator hid one of your comments")]


async def test_rolled_back_action_sends_no_push(db, pushes):
    moderator = await create_user(db, moderator=True)
    comment = await create_comment(db)

    await moderation_service.ban_author(db, comment.id, Viewer.for_user(moderator))
    await db.rollback()
    await db.commit()

    assert pushes.calls == []
