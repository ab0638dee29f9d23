"""Comment tree building for the debate page."""
import uuid
from datetime import datetime, timedelta

from civica.models import Comment
from civica.services.thread_service import build_tree, count_nodes
from civica.services.visibility import HIDDEN_PLACEHOLDER, Viewer

DEBATE_ID = uuid.uuid4()
T0 = datetime(2026, 1, 1)


def _comment(body, parent=None, hidden=False, minutes=0):
    return Comment(
        id=uuid.uuid4(),
        user_id=uuid.uuid4(),
        debate_id=DEBATE_ID,
        parent_id=parent.id if parent else None,
        body=body,
        flags_count=0,
        hidden_at=T0 if hidden else None,
        created_at=T0 + timedelta(minutes=minutes),
    )


def test_replies_nest_under_parent():
    root = _comment("root")
    reply = _comment("reply", parent=root, minutes=1)
    nested = _comment("nested", parent=reply, minutes=2)
    other = _comment("other root", minutes=3)

    tree = build_tree(Viewer(), [root, reply, nested, other])

    assert [n.body for n in tree] == ["root", "other root"]
    assert [n.body for n in tree[0].children] == ["reply"]
    assert [n.body for n in tree[0].children[0].children] == ["nested"]
    assert count_nodes(tree) == 4


def test_hidden_parent_keeps_its_children_visible():
    root = _comment("SPAM", hidden=True)
    reply = _comment("Acceptable reply", parent=root, minutes=1)

    tree = build_tree(Viewer(), [root, reply])

    assert count_nodes(tree) == 2
    assert tree[0].body == HIDDEN_PLACEHOLDER
    assert tree[0].user is None
    assert tree[0].children[0].body == "Acceptable reply"


def test_reply_to_unknown_parent_is_shown_at_top_level():
    orphan = Comment(
        id=uuid.uuid4(),
        user_id=uuid.uuid4(),
        debate_id=DEBATE_ID,
        parent_id=uuid.uuid4(),
        body="orphan",
        flags_count=0,
        created_at=T0,
    )
    tree = build_tree(Viewer(), [orphan])
    assert [n.body for n in tree] == ["orphan"]
