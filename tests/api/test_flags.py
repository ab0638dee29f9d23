"""Citizens flagging comments as inappropriate, and how that feeds the queue."""
from civica.models import Comment
from tests.factories import auth_headers, create_comment, create_user

QUEUE = "/api/v1/moderation/comments"


async def test_flagging_a_comment(client, db, fetch):
    comment = await create_comment(db)
    citizen = await create_user(db)

    res = await client.post(f"/api/v1/comments/{comment.id}/flag", headers=auth_headers(citizen))
    assert res.status_code == 200
    assert res.json()["flags_count"] == 1
    assert res.json()["is_flagged_by_me"] is True
    assert (await fetch(Comment, comment.id)).flags_count == 1


async def test_flagging_twice_counts_once(client, db, fetch):
    comment = await create_comment(db)
    citizen = await create_user(db)

    for _ in range(2):
        res = await client.post(f"/api/v1/comments/{comment.id}/flag", headers=auth_headers(citizen))
        assert res.status_code == 200
    assert (await fetch(Comment, comment.id)).flags_count == 1


async def test_unflagging(client, db, fetch):
    comment = await create_comment(db)
    citizen = await create_user(db)
    await client.post(f"/api/v1/comments/{comment.id}/flag", headers=auth_headers(citizen))

    res = await client.delete(f"/api/v1/comments/{comment.id}/flag", headers=auth_headers(citizen))
    assert res.status_code == 200
    assert res.json()["is_flagged_by_me"] is False
    assert (await fetch(Comment, comment.id)).flags_count == 0


async def test_cannot_flag_own_comment(client, db):
    author = await create_user(db)
    comment = await create_comment(db, user=author)

    res = await client.post(f"/api/v1/comments/{comment.id}/flag", headers=auth_headers(author))
    assert res.status_code == 400


async def test_flag_unknown_comment(client, db):
    citizen = await create_user(db)
    res = await client.post(
        "/api/v1/comments/00000000-0000-0000-0000-000000000000/flag",
        headers=auth_headers(citizen),
    )
    assert res.status_code == 404


async def test_flagged_comment_enters_the_pending_queue(client, db):
    comment = await create_comment(db, body="Buy cheap watches")
    citizen = await create_user(db)
    moderator = await create_user(db, moderator=True)

    res = await client.get(QUEUE, headers=auth_headers(moderator))
    assert res.json()["comments"] == []

    await client.post(f"/api/v1/comments/{comment.id}/flag", headers=auth_headers(citizen))

    res = await client.get(QUEUE, headers=auth_headers(moderator))
    rows = res.json()["comments"]
    assert [row["body"] for row in rows] == ["Buy cheap watches"]
    assert rows[0]["status"] == "Pending"


async def test_banned_user_cannot_flag(client, db):
    comment = await create_comment(db)
    banned = await create_user(db, banned=True)

    res = await client.post(f"/api/v1/comments/{comment.id}/flag", headers=auth_headers(banned))
    assert res.status_code == 403
