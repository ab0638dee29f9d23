"""Flagging comments at the service layer."""
from sqlalchemy import func, select

from civica.models import Comment, Flag
from civica.services.debate_service import flag_comment
from tests.factories import FlagFactory, create_comment, create_user, save


async def test_flag_counts_a_new_report(db, fetch):
    comment = await create_comment(db)
    reporter = await create_user(db)

    await flag_comment(db, comment.id, reporter)
    await db.commit()

    assert (await fetch(Comment, comment.id)).flags_count == 1


async def test_existing_report_row_makes_flag_a_no_op(db, fetch):
    # Another request already stored this user's report for the comment.
    comment = await create_comment(db, flags=1)
    reporter = await create_user(db)
    await save(db, FlagFactory.build(user=reporter, comment=comment))

    result = await flag_comment(db, comment.id, reporter)
    await db.commit()

    assert result.flags_count == 1
    assert (await fetch(Comment, comment.id)).flags_count == 1
    count = await db.scalar(
        select(func.count(Flag.id)).where(Flag.comment_id == comment.id, Flag.user_id == reporter.id)
    )
    assert count == 1
