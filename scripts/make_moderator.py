import asyncio
import sys
import os

# Add project root to sys.path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import select
from civica.db.session import async_session_maker
import civica.models  # noqa: F401
from civica.models.user import User


async def promote_user(identifier: str) -> bool:
    """
    Give a user the moderator role.
    identifier can be email or username. Banned users are refused.
    """
    async with async_session_maker() as session:
        if "@" in identifier:
            stmt = select(User).where(User.email == identifier)
        else:
            stmt = select(User).where(User.username == identifier)

        result = await session.execute(stmt)
        user = result.scalar_one_or_none()

        if not user:
            print(f"Error: User '{identifier}' not found.")
            return False
        if user.is_banned:
            print(f"Error: User '{user.username}' is banned and cannot moderate.")
            return False
        if user.is_moderator:
            print(f"User '{user.username}' is already a moderator.")
            return True

        user.is_moderator = True
        await session.commit()
        print(f"Success: User '{user.username}' ({user.email}) is now a moderator.")
        return True


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python scripts/make_moderator.py <email_or_username>")
        sys.exit(1)

    ok = asyncio.run(promote_user(sys.argv[1]))
    sys.exit(0 if ok else 1)
