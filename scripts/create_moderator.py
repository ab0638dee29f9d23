import asyncio
import sys
import os

# Add project root to sys.path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import select
from civica.db.session import async_session_maker
import civica.models  # noqa: F401
from civica.models.user import User
from civica.core.security import get_password_hash


async def create_moderator(email: str, username: str, password: str) -> bool:
    async with async_session_maker() as session:
        res = await session.execute(select(User).where((User.email == email) | (User.username == username)))
        if res.scalar_one_or_none():
            print(f"Error: User with email '{email}' or username '{username}' already exists.")
            return False

        session.add(
            User(
                email=email,
                username=username,
                password_hash=get_password_hash(password),
                display_name="Moderator",
                is_moderator=True,
            )
        )
        await session.commit()
        print("Success: Moderator created!")
        print(f"Email: {email}")
        print(f"Username: {username}")
        return True


if __name__ == "__main__":
    if len(sys.argv) < 4:
        print("Usage: python scripts/create_moderator.py <email> <username> <password>")
        sys.exit(1)

    ok = asyncio.run(create_moderator(sys.argv[1], sys.argv[2], sys.argv[3]))
    sys.exit(0 if ok else 1)
