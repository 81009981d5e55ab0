import asyncio
import os
import sys

# Add project root to sys.path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import select

from wolfpack.db.session import async_session_maker
from wolfpack.models.user import User

ROLES = ("user", "dj", "admin")


async def set_role(identifier: str, role: str):
    """
    Give a user a role (user | dj | admin).
    identifier can be email or username.
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
            return

        user.role = role
        await session.commit()
        print(f"Success: User '{user.username}' ({user.email}) now has role '{role}'.")


if __name__ == "__main__":
    if len(sys.argv) < 3 or sys.argv[2] not in ROLES:
        print("Usage: python scripts/set_role.py <email_or_username> <user|dj|admin>")
        sys.exit(1)

    asyncio.run(set_role(sys.argv[1], sys.argv[2]))
