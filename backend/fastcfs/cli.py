"""Management CLI.

Usage:
    python -m fastcfs.cli create-tables                        # create missing tables
    python -m fastcfs.cli create-admin <username> <password>   # add an admin account
"""

import asyncio
import sys

from sqlalchemy import select

from fastcfs.auth.password import hash_password
from fastcfs.database import async_session, create_tables, engine
from fastcfs.models.user import User, UserRole

USAGE = "Usage: python -m fastcfs.cli [create-tables|create-admin <username> <password>]"


async def create_admin(username: str, password: str) -> bool:
    """Create an admin user.  Returns False if the username is taken."""
    async with async_session() as db:
        existing = await db.execute(select(User).where(User.username == username))
        if existing.scalar_one_or_none():
            return False
        db.add(User(
            username=username,
            hashed_password=hash_password(password),
            role=UserRole.ADMIN.value,
        ))
        await db.commit()
    return True


async def _run_create_tables() -> None:
    await create_tables()
    await engine.dispose()


async def _run_create_admin(username: str, password: str) -> bool:
    try:
        return await create_admin(username, password)
    finally:
        await engine.dispose()


def main(argv: list[str]) -> int:
    cmd = argv[0] if argv else ""
    if cmd == "create-tables":
        asyncio.run(_run_create_tables())
        print("Tables created.")
        return 0
    if cmd == "create-admin" and len(argv) == 3:
        if asyncio.run(_run_create_admin(argv[1], argv[2])):
            print(f"Admin '{argv[1]}' created.")
            return 0
        print(f"User '{argv[1]}' already exists.")
        return 1
    print(USAGE)
    return 2


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
