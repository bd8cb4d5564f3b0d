"""Registration and login."""

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from practice_tracker.core.auth import hash_password, verify_password
from practice_tracker.core.exceptions import Conflict, Unauthorized, translate_db_errors
from practice_tracker.models.user import User

logger = logging.getLogger(__name__)


async def get_user_by_username(session: AsyncSession, username: str) -> User | None:
    async with translate_db_errors():
        r = await session.execute(select(User).where(User.username == username))
        return r.scalar_one_or_none()


async def register_user(session: AsyncSession, username: str, password: str) -> User:
    """Create a user. A taken username raises Conflict; the unique index backs the pre-check."""
    if await get_user_by_username(session, username) is not None:
        raise Conflict("Username already registered")
    async with translate_db_errors():
        user = User(
            username=username,
            password_hash=hash_password(password),
            create_time=datetime.now(timezone.utc),
        )
        session.add(user)
        await session.flush()
        await session.refresh(user)
    logger.info("User %s registered", user.id)
    return user


async def authenticate_user(session: AsyncSession, username: str, password: str) -> User:
    user = await get_user_by_username(session, username)
    if user is None or not verify_password(password, user.password_hash):
        raise Unauthorized("Invalid credentials")
    return user
