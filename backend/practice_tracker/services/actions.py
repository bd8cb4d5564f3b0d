"""Create and read practice actions and their records, always scoped to the owner."""

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from practice_tracker.core.dates import as_utc
from practice_tracker.core.exceptions import translate_db_errors
from practice_tracker.models.practice_action import PracticeAction
from practice_tracker.models.practice_record import PracticeRecord

logger = logging.getLogger(__name__)


async def create_action(
    session: AsyncSession,
    user_id: int,
    name: str,
    now: datetime,
) -> PracticeAction:
    async with translate_db_errors():
        action = PracticeAction(user_id=user_id, name=name, create_time=as_utc(now))
        session.add(action)
        await session.flush()
        await session.refresh(action)
    logger.info("Action %s created for user %s", action.id, user_id)
    return action


async def get_action(session: AsyncSession, user_id: int, action_id: int) -> PracticeAction | None:
    """The action if it exists and belongs to user_id, else None."""
    async with translate_db_errors():
        r = await session.execute(
            select(PracticeAction).where(
                PracticeAction.id == action_id,
                PracticeAction.user_id == user_id,
            )
        )
        return r.scalar_one_or_none()


async def list_records(session: AsyncSession, user_id: int, action_id: int) -> list[PracticeRecord]:
    """Records of the user's action, newest first. Empty for unknown or foreign actions."""
    async with translate_db_errors():
        r = await session.execute(
            select(PracticeRecord)
            .join(PracticeAction, PracticeRecord.action_id == PracticeAction.id)
            .where(PracticeRecord.action_id == action_id, PracticeAction.user_id == user_id)
            .order_by(PracticeRecord.finish_time.desc(), PracticeRecord.id.desc())
        )
        return list(r.scalars().all())
