"""Once-per-UTC-day completion: eligibility check and the recording transaction."""

import logging
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from practice_tracker.core.dates import as_utc, utc_day_window
from practice_tracker.core.exceptions import Conflict, NotFound, translate_db_errors
from practice_tracker.models.practice_action import PracticeAction
from practice_tracker.models.practice_record import PracticeRecord

logger = logging.getLogger(__name__)


async def can_finish_today(
    session: AsyncSession,
    user_id: int,
    action_id: int,
    now: datetime,
) -> bool:
    """True iff the user's action has no record on now's UTC calendar date. Read only."""
    day_start, day_end = utc_day_window(now)
    async with translate_db_errors():
        r = await session.execute(
            select(func.count(PracticeRecord.id))
            .join(PracticeAction, PracticeRecord.action_id == PracticeAction.id)
            .where(
                PracticeRecord.action_id == action_id,
                PracticeAction.user_id == user_id,
                PracticeRecord.finish_time >= day_start,
                PracticeRecord.finish_time < day_end,
            )
        )
        count = r.scalar_one()
    return (count or 0) == 0


async def finish_action(
    session: AsyncSession,
    user_id: int,
    action_id: int,
    now: datetime,
    note: str | None = None,
) -> PracticeRecord:
    """
    Record a completion of the user's action at ``now``.

    Runs inside the caller's transaction: the action row is locked
    (SELECT ... FOR UPDATE; sqlite write-locks the database at BEGIN) before
    eligibility is re-checked, so concurrent finishes of one action
    serialize and only the first per day succeeds.
    The last_finish_time update and the record insert are flushed together;
    the session rolls back both if anything fails.

    Raises NotFound when the action does not exist or belongs to another user,
    Conflict when it was already completed on now's UTC date.
    """
    now = as_utc(now)
    async with translate_db_errors():
        r = await session.execute(
            select(PracticeAction)
            .where(PracticeAction.id == action_id, PracticeAction.user_id == user_id)
            .with_for_update()
        )
        action = r.scalar_one_or_none()
        if action is None:
            raise NotFound("Action not found")

        if not await can_finish_today(session, user_id, action.id, now):
            logger.info("Action %s already completed on %s (user %s)", action.id, now.date(), user_id)
            raise Conflict("Already completed today")

        action.last_finish_time = now
        record = PracticeRecord(action_id=action.id, finish_time=now, note=note)
        session.add(record)
        await session.flush()
        await session.refresh(record)
    logger.info("Action %s completed by user %s (record %s)", action.id, user_id, record.id)
    return record
