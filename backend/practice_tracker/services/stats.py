"""Per-action completion stats for the action list."""

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from practice_tracker.core.dates import utc_day_window
from practice_tracker.core.exceptions import translate_db_errors
from practice_tracker.models.practice_action import PracticeAction
from practice_tracker.models.practice_record import PracticeRecord


@dataclass(frozen=True)
class ActionWithStats:
    action: PracticeAction
    total_finished: int
    finished_today: bool


async def list_actions_with_stats(
    session: AsyncSession,
    user_id: int,
    now: datetime,
) -> list[ActionWithStats]:
    """
    All of the user's actions with their total record count and whether one
    exists on now's UTC date.

    Ordered: not finished today first, then last_finish_time newest first
    (never-finished last), then create_time newest first.
    """
    day_start, day_end = utc_day_window(now)

    completion_counts = (
        select(PracticeRecord.action_id, func.count(PracticeRecord.id).label("total_count"))
        .group_by(PracticeRecord.action_id)
        .subquery()
    )
    today_completions = (
        select(PracticeRecord.action_id)
        .where(PracticeRecord.finish_time >= day_start, PracticeRecord.finish_time < day_end)
        .group_by(PracticeRecord.action_id)
        .subquery()
    )
    finished_today = case((today_completions.c.action_id.is_not(None), True), else_=False)

    q = (
        select(
            PracticeAction,
            func.coalesce(completion_counts.c.total_count, 0),
            finished_today,
        )
        .outerjoin(completion_counts, completion_counts.c.action_id == PracticeAction.id)
        .outerjoin(today_completions, today_completions.c.action_id == PracticeAction.id)
        .where(PracticeAction.user_id == user_id)
        .order_by(
            finished_today.asc(),
            PracticeAction.last_finish_time.desc().nulls_last(),
            PracticeAction.create_time.desc(),
            PracticeAction.id.desc(),
        )
    )
    async with translate_db_errors():
        r = await session.execute(q)
        rows = r.all()
    return [
        ActionWithStats(action=action, total_finished=int(total or 0), finished_today=bool(done))
        for action, total, done in rows
    ]
