"""Practice actions: create, list with stats, read, records, finish."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Body, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from practice_tracker.api.deps import get_current_user_id, get_now
from practice_tracker.db.session import get_db
from practice_tracker.schemas.practice import (
    ActionCreate,
    ActionWithStatsOut,
    FinishBody,
    PracticeActionOut,
    PracticeRecordOut,
)
from practice_tracker.services.actions import create_action, get_action, list_records
from practice_tracker.services.completion import finish_action
from practice_tracker.services.stats import list_actions_with_stats

router = APIRouter(prefix="/actions", tags=["actions"])

UserId = Annotated[int, Depends(get_current_user_id)]
Session = Annotated[AsyncSession, Depends(get_db)]
Now = Annotated[datetime, Depends(get_now)]
# Primary keys are 32-bit INTEGER columns; larger ids cannot exist and must not reach the driver
ActionId = Annotated[int, Path(ge=1, le=2**31 - 1)]


@router.post("", response_model=PracticeActionOut, summary="Create a practice action")
async def create_action_endpoint(
    user_id: UserId,
    session: Session,
    now: Now,
    body: ActionCreate,
) -> PracticeActionOut:
    action = await create_action(session, user_id, body.name, now)
    return PracticeActionOut.from_model(action)


@router.get(
    "",
    response_model=list[ActionWithStatsOut],
    summary="List own actions with completion stats, unfinished-today first",
)
async def list_actions_endpoint(user_id: UserId, session: Session, now: Now) -> list[ActionWithStatsOut]:
    rows = await list_actions_with_stats(session, user_id, now)
    return [ActionWithStatsOut.from_stats(row) for row in rows]


@router.get(
    "/{action_id}",
    response_model=PracticeActionOut | None,
    summary="Get one own action (null when missing or not owned)",
)
async def get_action_endpoint(action_id: ActionId, user_id: UserId, session: Session) -> PracticeActionOut | None:
    action = await get_action(session, user_id, action_id)
    if action is None:
        return None
    return PracticeActionOut.from_model(action)


@router.get(
    "/{action_id}/records",
    response_model=list[PracticeRecordOut],
    summary="Completion records of an own action, newest first",
)
async def list_records_endpoint(action_id: ActionId, user_id: UserId, session: Session) -> list[PracticeRecordOut]:
    records = await list_records(session, user_id, action_id)
    return [PracticeRecordOut.from_model(r) for r in records]


@router.post(
    "/{action_id}/finish",
    response_model=PracticeRecordOut,
    summary="Mark an action completed for today",
    responses={
        404: {"description": "Action not found"},
        409: {"description": "Already completed today"},
    },
)
async def finish_action_endpoint(
    action_id: ActionId,
    user_id: UserId,
    session: Session,
    now: Now,
    body: Annotated[FinishBody | None, Body()] = None,
) -> PracticeRecordOut:
    note = body.note if body is not None else None
    record = await finish_action(session, user_id, action_id, now, note=note)
    return PracticeRecordOut.from_model(record)
