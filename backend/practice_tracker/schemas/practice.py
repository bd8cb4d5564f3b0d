"""Wire shapes for users, actions and records. Timestamps are Unix epoch seconds."""

from pydantic import BaseModel, ConfigDict, Field

from practice_tracker.core.dates import to_unix_timestamp
from practice_tracker.models.practice_action import PracticeAction
from practice_tracker.models.practice_record import PracticeRecord
from practice_tracker.models.user import User
from practice_tracker.services.stats import ActionWithStats


class UserOut(BaseModel):
    """User as returned by the API; the password hash is never included."""

    id: int
    username: str
    create_time: int

    @classmethod
    def from_model(cls, user: User) -> "UserOut":
        return cls(id=user.id, username=user.username, create_time=to_unix_timestamp(user.create_time))


class ActionCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255)


class FinishBody(BaseModel):
    note: str | None = None


class PracticeActionOut(BaseModel):
    id: int
    user_id: int
    name: str
    create_time: int
    last_finish_time: int | None

    @classmethod
    def from_model(cls, action: PracticeAction) -> "PracticeActionOut":
        return cls(
            id=action.id,
            user_id=action.user_id,
            name=action.name,
            create_time=to_unix_timestamp(action.create_time),
            last_finish_time=to_unix_timestamp(action.last_finish_time),
        )


class ActionWithStatsOut(PracticeActionOut):
    total_finished: int
    finished_today: bool

    @classmethod
    def from_stats(cls, stats: ActionWithStats) -> "ActionWithStatsOut":
        base = PracticeActionOut.from_model(stats.action)
        return cls(
            **base.model_dump(),
            total_finished=stats.total_finished,
            finished_today=stats.finished_today,
        )


class PracticeRecordOut(BaseModel):
    id: int
    action_id: int
    finish_time: int
    note: str | None

    @classmethod
    def from_model(cls, record: PracticeRecord) -> "PracticeRecordOut":
        return cls(
            id=record.id,
            action_id=record.action_id,
            finish_time=to_unix_timestamp(record.finish_time),
            note=record.note,
        )
