from practice_tracker.models.user import User
from practice_tracker.models.practice_action import PracticeAction
from practice_tracker.models.practice_record import PracticeRecord

__all__ = [
    "User",
    "PracticeAction",
    "PracticeRecord",
]
