"""Append-only completion events for a practice action."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from practice_tracker.db.base import Base


class PracticeRecord(Base):
    __tablename__ = "practice_record"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    action_id: Mapped[int] = mapped_column(ForeignKey("practice_action.id"), nullable=False, index=True)
    finish_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)

    action: Mapped["PracticeAction"] = relationship("PracticeAction", back_populates="records")
