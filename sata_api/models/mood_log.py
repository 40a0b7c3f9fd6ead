"""MoodLog ORM: one row per mood submission.

Invariants:
    - mood_score is an integer in [1, 10] (checked at the API boundary and by constraint)
    - sentiment_score/sentiment_label are derived from mood_score, never client-supplied
"""

from datetime import datetime, timezone

from sqlalchemy import (
    JSON, CheckConstraint, DateTime, Float, ForeignKey, Integer, String, Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from sata_api.db.base import Base, new_id


class MoodLog(Base):
    __tablename__ = "mood_logs"
    __table_args__ = (
        CheckConstraint(
            "mood_score >= 1 AND mood_score <= 10", name="ck_mood_logs_mood_score",
        ),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("anonymous_users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    mood_score: Mapped[int] = mapped_column(Integer, nullable=False)
    emotions: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    triggers: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    sentiment_score: Mapped[float] = mapped_column(Float, nullable=False)
    sentiment_label: Mapped[str] = mapped_column(String(10), nullable=False)
    language: Mapped[str] = mapped_column(String(10), nullable=False, default="en")
    logged_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
