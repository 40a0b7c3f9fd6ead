"""GamificationData ORM: per-user engagement counters.

Invariants:
    - Exactly one row per user (user_id unique), created lazily on first mood log
    - Counters only ever increase
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from sata_api.db.base import Base, new_id


class GamificationData(Base):
    __tablename__ = "gamification_data"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("anonymous_users.id", ondelete="CASCADE"),
        nullable=False, unique=True,
    )
    mood_logs_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_points_earned: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
