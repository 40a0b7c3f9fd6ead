"""MentalHealthResource ORM: directory entry that utilization events point at.

Invariants:
    - title/description are per-language JSON maps ({"en": ..., "zh": ...})
    - interactions is counted with an aggregate query, never loaded (lazy="raise")
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sata_api.db.base import Base, new_id


class MentalHealthResource(Base):
    __tablename__ = "mental_health_resources"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    title: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    description: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    category: Mapped[str] = mapped_column(String(50), nullable=False, default="general")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    interactions: Mapped[list["UserInteraction"]] = relationship(
        "UserInteraction", back_populates="resource", lazy="raise",
    )
