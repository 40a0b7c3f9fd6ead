"""UserInteraction ORM: generic event log (mood logged, WhatsApp message, resource use).

Invariants:
    - interaction_type is a free-form tag (see core.domain_types for the ones we write)
    - user_id is nullable: resource utilization events can be anonymous
    - resource_id is set only for resource utilization events
    - metadata never contains a raw phone number

Design Decisions:
    - Python attribute is interaction_metadata because Base reserves `metadata`;
      the column itself is still named "metadata"
    - user relationship loaded with selectin so feeds can render pseudonymous ids
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sata_api.db.base import Base, new_id


class UserInteraction(Base):
    __tablename__ = "user_interactions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("anonymous_users.id", ondelete="CASCADE"),
        nullable=True, index=True,
    )
    resource_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("mental_health_resources.id", ondelete="CASCADE"),
        nullable=True, index=True,
    )
    interaction_type: Mapped[str] = mapped_column(
        String(50), nullable=False, index=True,
    )
    entity_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    entity_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    interaction_metadata: Mapped[dict] = mapped_column(
        "metadata", JSON, nullable=False, default=dict,
    )
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )
    language: Mapped[str] = mapped_column(String(10), nullable=False, default="en")

    user: Mapped["AnonymousUser"] = relationship(
        "AnonymousUser", lazy="selectin",
    )
    resource: Mapped["MentalHealthResource"] = relationship(
        "MentalHealthResource", back_populates="interactions", lazy="raise",
    )
