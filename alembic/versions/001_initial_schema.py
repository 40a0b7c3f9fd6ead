"""Initial schema: anonymous users, mood logs, interactions, gamification, resources.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "anonymous_users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("anonymous_id", sa.String(100), nullable=False),
        sa.Column("language", sa.String(10), nullable=False, server_default="en"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("last_active_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(
        "ix_anonymous_users_anonymous_id", "anonymous_users", ["anonymous_id"], unique=True,
    )

    op.create_table(
        "mental_health_resources",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("title", sa.JSON, nullable=False),
        sa.Column("description", sa.JSON, nullable=False),
        sa.Column("category", sa.String(50), nullable=False, server_default="general"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "mood_logs",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "user_id", sa.String(36),
            sa.ForeignKey("anonymous_users.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("mood_score", sa.Integer, nullable=False),
        sa.Column("emotions", sa.JSON, nullable=False),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("triggers", sa.JSON, nullable=False),
        sa.Column("sentiment_score", sa.Float, nullable=False),
        sa.Column("sentiment_label", sa.String(10), nullable=False),
        sa.Column("language", sa.String(10), nullable=False, server_default="en"),
        sa.Column("logged_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint(
            "mood_score >= 1 AND mood_score <= 10", name="ck_mood_logs_mood_score",
        ),
    )
    op.create_index("ix_mood_logs_user_id", "mood_logs", ["user_id"])

    op.create_table(
        "user_interactions",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "user_id", sa.String(36),
            sa.ForeignKey("anonymous_users.id", ondelete="CASCADE"), nullable=True,
        ),
        sa.Column(
            "resource_id", sa.String(36),
            sa.ForeignKey("mental_health_resources.id", ondelete="CASCADE"), nullable=True,
        ),
        sa.Column("interaction_type", sa.String(50), nullable=False),
        sa.Column("entity_type", sa.String(50), nullable=True),
        sa.Column("entity_id", sa.String(100), nullable=True),
        sa.Column("metadata", sa.JSON, nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("language", sa.String(10), nullable=False, server_default="en"),
    )
    op.create_index("ix_user_interactions_user_id", "user_interactions", ["user_id"])
    op.create_index("ix_user_interactions_resource_id", "user_interactions", ["resource_id"])
    op.create_index(
        "ix_user_interactions_interaction_type", "user_interactions", ["interaction_type"],
    )
    op.create_index("ix_user_interactions_timestamp", "user_interactions", ["timestamp"])

    op.create_table(
        "gamification_data",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "user_id", sa.String(36),
            sa.ForeignKey("anonymous_users.id", ondelete="CASCADE"),
            nullable=False, unique=True,
        ),
        sa.Column("mood_logs_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("total_points", sa.Integer, nullable=False, server_default="0"),
        sa.Column("last_points_earned", sa.DateTime(timezone=True), nullable=True),
    )


def downgrade() -> None:
    op.drop_table("gamification_data")
    op.drop_table("user_interactions")
    op.drop_table("mood_logs")
    op.drop_table("mental_health_resources")
    op.drop_table("anonymous_users")
