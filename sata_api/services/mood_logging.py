"""Mood Logging: persists a mood entry and its side effects in one transaction.

Invariants:
    - Validation and user lookup happen before any write
    - MoodLog insert, interaction insert, gamification upsert and last_active_at
      update are committed together or rolled back together
    - Gamification counters are upserted with ON CONFLICT (user_id) DO UPDATE and
      incremented in SQL, so concurrent first logs for one user both count
    - Crisis alerts are advisory and never block the write

Design Decisions:
    - One commit at the end instead of per-step commits, so a failure between
      steps cannot leave an orphaned MoodLog row
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from sata_api.core.detect_crisis import detect_crisis_alerts
from sata_api.core.domain_types import (
    MOOD_LOG_POINTS, EntityType, InteractionType, UserId,
)
from sata_api.core.errors import (
    ErrorContext, MoodLogPersistenceError, ResourceNotFoundError,
)
from sata_api.core.sanitize_text import sanitize_text
from sata_api.core.score_sentiment import score_mood_sentiment
from sata_api.db.base import new_id
from sata_api.models.anonymous_user import AnonymousUser
from sata_api.models.gamification_data import GamificationData
from sata_api.models.mood_log import MoodLog
from sata_api.models.user_interaction import UserInteraction
from sata_api.schemas.mood import MoodLogCreate, MoodLogResponse, SentimentAnalysis

logger = logging.getLogger(__name__)


async def find_user_by_anonymous_id(
    db: AsyncSession, anonymous_id: str,
) -> AnonymousUser:
    """Get user by pseudonymous id or raise 404."""
    result = await db.execute(
        select(AnonymousUser).where(AnonymousUser.anonymous_id == anonymous_id),
    )
    user = result.scalar_one_or_none()
    if not user:
        raise ResourceNotFoundError("User", anonymous_id)
    return user


GAMIFICATION_UPSERT_DIALECTS = {"postgresql": pg_insert, "sqlite": sqlite_insert}


def build_gamification_upsert(dialect_name: str, user_id: UserId, earned_at: datetime):
    """INSERT .. ON CONFLICT (user_id) DO UPDATE with counters incremented in SQL."""
    insert = GAMIFICATION_UPSERT_DIALECTS.get(dialect_name)
    if insert is None:
        raise ValueError(f"gamification upsert not supported on {dialect_name!r}")
    stmt = insert(GamificationData).values(
        id=new_id(),
        user_id=user_id,
        mood_logs_count=1,
        total_points=MOOD_LOG_POINTS,
        last_points_earned=earned_at,
    )
    return stmt.on_conflict_do_update(
        index_elements=[GamificationData.user_id],
        set_={
            "mood_logs_count": GamificationData.mood_logs_count + 1,
            "total_points": GamificationData.total_points + MOOD_LOG_POINTS,
            "last_points_earned": earned_at,
        },
    )


async def _upsert_gamification(
    db: AsyncSession, user_id: UserId, earned_at: datetime,
) -> None:
    dialect_name = db.get_bind().dialect.name
    await db.execute(build_gamification_upsert(dialect_name, user_id, earned_at))


async def log_mood(db: AsyncSession, entry: MoodLogCreate) -> MoodLogResponse:
    """Record a mood entry for an existing anonymous user."""
    user = await find_user_by_anonymous_id(db, entry.anonymous_id)
    user_id = UserId(user.id)
    sentiment = score_mood_sentiment(entry.mood_score)
    notes = sanitize_text(entry.notes) or None
    alerts = detect_crisis_alerts(notes, entry.emotions)
    now = datetime.now(timezone.utc)

    try:
        mood_log = MoodLog(
            user_id=user_id,
            mood_score=entry.mood_score,
            emotions=entry.emotions,
            notes=notes,
            triggers=entry.triggers,
            sentiment_score=sentiment.score,
            sentiment_label=sentiment.label.value,
            language=entry.language,
            logged_at=now,
        )
        db.add(mood_log)
        await db.flush()
        mood_log_id = mood_log.id

        db.add(UserInteraction(
            user_id=user_id,
            interaction_type=InteractionType.MOOD_LOGGED.value,
            entity_type=EntityType.MOOD.value,
            entity_id=mood_log_id,
            interaction_metadata={
                "moodScore": entry.mood_score,
                "sentimentLabel": sentiment.label.value,
                "emotionsCount": len(entry.emotions),
                "hasNotes": notes is not None,
            },
            timestamp=now,
            language=entry.language,
        ))
        await _upsert_gamification(db, user_id, now)
        user.last_active_at = now
        await db.commit()
    except Exception as e:
        await db.rollback()
        logger.error(
            f"Mood log transaction rolled back: {e}",
            extra={"user_id": user_id}, exc_info=True,
        )
        raise MoodLogPersistenceError(ErrorContext(user_id=user_id)) from e

    logger.info(
        "Mood logged",
        extra={"user_id": user_id, "mood_log_id": mood_log_id},
    )
    if alerts:
        logger.warning(
            "Crisis keywords in mood entry",
            extra={"user_id": user_id, "mood_log_id": mood_log_id},
        )
    return MoodLogResponse(
        mood_log_id=mood_log_id,
        sentiment_analysis=SentimentAnalysis(
            score=sentiment.score, label=sentiment.label,
        ),
        points_earned=MOOD_LOG_POINTS,
        message="Mood logged successfully",
        alerts=alerts or None,
    )
