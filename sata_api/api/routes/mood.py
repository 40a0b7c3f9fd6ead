"""Mood Logging Route: POST /api/v1/mood/log.

Invariants:
    - Body validated by MoodLogCreate before the handler runs (400 on failure)
    - Unknown anonymousId -> 404; any persistence failure -> 500, nothing written
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from sata_api.infrastructure.database import get_db
from sata_api.schemas.mood import MoodLogCreate, MoodLogResponse
from sata_api.services.mood_logging import log_mood

router = APIRouter(prefix="/api/v1/mood", tags=["mood"])


@router.post(
    "/log", response_model=MoodLogResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def log_mood_entry(
    body: MoodLogCreate, db: AsyncSession = Depends(get_db),
):
    """Log a mood score with derived sentiment and award points."""
    return await log_mood(db, body)
