"""Mood Schemas: request/response contracts for POST /mood/log.

Invariants:
    - moodScore is a strict integer in [1, 10]; 3.5, "3", true are rejected
    - anonymousId is stripped and must be non-empty
    - emotions/triggers are short tag lists
"""

from pydantic import Field, field_validator

from sata_api.core.domain_types import (
    MOOD_SCORE_MAX, MOOD_SCORE_MIN, SentimentLabel,
)
from sata_api.schemas.base import CamelModel


class MoodLogCreate(CamelModel):
    """Mood submission body."""
    anonymous_id: str = Field(min_length=1, max_length=100)
    mood_score: int = Field(ge=MOOD_SCORE_MIN, le=MOOD_SCORE_MAX, strict=True)
    emotions: list[str] = Field(default_factory=list, max_length=20)
    notes: str | None = Field(None, max_length=2000)
    triggers: list[str] = Field(default_factory=list, max_length=20)
    language: str = Field("en", min_length=2, max_length=10)

    @field_validator("anonymous_id")
    @classmethod
    def strip_anonymous_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("anonymousId cannot be empty or whitespace")
        return v

    @field_validator("emotions", "triggers")
    @classmethod
    def normalize_tags(cls, v: list[str]) -> list[str]:
        tags = [tag.strip() for tag in v]
        if any(not tag or len(tag) > 50 for tag in tags):
            raise ValueError("tags must be non-empty and at most 50 characters")
        return tags


class SentimentAnalysis(CamelModel):
    score: float
    label: SentimentLabel


class MoodLogResponse(CamelModel):
    """Result of a committed mood log."""
    mood_log_id: str
    sentiment_analysis: SentimentAnalysis
    points_earned: int
    message: str
    alerts: list[str] | None = None
