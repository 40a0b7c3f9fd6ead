"""Mood Sentiment: deterministic piecewise-linear mapping from a 1-10 mood score.

Invariants:
    - 7..10 -> positive, score = 0.5 + (m - 7) * 0.17
    - 1..4  -> negative, score = -0.5 - (4 - m) * 0.17
    - 5, 6  -> neutral,  score = (m - 5.5) * 0.33
    - Anything that is not an int in [1, 10] raises ValueError (bool is rejected)
"""

from dataclasses import dataclass

from sata_api.core.domain_types import (
    MOOD_SCORE_MAX, MOOD_SCORE_MIN, SentimentLabel,
)


@dataclass(frozen=True)
class MoodSentiment:
    score: float
    label: SentimentLabel


def is_valid_mood_score(value: object) -> bool:
    """True for integers in the closed range [1, 10]."""
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and MOOD_SCORE_MIN <= value <= MOOD_SCORE_MAX
    )


def score_mood_sentiment(mood_score: int) -> MoodSentiment:
    """Derive the sentiment pair stored alongside a mood log."""
    if not is_valid_mood_score(mood_score):
        raise ValueError(
            f"mood score must be an integer between {MOOD_SCORE_MIN} "
            f"and {MOOD_SCORE_MAX}, got {mood_score!r}"
        )
    if mood_score >= 7:
        return MoodSentiment(0.5 + (mood_score - 7) * 0.17, SentimentLabel.POSITIVE)
    if mood_score <= 4:
        return MoodSentiment(-0.5 - (4 - mood_score) * 0.17, SentimentLabel.NEGATIVE)
    return MoodSentiment((mood_score - 5.5) * 0.33, SentimentLabel.NEUTRAL)
