"""Crisis Keyword Detection: flags mood entries that mention self-harm phrases.

Invariants:
    - Matching is case-insensitive substring search over notes + emotion tags
    - Returns at most one alert; empty list when nothing matches
    - Never blocks a write, alerts are advisory only
"""

CRISIS_KEYWORDS: tuple[str, ...] = (
    "suicide",
    "kill myself",
    "end it all",
    "hopeless",
    "worthless",
)

CRISIS_ALERT = "Crisis keywords detected - consider seeking immediate help"


def detect_crisis_alerts(notes: str | None, emotions: list[str]) -> list[str]:
    if not notes and not emotions:
        return []
    text = f"{notes or ''} {' '.join(emotions)}".lower()
    if any(keyword in text for keyword in CRISIS_KEYWORDS):
        return [CRISIS_ALERT]
    return []
