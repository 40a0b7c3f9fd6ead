"""Domain Types: enums and constants shared by schemas, services and routes.

Invariants:
    - All valid tags encoded as Enums, no raw string matching in services
    - str Enums serialize to JSON without custom encoders
    - The two utilization action sets are distinct types (one per endpoint)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
ResourceId = NewType("ResourceId", str)


# ─── Constants ───────────────────────────────────────────────────

MOOD_SCORE_MIN = 1
MOOD_SCORE_MAX = 10
MOOD_LOG_POINTS = 5
MESSAGE_FEED_LIMIT = 50
PHONE_REDACTION_MARKER = "encrypted"
MESSAGE_PLATFORM = "whatsapp"


# ─── Enums ───────────────────────────────────────────────────────

class SentimentLabel(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class InteractionType(str, Enum):
    """Tags written to user_interactions.interaction_type by this service."""
    WHATSAPP_MESSAGE = "WHATSAPP_MESSAGE"
    MOOD_LOGGED = "mood_logged"


class EntityType(str, Enum):
    MOOD = "mood"
    MESSAGE = "message"
    RESOURCE = "resource"


class MessageType(str, Enum):
    """WhatsApp message kinds accepted by the messages endpoint."""
    TEXT = "text"
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    DOCUMENT = "document"
    LOCATION = "location"
    INTERACTIVE = "interactive"
    TEMPLATE = "template"
    QUICK_REPLY = "quick_reply"


class ResourceAction(str, Enum):
    """Utilization actions persisted directly against a resource row."""
    VIEW = "view"
    CLICK = "click"
    CONTACT = "contact"
    DOWNLOAD = "download"
    SHARE = "share"
    BOOKMARK = "bookmark"


class DirectoryAction(str, Enum):
    """Utilization actions delegated to the resources directory manager."""
    VIEW = "view"
    CONTACT = "contact"
    QR_SCAN = "qr_scan"
    SHARE = "share"
    FEEDBACK = "feedback"


RESOURCE_INTERACTION_PREFIX = "resource_"


def resource_interaction_type(action: ResourceAction) -> str:
    """interaction_type tag stored for a direct resource utilization event."""
    return f"{RESOURCE_INTERACTION_PREFIX}{action.value}"
