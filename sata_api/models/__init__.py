"""ORM Models: SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so string-based relationship() references
      resolve before any query runs
"""

from sata_api.models.anonymous_user import AnonymousUser  # noqa: F401
from sata_api.models.mood_log import MoodLog  # noqa: F401
from sata_api.models.user_interaction import UserInteraction  # noqa: F401
from sata_api.models.gamification_data import GamificationData  # noqa: F401
from sata_api.models.mental_health_resource import MentalHealthResource  # noqa: F401
