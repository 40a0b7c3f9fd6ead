"""SQLAlchemy Declarative Base: shared base class for all ORM models.

Invariants:
    - All models inherit from Base
    - Base is the single source of truth for table metadata
"""

import uuid

from sqlalchemy.orm import DeclarativeBase


def new_id() -> str:
    """Default primary key: UUID4 rendered as text."""
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """Base class for all SATA ORM models."""
    pass
