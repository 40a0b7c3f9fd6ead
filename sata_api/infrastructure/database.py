"""Database Session Manager: async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - SQLAlchemy exceptions escaping a session become DatabaseError, tagged with
      the operation (request path or probe name) that owned the session
    - Service-level errors (MoodLogPersistenceError, ...) pass through untouched

Design Decisions:
    - db_manager initialized on startup by the FastAPI lifespan, not at import time
    - expire_on_commit=False: ORM objects stay readable after commit in async context
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from sata_api.core.errors import DatabaseError

logger = logging.getLogger(__name__)

# Most specific first; SQLAlchemyError catches the rest
_FAILURE_REASONS: tuple[tuple[type[SQLAlchemyError], str], ...] = (
    (IntegrityError, "duplicate or dangling reference"),
    (OperationalError, "database unreachable or timed out"),
    (DBAPIError, "statement rejected by driver"),
    (SQLAlchemyError, "ORM operation failed"),
)


def describe_failure(exc: SQLAlchemyError) -> str:
    """Client-safe reason for a SQLAlchemy failure, never the driver message."""
    return next(reason for kind, reason in _FAILURE_REASONS if isinstance(exc, kind))


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(
        self, operation: str = "request",
    ) -> AsyncGenerator[AsyncSession, None]:
        """Session for one operation, rolled back if it raises."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(
                f"DB failure during {operation}: {e}", extra={"path": operation},
            )
            raise DatabaseError(describe_failure(e), operation) from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """SELECT 1 round trip for the readiness probe."""
        try:
            async with self.session("readiness probe") as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request, tagged with its path."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session(f"{request.method} {request.url.path}") as session:
        yield session
