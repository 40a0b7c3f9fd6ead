"""Message Interactions: WhatsApp message feed and message recording.

Invariants:
    - Feed returns at most MESSAGE_FEED_LIMIT rows, newest first
    - Stored metadata is a MessageMetadata record; a raw phone number never
      reaches the database (replaced by the redaction marker everywhere)
    - No idempotency: every POST inserts a new row
"""

import logging
import time
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sata_api.core.domain_types import (
    MESSAGE_FEED_LIMIT, PHONE_REDACTION_MARKER, EntityType, InteractionType,
)
from sata_api.core.errors import (
    ErrorContext, MessagePersistenceError, ResourceNotFoundError,
)
from sata_api.core.sanitize_text import redact_phone_number, sanitize_text
from sata_api.models.anonymous_user import AnonymousUser
from sata_api.models.user_interaction import UserInteraction
from sata_api.schemas.message import MessageCreate, MessageMetadata

logger = logging.getLogger(__name__)


def serialize_interaction(interaction: UserInteraction) -> dict:
    """Interaction row as the JSON record returned by the messages endpoints."""
    user = interaction.user
    return {
        "id": interaction.id,
        "userId": interaction.user_id,
        "interactionType": interaction.interaction_type,
        "entityType": interaction.entity_type,
        "entityId": interaction.entity_id,
        "metadata": interaction.interaction_metadata,
        "timestamp": interaction.timestamp.isoformat(),
        "language": interaction.language,
        "user": (
            {"anonymousId": user.anonymous_id, "language": user.language}
            if user else None
        ),
    }


async def list_messages(
    db: AsyncSession,
    limit: int = MESSAGE_FEED_LIMIT,
    anonymous_id: str | None = None,
) -> list[UserInteraction]:
    """Most recent WhatsApp message interactions, optionally for one user."""
    query = select(UserInteraction).where(
        UserInteraction.interaction_type == InteractionType.WHATSAPP_MESSAGE.value,
    )
    if anonymous_id:
        query = query.join(
            AnonymousUser, UserInteraction.user_id == AnonymousUser.id,
        ).where(AnonymousUser.anonymous_id == anonymous_id)
    query = query.order_by(
        UserInteraction.timestamp.desc(), UserInteraction.id.desc(),
    ).limit(min(limit, MESSAGE_FEED_LIMIT))

    try:
        result = await db.execute(query)
        return list(result.scalars().all())
    except SQLAlchemyError as e:
        logger.error(f"Failed to fetch messages: {e}", exc_info=True)
        raise MessagePersistenceError("fetch") from e


def build_message_metadata(body: MessageCreate) -> MessageMetadata:
    phone = body.phone_number
    return MessageMetadata(
        message_content=redact_phone_number(
            sanitize_text(body.message_content), phone,
        ),
        message_type=body.message_type,
        phone_number=PHONE_REDACTION_MARKER if phone else None,
        extra=redact_phone_number(body.extra, phone),
    )


async def record_message(db: AsyncSession, body: MessageCreate) -> UserInteraction:
    """Insert a WHATSAPP_MESSAGE interaction for an existing user."""
    user = await db.get(AnonymousUser, body.user_id)
    if not user:
        raise ResourceNotFoundError("User", body.user_id)

    interaction = UserInteraction(
        user=user,
        interaction_type=InteractionType.WHATSAPP_MESSAGE.value,
        entity_type=EntityType.MESSAGE.value,
        entity_id=f"msg_{time.time_ns() // 1_000_000}",
        interaction_metadata=build_message_metadata(body).to_storage(),
        timestamp=datetime.now(timezone.utc),
        language=user.language,
    )
    db.add(interaction)
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(
            f"Failed to create message: {e}",
            extra={"user_id": body.user_id}, exc_info=True,
        )
        raise MessagePersistenceError(
            "create", ErrorContext(user_id=body.user_id),
        ) from e

    logger.info(
        "Message interaction recorded",
        extra={"user_id": body.user_id, "interaction_id": interaction.id},
    )
    return interaction
