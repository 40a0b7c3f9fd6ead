"""Messages Route: WhatsApp message interaction feed and recording.

Invariants:
    - GET returns a bare JSON array of at most 50 records, newest first
    - POST requires userId (400) and an existing user (404), returns 201
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from sata_api.core.domain_types import MESSAGE_FEED_LIMIT
from sata_api.infrastructure.database import get_db
from sata_api.schemas.message import MessageCreate
from sata_api.services.message_interactions import (
    list_messages, record_message, serialize_interaction,
)

router = APIRouter(prefix="/api/v1/messages", tags=["messages"])


@router.get("")
async def list_message_interactions(
    limit: int = Query(MESSAGE_FEED_LIMIT, ge=1, le=MESSAGE_FEED_LIMIT),
    anonymous_id: str | None = Query(None, alias="anonymousId"),
    db: AsyncSession = Depends(get_db),
):
    interactions = await list_messages(db, limit, anonymous_id)
    return [serialize_interaction(i) for i in interactions]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_message_interaction(
    body: MessageCreate, db: AsyncSession = Depends(get_db),
):
    interaction = await record_message(db, body)
    return serialize_interaction(interaction)
