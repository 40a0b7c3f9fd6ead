"""Resource Utilization: direct persistence of view/click/share events on directory resources.

Invariants:
    - An event is only recorded against a resource row that exists (404 otherwise)
    - Each event is one UserInteraction with resource_id set and no user
    - Metrics are computed with a GROUP BY, never by loading the interactions
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sata_api.core.domain_types import (
    RESOURCE_INTERACTION_PREFIX, EntityType, ResourceId, resource_interaction_type,
)
from sata_api.core.errors import (
    DatabaseError, ErrorContext, ResourceNotFoundError,
)
from sata_api.models.mental_health_resource import MentalHealthResource
from sata_api.models.user_interaction import UserInteraction
from sata_api.schemas.utilization import UtilizationMetrics, UtilizationTrack

logger = logging.getLogger(__name__)


async def get_resource_or_404(
    db: AsyncSession, resource_id: ResourceId,
) -> MentalHealthResource:
    resource = await db.get(MentalHealthResource, resource_id)
    if not resource:
        raise ResourceNotFoundError("Resource", resource_id)
    return resource


async def record_resource_utilization(
    db: AsyncSession, body: UtilizationTrack,
) -> UserInteraction:
    resource = await get_resource_or_404(db, ResourceId(body.resource_id))
    demographics = (
        body.user_demographics.model_dump(by_alias=True, exclude_none=True)
        if body.user_demographics else {}
    )
    interaction = UserInteraction(
        resource_id=resource.id,
        interaction_type=resource_interaction_type(body.action),
        entity_type=EntityType.RESOURCE.value,
        entity_id=resource.id,
        interaction_metadata={
            "action": body.action.value,
            "userDemographics": demographics,
            "sessionData": body.session_data,
        },
        timestamp=datetime.now(timezone.utc),
        language=demographics.get("language") or "en",
    )
    db.add(interaction)
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(
            f"Failed to record utilization: {e}",
            extra={"resource_id": body.resource_id}, exc_info=True,
        )
        raise DatabaseError(
            "Utilization event not stored", "commit",
            ErrorContext(resource_id=body.resource_id),
        ) from e

    logger.info(
        "Resource utilization recorded",
        extra={"resource_id": resource.id, "action": body.action.value},
    )
    return interaction


async def get_utilization_metrics(
    db: AsyncSession, resource_id: ResourceId | None,
) -> UtilizationMetrics:
    """Interaction counts for one resource; zero-valued without a resource id."""
    if not resource_id:
        return UtilizationMetrics()
    result = await db.execute(
        select(UserInteraction.interaction_type, func.count(UserInteraction.id))
        .where(UserInteraction.resource_id == resource_id)
        .group_by(UserInteraction.interaction_type),
    )
    by_type = {
        tag.removeprefix(RESOURCE_INTERACTION_PREFIX): count
        for tag, count in result.all()
    }
    return UtilizationMetrics(
        total_interactions=sum(by_type.values()),
        interactions_by_type=by_type,
    )
