"""Utilization Route: direct resource utilization tracking and metrics.

Invariants:
    - POST validates action against ResourceAction (400) and the resource row (404)
    - GET never fails for an unknown resource, it reports zero metrics
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from sata_api.infrastructure.database import get_db
from sata_api.schemas.utilization import UtilizationMetricsResponse, UtilizationTrack
from sata_api.services.resource_utilization import (
    get_utilization_metrics, record_resource_utilization,
)

router = APIRouter(prefix="/api/v1/utilization", tags=["utilization"])


@router.post("")
async def track_utilization(
    body: UtilizationTrack, db: AsyncSession = Depends(get_db),
):
    """Record a view/click/contact/download/share/bookmark on a resource."""
    await record_resource_utilization(db, body)
    return {"success": True}


@router.get("", response_model=UtilizationMetricsResponse)
async def get_utilization(
    resource_id: str | None = Query(None, alias="resourceId"),
    db: AsyncSession = Depends(get_db),
):
    """Interaction totals for a resource."""
    metrics = await get_utilization_metrics(db, resource_id)
    return UtilizationMetricsResponse(metrics=metrics)
