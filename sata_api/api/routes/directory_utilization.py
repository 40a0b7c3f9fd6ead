"""Directory Utilization Route: utilization tracking delegated to the directory manager.

Invariants:
    - POST validates action against DirectoryAction (400) before delegating
    - Any collaborator exception -> 500 UTILIZATION_TRACKING_FAILED, details only in logs
    - GET is an acknowledgement only; no metrics are computed here
    - Client metadata is validated but not forwarded to the manager
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query

from sata_api.api.dependencies import get_directory_manager
from sata_api.core.domain_types import ResourceId
from sata_api.core.errors import ErrorContext, UtilizationTrackingError
from sata_api.core.repository_protocols import DirectoryManager
from sata_api.schemas.utilization import (
    DirectoryTrackResponse, DirectoryUtilizationTrack, TrackedUtilization,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/directory/utilization", tags=["directory"])


@router.post("", response_model=DirectoryTrackResponse)
async def track_directory_utilization(
    body: DirectoryUtilizationTrack,
    manager: DirectoryManager = Depends(get_directory_manager),
):
    demographics = (
        body.user_demographics.model_dump(exclude_none=True)
        if body.user_demographics else None
    )
    try:
        manager.track_utilization(
            ResourceId(body.resource_id), body.action.value, demographics,
        )
    except Exception as e:
        logger.error(
            f"Directory manager failed to track utilization: {e}",
            extra={"resource_id": body.resource_id, "action": body.action.value},
            exc_info=True,
        )
        raise UtilizationTrackingError(
            ErrorContext(resource_id=body.resource_id),
        ) from e

    return DirectoryTrackResponse(
        message="Utilization tracked successfully",
        data=TrackedUtilization(
            resource_id=body.resource_id,
            action=body.action,
            timestamp=datetime.now(timezone.utc),
        ),
    )


@router.get("")
async def get_directory_utilization(
    resource_id: str | None = Query(None, alias="resourceId"),
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
    group_by: str | None = Query(None, alias="groupBy"),
):
    if resource_id:
        body = {
            "success": True,
            "message": "Resource utilization tracking is active",
            "resourceId": resource_id,
            "note": "Detailed utilization metrics are not computed by this endpoint",
        }
    else:
        body = {
            "success": True,
            "message": "Utilization metrics endpoint",
            "note": "Aggregated analytics are not computed by this endpoint",
        }
    filters = {
        key: value for key, value in (
            ("startDate", start_date), ("endDate", end_date), ("groupBy", group_by),
        ) if value
    }
    if filters:
        body["filters"] = filters
    return body
