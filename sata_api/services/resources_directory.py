"""Resources Directory Manager: in-process utilization counters per resource and day.

Invariants:
    - One DailyUtilization bucket per (resource_id, UTC date), created on first event
    - Each tracked action increments exactly one metric counter
    - Demographic breakdown counts only the keys present in the supplied demographics
    - State lives on the manager instance; the app constructs one at startup and
      injects it, tests construct their own

Design Decisions:
    - Clock is injectable so day bucketing is testable without freezing time
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Callable

from sata_api.core.domain_types import DirectoryAction, ResourceId

logger = logging.getLogger(__name__)

ACTION_METRICS: dict[DirectoryAction, str] = {
    DirectoryAction.VIEW: "views",
    DirectoryAction.CONTACT: "contacts",
    DirectoryAction.QR_SCAN: "qr_scans",
    DirectoryAction.SHARE: "shares",
    DirectoryAction.FEEDBACK: "feedback_count",
}

# demographics key (snake_case or camelCase) -> breakdown bucket
DEMOGRAPHIC_BUCKETS: dict[str, str] = {
    "country": "by_country",
    "age_group": "by_age_group",
    "ageGroup": "by_age_group",
    "employment": "by_employment",
    "language": "by_language",
}


def _empty_metrics() -> dict[str, int]:
    return {metric: 0 for metric in ACTION_METRICS.values()}


def _empty_breakdown() -> dict[str, dict[str, int]]:
    return {bucket: {} for bucket in sorted(set(DEMOGRAPHIC_BUCKETS.values()))}


@dataclass
class DailyUtilization:
    resource_id: ResourceId
    day: date
    metrics: dict[str, int] = field(default_factory=_empty_metrics)
    demographic_breakdown: dict[str, dict[str, int]] = field(
        default_factory=_empty_breakdown,
    )


class ResourcesDirectoryManager:
    """Tracks resource utilization events in memory."""

    def __init__(self, clock: Callable[[], datetime] | None = None):
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._utilization: dict[ResourceId, list[DailyUtilization]] = {}

    def track_utilization(
        self,
        resource_id: ResourceId,
        action: str,
        demographics: dict[str, Any] | None = None,
    ) -> None:
        metric = ACTION_METRICS[DirectoryAction(action)]
        bucket = self._bucket_for(resource_id, self._clock().date())
        bucket.metrics[metric] += 1

        for key, value in (demographics or {}).items():
            breakdown = DEMOGRAPHIC_BUCKETS.get(key)
            if breakdown is None or not value:
                continue
            counts = bucket.demographic_breakdown[breakdown]
            counts[str(value)] = counts.get(str(value), 0) + 1

        logger.debug(
            "Utilization tracked",
            extra={"resource_id": resource_id, "action": action},
        )

    def get_daily_utilization(self, resource_id: ResourceId) -> list[DailyUtilization]:
        """Daily buckets for one resource, oldest first."""
        return sorted(self._utilization.get(resource_id, []), key=lambda u: u.day)

    def _bucket_for(self, resource_id: ResourceId, day: date) -> DailyUtilization:
        buckets = self._utilization.setdefault(resource_id, [])
        for bucket in buckets:
            if bucket.day == day:
                return bucket
        bucket = DailyUtilization(resource_id=resource_id, day=day)
        buckets.append(bucket)
        return bucket
