"""Utilization Schemas: request/response contracts for both utilization endpoints.

Invariants:
    - resourceId and action are required on every POST
    - Direct tracking accepts ResourceAction only, directory tracking DirectoryAction only
    - An invalid action error message lists every valid action for that endpoint
    - userDemographics rejects unknown keys
    - resourceId is opaque; its length cap sits above the column width so an
      unknown id reaches the lookup and 404s
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from sata_api.core.domain_types import DirectoryAction, ResourceAction
from sata_api.schemas.base import CamelModel, ScalarValue


def _check_action(value: Any, actions: type[Enum]) -> Any:
    valid = [a.value for a in actions]
    raw = value.value if isinstance(value, Enum) else value
    if raw not in valid:
        raise ValueError(f"Invalid action type. Must be one of: {', '.join(valid)}")
    return raw


class UserDemographics(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid",
    )

    age_group: str | None = Field(None, max_length=50)
    location: str | None = Field(None, max_length=100)
    language: str | None = Field(None, max_length=10)
    country: str | None = Field(None, max_length=100)
    employment: str | None = Field(None, max_length=100)


class UtilizationTrack(CamelModel):
    """POST body for direct resource utilization tracking."""
    resource_id: str = Field(min_length=1, max_length=255)
    action: ResourceAction
    user_demographics: UserDemographics | None = None
    session_data: dict[str, ScalarValue] = Field(default_factory=dict, max_length=20)

    @field_validator("action", mode="before")
    @classmethod
    def check_action(cls, v: Any) -> Any:
        return _check_action(v, ResourceAction)


class DirectoryUtilizationTrack(CamelModel):
    """POST body for utilization tracking delegated to the directory manager."""
    resource_id: str = Field(min_length=1, max_length=255)
    action: DirectoryAction
    user_demographics: UserDemographics | None = None
    extra: dict[str, ScalarValue] = Field(
        default_factory=dict, alias="metadata", max_length=20,
    )

    @field_validator("action", mode="before")
    @classmethod
    def check_action(cls, v: Any) -> Any:
        return _check_action(v, DirectoryAction)


class UtilizationMetrics(CamelModel):
    total_interactions: int = 0
    interactions_by_type: dict[str, int] = Field(default_factory=dict)


class UtilizationMetricsResponse(CamelModel):
    success: bool = True
    metrics: UtilizationMetrics


class TrackedUtilization(CamelModel):
    resource_id: str
    action: DirectoryAction
    timestamp: datetime


class DirectoryTrackResponse(CamelModel):
    success: bool = True
    message: str
    data: TrackedUtilization
