"""Utilization request validation: per-endpoint action sets and demographics."""

import pytest
from pydantic import ValidationError

from sata_api.core.domain_types import DirectoryAction, ResourceAction
from sata_api.schemas.utilization import DirectoryUtilizationTrack, UtilizationTrack


# --- UtilizationTrack (direct persistence) ------------------------------------

@pytest.mark.parametrize("action", [a.value for a in ResourceAction])
def test_direct_accepts_six_actions(action):
    body = UtilizationTrack.model_validate({"resourceId": "res-1", "action": action})
    assert body.action == ResourceAction(action)


def test_direct_rejects_directory_only_action_listing_valid_ones():
    with pytest.raises(ValidationError) as excinfo:
        UtilizationTrack.model_validate({"resourceId": "res-1", "action": "qr_scan"})
    message = str(excinfo.value)
    for action in ResourceAction:
        assert action.value in message


def test_direct_requires_resource_id_and_action():
    with pytest.raises(ValidationError):
        UtilizationTrack.model_validate({"action": "view"})
    with pytest.raises(ValidationError):
        UtilizationTrack.model_validate({"resourceId": "res-1"})


def test_demographics_reject_unknown_keys():
    with pytest.raises(ValidationError):
        UtilizationTrack.model_validate({
            "resourceId": "res-1", "action": "view",
            "userDemographics": {"ageGroup": "25-34", "salary": "high"},
        })


def test_demographics_camel_case():
    body = UtilizationTrack.model_validate({
        "resourceId": "res-1", "action": "view",
        "userDemographics": {"ageGroup": "25-34", "language": "ta"},
    })
    assert body.user_demographics.age_group == "25-34"
    assert body.user_demographics.language == "ta"


# --- DirectoryUtilizationTrack (delegated) ------------------------------------

@pytest.mark.parametrize("action", [a.value for a in DirectoryAction])
def test_directory_accepts_five_actions(action):
    body = DirectoryUtilizationTrack.model_validate(
        {"resourceId": "res-1", "action": action},
    )
    assert body.action == DirectoryAction(action)


@pytest.mark.parametrize("action", ["click", "download", "bookmark", "invalid"])
def test_directory_rejects_other_actions(action):
    with pytest.raises(ValidationError) as excinfo:
        DirectoryUtilizationTrack.model_validate({"resourceId": "res-1", "action": action})
    assert "qr_scan" in str(excinfo.value)
