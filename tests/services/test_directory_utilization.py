"""Directory utilization endpoint: delegation to the directory manager.

Invariants:
    - Valid body -> manager called once with (resourceId, action, demographics)
    - Invalid action -> 400 listing the five directory actions, manager not called
    - Manager failure -> 500 with a generic message, internal detail only in logs
    - GET is an acknowledgement that echoes resourceId and filters
"""

import pytest

from sata_api.api.dependencies import get_directory_manager
from sata_api.main import app


class RecordingManager:
    def __init__(self):
        self.calls = []

    def track_utilization(self, resource_id, action, demographics=None):
        self.calls.append((resource_id, action, demographics))


class FailingManager:
    def track_utilization(self, resource_id, action, demographics=None):
        raise ConnectionError("analytics store unreachable at 10.0.0.7")


@pytest.fixture
def recording_manager(client):
    manager = RecordingManager()
    app.dependency_overrides[get_directory_manager] = lambda: manager
    return manager


async def test_track_delegates_to_manager(client, recording_manager):
    res = await client.post("/api/v1/directory/utilization", json={
        "resourceId": "res-42",
        "action": "qr_scan",
        "userDemographics": {"ageGroup": "25-34", "country": "SG"},
        "metadata": {"kiosk": "clinic-3"},
    })
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "Utilization tracked successfully"
    assert body["data"]["resourceId"] == "res-42"
    assert body["data"]["action"] == "qr_scan"
    assert body["data"]["timestamp"]
    assert recording_manager.calls == [
        ("res-42", "qr_scan", {"age_group": "25-34", "country": "SG"}),
    ]


async def test_track_without_demographics(client, recording_manager):
    await client.post("/api/v1/directory/utilization", json={
        "resourceId": "res-42", "action": "feedback",
    })
    assert recording_manager.calls == [("res-42", "feedback", None)]


@pytest.mark.parametrize("action", ["click", "bookmark", "download", ""])
async def test_invalid_action_returns_400(client, recording_manager, action):
    res = await client.post("/api/v1/directory/utilization", json={
        "resourceId": "res-42", "action": action,
    })
    assert res.status_code == 400
    message = res.json()["error"]["details"][0]["message"]
    for valid in ("view", "contact", "qr_scan", "share", "feedback"):
        assert valid in message
    assert recording_manager.calls == []


async def test_missing_resource_id_returns_400(client, recording_manager):
    res = await client.post("/api/v1/directory/utilization", json={"action": "view"})
    assert res.status_code == 400
    assert recording_manager.calls == []


async def test_manager_failure_returns_generic_500(client, caplog):
    app.dependency_overrides[get_directory_manager] = lambda: FailingManager()

    res = await client.post("/api/v1/directory/utilization", json={
        "resourceId": "res-42", "action": "view",
    })
    assert res.status_code == 500
    error = res.json()["error"]
    assert error["code"] == "UTILIZATION_TRACKING_FAILED"
    assert error["message"] == "Failed to track utilization"
    assert "10.0.0.7" not in res.text
    assert "analytics store unreachable" in caplog.text


async def test_real_manager_counts_events(client, directory_manager):
    for action in ("view", "view", "share"):
        await client.post("/api/v1/directory/utilization", json={
            "resourceId": "res-42",
            "action": action,
            "userDemographics": {"language": "ms"},
        })

    [today] = directory_manager.get_daily_utilization("res-42")
    assert today.metrics["views"] == 2
    assert today.metrics["shares"] == 1
    assert today.demographic_breakdown["by_language"] == {"ms": 3}


async def test_get_acknowledges_resource(client):
    res = await client.get(
        "/api/v1/directory/utilization", params={"resourceId": "res-42"},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "Resource utilization tracking is active"
    assert body["resourceId"] == "res-42"
    assert "filters" not in body


async def test_get_without_resource(client):
    body = (await client.get("/api/v1/directory/utilization")).json()
    assert body["message"] == "Utilization metrics endpoint"
    assert "resourceId" not in body


async def test_get_echoes_filters(client):
    body = (await client.get("/api/v1/directory/utilization", params={
        "startDate": "2024-01-01", "groupBy": "day",
    })).json()
    assert body["filters"] == {"startDate": "2024-01-01", "groupBy": "day"}


async def test_long_resource_id_is_delegated(client, recording_manager):
    resource_id = "clx" + "r" * 40
    res = await client.post("/api/v1/directory/utilization", json={
        "resourceId": resource_id, "action": "view",
    })
    assert res.status_code == 200
    assert recording_manager.calls == [(resource_id, "view", None)]
