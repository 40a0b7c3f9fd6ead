"""Messages endpoints: feed ordering and cap, recording, phone redaction.

Invariants:
    - GET returns at most 50 WHATSAPP_MESSAGE records, newest first
    - POST without userId -> 400, unknown userId -> 404, no rows written
    - The submitted phone number never appears in stored metadata
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select

from sata_api.models import AnonymousUser, UserInteraction

PHONE = "+6591234567"


async def _count_interactions(db) -> int:
    result = await db.execute(select(func.count()).select_from(UserInteraction))
    return result.scalar_one()


@pytest.fixture
async def seed_feed(test_db, seed_user):
    """55 messages a minute apart plus one mood interaction that must be filtered out."""
    base = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
    for i in range(55):
        test_db.add(UserInteraction(
            user_id=seed_user.id,
            interaction_type="WHATSAPP_MESSAGE",
            entity_type="message",
            entity_id=f"msg_{i}",
            interaction_metadata={"messageContent": f"message {i}"},
            timestamp=base + timedelta(minutes=i),
        ))
    test_db.add(UserInteraction(
        user_id=seed_user.id,
        interaction_type="mood_logged",
        entity_type="mood",
        timestamp=base + timedelta(days=1),
    ))
    await test_db.commit()
    return base


# ─── POST ────────────────────────────────────────────────────────

async def test_create_message_returns_201(client, seed_user):
    res = await client.post("/api/v1/messages", json={
        "userId": seed_user.id,
        "messageContent": "Hi, I need someone to talk to",
    })
    assert res.status_code == 201
    body = res.json()
    assert body["userId"] == seed_user.id
    assert body["interactionType"] == "WHATSAPP_MESSAGE"
    assert body["entityType"] == "message"
    assert body["entityId"].startswith("msg_")
    assert body["metadata"] == {
        "messageContent": "Hi, I need someone to talk to",
        "messageType": "text",
        "platform": "whatsapp",
        "extra": {},
    }
    assert body["user"] == {"anonymousId": "anon-7f3a", "language": "en"}


async def test_missing_user_id_returns_400_without_writes(client, test_db):
    res = await client.post("/api/v1/messages", json={"messageContent": "hello"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
    assert await _count_interactions(test_db) == 0


async def test_unknown_user_returns_404(client, test_db):
    res = await client.post("/api/v1/messages", json={
        "userId": "5b0e6c0e-0000-4000-8000-000000000000",
        "messageContent": "hello",
    })
    assert res.status_code == 404
    assert await _count_interactions(test_db) == 0


async def test_long_unknown_user_id_returns_404(client, test_db):
    res = await client.post("/api/v1/messages", json={"userId": "clx" + "u" * 40})
    assert res.status_code == 404
    assert await _count_interactions(test_db) == 0


async def test_phone_number_redacted_everywhere(client, seed_user, test_db):
    """Phone number is replaced in content, marker field and metadata keys and values."""
    res = await client.post("/api/v1/messages", json={
        "userId": seed_user.id,
        "messageContent": f"Call me back on {PHONE}",
        "phoneNumber": PHONE,
        "metadata": {"replyTo": PHONE, "flow": "callback", PHONE: "preferred"},
    })
    assert res.status_code == 201
    assert PHONE not in res.text

    test_db.expire_all()
    stored = (await test_db.execute(select(UserInteraction))).scalar_one()
    metadata = stored.interaction_metadata
    assert metadata["phoneNumber"] == "encrypted"
    assert metadata["messageContent"] == "Call me back on encrypted"
    assert metadata["extra"] == {
        "replyTo": "encrypted", "flow": "callback", "encrypted": "preferred",
    }
    assert PHONE not in str(metadata)


async def test_message_content_is_sanitized(client, seed_user):
    res = await client.post("/api/v1/messages", json={
        "userId": seed_user.id,
        "messageContent": "<script>alert(1)</script><i>feeling low</i>",
    })
    assert res.json()["metadata"]["messageContent"] == "feeling low"


async def test_interaction_language_follows_user(client, test_db):
    user = AnonymousUser(anonymous_id="anon-ms", language="ms")
    test_db.add(user)
    await test_db.commit()

    res = await client.post("/api/v1/messages", json={"userId": user.id})
    assert res.json()["language"] == "ms"


async def test_reserved_metadata_key_returns_400(client, seed_user):
    res = await client.post("/api/v1/messages", json={
        "userId": seed_user.id, "metadata": {"platform": "telegram"},
    })
    assert res.status_code == 400


async def test_invalid_message_type_returns_400(client, seed_user):
    res = await client.post("/api/v1/messages", json={
        "userId": seed_user.id, "messageType": "sticker_pack",
    })
    assert res.status_code == 400


async def test_each_post_inserts_new_row(client, seed_user, test_db):
    payload = {"userId": seed_user.id, "messageContent": "same"}
    await client.post("/api/v1/messages", json=payload)
    await client.post("/api/v1/messages", json=payload)
    assert await _count_interactions(test_db) == 2


# ─── GET ─────────────────────────────────────────────────────────

async def test_empty_feed_returns_empty_list(client):
    res = await client.get("/api/v1/messages")
    assert res.status_code == 200
    assert res.json() == []


async def test_feed_is_capped_at_50_newest_first(client, seed_feed):
    res = await client.get("/api/v1/messages")
    assert res.status_code == 200
    items = res.json()
    assert len(items) == 50
    assert all(i["interactionType"] == "WHATSAPP_MESSAGE" for i in items)
    assert items[0]["entityId"] == "msg_54"
    assert items[-1]["entityId"] == "msg_5"
    timestamps = [i["timestamp"] for i in items]
    assert timestamps == sorted(timestamps, reverse=True)
    assert len(set(timestamps)) == 50


async def test_feed_includes_user_summary(client, seed_feed):
    items = (await client.get("/api/v1/messages")).json()
    assert items[0]["user"] == {"anonymousId": "anon-7f3a", "language": "en"}


async def test_feed_limit_parameter(client, seed_feed):
    items = (await client.get("/api/v1/messages", params={"limit": 3})).json()
    assert [i["entityId"] for i in items] == ["msg_54", "msg_53", "msg_52"]


async def test_feed_limit_above_cap_rejected(client):
    res = await client.get("/api/v1/messages", params={"limit": 500})
    assert res.status_code == 400


async def test_feed_filter_by_anonymous_id(client, seed_feed, test_db):
    other = AnonymousUser(anonymous_id="anon-other")
    test_db.add(other)
    await test_db.commit()
    await client.post("/api/v1/messages", json={
        "userId": other.id, "messageContent": "from other",
    })

    items = (await client.get(
        "/api/v1/messages", params={"anonymousId": "anon-other"},
    )).json()
    assert len(items) == 1
    assert items[0]["userId"] == other.id

    missing = (await client.get(
        "/api/v1/messages", params={"anonymousId": "anon-missing"},
    )).json()
    assert missing == []


async def test_delete_not_allowed(client):
    res = await client.delete("/api/v1/messages")
    assert res.status_code == 405
