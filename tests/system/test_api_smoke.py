"""
System smoke test: full API flow in-process.
Verifies health, request ids, action dispatch, notifications, gates and catalog routes.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from pathway.config import Settings
from pathway.demo.scenarios import default_record
from pathway.engines.progression.engine import ProgressionEngine
from pathway.main import create_app

API = "/api/v1"


@pytest_asyncio.fixture
async def client():
    """Async client over a fresh app and engine per test."""
    engine = ProgressionEngine(default_record(), notification_limit=50, allow_debug_actions=True)
    app = create_app(engine=engine, settings=Settings(_env_file=None))
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    r = await client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert "version" in data
    assert "environment" in data
    assert r.headers.get("X-Request-ID")


@pytest.mark.asyncio
async def test_request_id_echoed(client: AsyncClient):
    r = await client.get("/health", headers={"X-Request-ID": "trace-42"})
    assert r.headers["X-Request-ID"] == "trace-42"


@pytest.mark.asyncio
async def test_get_learner(client: AsyncClient):
    r = await client.get(f"{API}/learner")
    assert r.status_code == 200
    data = r.json()
    assert data["level"] == "apprentice"
    assert data["xp"] == 0


@pytest.mark.asyncio
async def test_dispatch_action_flow(client: AsyncClient):
    action = {"type": "complete-unit", "id": "ML-01", "xp": 100}
    r = await client.post(f"{API}/learner/actions", json=action)
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["changed"] is True
    assert data["state"]["xp"] == 100
    assert data["state"]["completed_units"] == ["ML-01"]

    r = await client.post(f"{API}/learner/actions", json=action)
    assert r.json()["changed"] is False
    assert r.json()["state"]["xp"] == 100


@pytest.mark.asyncio
async def test_unknown_action_is_not_an_error(client: AsyncClient):
    r = await client.post(f"{API}/learner/actions", json={"type": "teleport"})
    assert r.status_code == 200
    assert r.json()["changed"] is False


@pytest.mark.asyncio
async def test_notifications(client: AsyncClient):
    r = await client.get(f"{API}/learner/notifications")
    assert r.status_code == 200
    data = r.json()
    assert data["unread_count"] == 1
    assert data["items"][0]["id"] == "welcome"

    r = await client.post(f"{API}/learner/notifications/welcome/read")
    assert r.status_code == 200
    assert r.json()["changed"] is True

    r = await client.get(f"{API}/learner/notifications", params={"unread_only": True})
    assert r.json()["items"] == []
    assert r.json()["unread_count"] == 0


@pytest.mark.asyncio
async def test_mark_unknown_notification_404(client: AsyncClient):
    r = await client.post(f"{API}/learner/notifications/missing/read")
    assert r.status_code == 404
    assert r.json()["detail"] == "Notification not found"
    assert r.headers.get("X-Request-ID")


@pytest.mark.asyncio
async def test_derived_views(client: AsyncClient):
    r = await client.get(f"{API}/learner/next-step")
    assert r.status_code == 200
    assert r.json()["kind"] == "profile"

    r = await client.get(f"{API}/learner/graduation-checklist")
    assert r.status_code == 200
    assert r.json()["ready"] is False

    r = await client.get(f"{API}/learner/center")
    assert r.status_code == 200
    assert r.json()["free_seats"] == 18


@pytest.mark.asyncio
async def test_gate_evaluation(client: AsyncClient):
    r = await client.get(f"{API}/gates/apprentice", params={"meetings_attended": 1})
    assert r.status_code == 200
    data = r.json()
    assert data["next_level"] == "journeyman"
    assert data["can_advance"] is False
    meeting = next(req for req in data["requirements"] if req["id"] == "meeting")
    assert meeting["fulfilled"] is True


@pytest.mark.asyncio
async def test_gate_invalid_level_422(client: AsyncClient):
    r = await client.get(f"{API}/gates/wizard")
    assert r.status_code == 422
    data = r.json()
    assert data["detail"] == "Validation error"
    assert data["errors"]


@pytest.mark.asyncio
async def test_gate_advance_rejected_409(client: AsyncClient):
    r = await client.post(f"{API}/gates/apprentice/advance")
    assert r.status_code == 409
    assert "Earn 800 XP" in r.json()["detail"]


@pytest.mark.asyncio
async def test_catalog_submit_and_attend(client: AsyncClient):
    r = await client.post(f"{API}/catalog/tasks/T-01/submit")
    assert r.status_code == 200
    assert r.json()["state"]["xp"] == 50

    r = await client.post(f"{API}/catalog/events/EV-BOT-ARENA/attend")
    assert r.status_code == 200
    assert r.json()["state"]["xp"] == 250

    r = await client.post(f"{API}/catalog/tasks/NOPE/submit")
    assert r.status_code == 404
    r = await client.post(f"{API}/catalog/events/NOPE/attend")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_catalog_listing(client: AsyncClient):
    r = await client.get(f"{API}/catalog/units")
    assert r.status_code == 200
    assert [u["id"] for u in r.json()] == ["ML-01", "ML-02"]


@pytest.mark.asyncio
async def test_jump_to_stage_over_http(client: AsyncClient):
    r = await client.post(f"{API}/learner/actions", json={"type": "jump-to-stage", "stage": "graduation"})
    assert r.status_code == 200
    state = r.json()["state"]
    assert state["level"] == "graduate"
    assert state["phase"] == "graduation"


def test_error_responses_documented():
    """Routes that raise 404/409 advertise the shared error body in the OpenAPI schema."""
    app = create_app(
        engine=ProgressionEngine(default_record(), allow_debug_actions=True),
        settings=Settings(_env_file=None),
    )
    schema = app.openapi()
    assert "ErrorResponse" in schema["components"]["schemas"]

    paths = schema["paths"]
    advance = paths[f"{API}/gates/{{level}}/advance"]["post"]["responses"]
    assert advance["409"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
    assert "404" in paths[f"{API}/catalog/tasks/{{task_id}}/submit"]["post"]["responses"]
    assert "404" in paths[f"{API}/catalog/events/{{event_id}}/attend"]["post"]["responses"]
    assert "404" in paths[f"{API}/learner/notifications/{{notification_id}}/read"]["post"]["responses"]
