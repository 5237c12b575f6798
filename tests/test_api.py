import pytest
from fastapi.testclient import TestClient

from talenttrack.api.sessions import SessionRegistry, get_registry
from talenttrack.main import app

from conftest import arm_frame, frame_payload, pushup_frames


@pytest.fixture
def registry():
    return SessionRegistry(max_active=2)


@pytest.fixture
def client(registry):
    app.dependency_overrides[get_registry] = lambda: registry
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def start(client, activity="pushups", fps=30.0):
    response = client.post("/api/sessions", json={"activity": activity, "fps": fps})
    assert response.status_code == 201
    return response.json()["session_id"]


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_pushup_session_flow(client):
    session_id = start(client)

    reps = []
    for frame in pushup_frames(2):
        response = client.post(f"/api/sessions/{session_id}/frames", json=frame_payload(frame))
        assert response.status_code == 200
        body = response.json()
        if body["event"] is not None:
            reps.append(body)

    assert len(reps) == 2
    assert reps[0]["event_type"] == "rep"
    assert reps[0]["event"]["sequence_number"] == 1
    assert reps[0]["feedback"]["tone"] == "good"

    response = client.post(f"/api/sessions/{session_id}/stop")
    assert response.status_code == 200
    result = response.json()
    assert result["activity"] == "pushups"
    assert result["sets_completed"] == 2
    assert result["posture"] == "Good"
    assert result["summary"]["good_reps"] == 2


def test_shuttle_status_every_frame(client):
    session_id = start(client, "shuttlerun")
    payload = {"landmarks": [{"x": 0.5, "y": 0.9, "visibility": 0.9}] * 33,
               "width": 1000, "height": 1000, "timestamp": 0.0}
    body = client.post(f"/api/sessions/{session_id}/frames", json=payload).json()
    assert body["event_type"] == "shuttle_status"
    assert body["event"] == {"run_count": 0, "status": "Waiting"}


def test_empty_frame_produces_nothing(client):
    session_id = start(client)
    payload = {"landmarks": [], "width": 640, "height": 480, "timestamp": 0.0}
    response = client.post(f"/api/sessions/{session_id}/frames", json=payload)
    assert response.status_code == 200
    assert response.json() == {"event_type": None, "event": None, "feedback": None}


def test_unknown_activity_rejected(client):
    response = client.post("/api/sessions", json={"activity": "burpees"})
    assert response.status_code == 422


def test_invalid_frame_rejected(client):
    session_id = start(client)
    payload = frame_payload(arm_frame(170, 0.0))
    payload["width"] = 0
    response = client.post(f"/api/sessions/{session_id}/frames", json=payload)
    assert response.status_code == 422


def test_unknown_session(client):
    payload = frame_payload(arm_frame(170, 0.0))
    assert client.post("/api/sessions/nope/frames", json=payload).status_code == 404
    assert client.post("/api/sessions/nope/stop").status_code == 404


def test_out_of_order_frame_conflict(client):
    session_id = start(client)
    client.post(f"/api/sessions/{session_id}/frames", json=frame_payload(arm_frame(170, 1.0)))
    response = client.post(f"/api/sessions/{session_id}/frames", json=frame_payload(arm_frame(170, 0.5)))
    assert response.status_code == 409


def test_frames_after_stop_conflict(client):
    session_id = start(client)
    assert client.post(f"/api/sessions/{session_id}/stop").status_code == 200
    response = client.post(f"/api/sessions/{session_id}/frames", json=frame_payload(arm_frame(170, 0.0)))
    assert response.status_code == 409
    assert client.post(f"/api/sessions/{session_id}/stop").status_code == 409


def test_session_limit(client, registry):
    first = start(client)
    start(client)
    assert client.post("/api/sessions", json={"activity": "situps"}).status_code == 503

    client.post(f"/api/sessions/{first}/stop")
    assert client.post("/api/sessions", json={"activity": "situps"}).status_code == 201
    assert registry.active_count() == 2


def test_delete_session(client):
    session_id = start(client)
    assert client.delete(f"/api/sessions/{session_id}").status_code == 204
    assert client.post(f"/api/sessions/{session_id}/stop").status_code == 404


def test_stopped_sessions_are_evicted():
    registry = SessionRegistry(max_active=2, retain_stopped=3)
    for _ in range(50):
        registry.stop(registry.create("pushups", None))
    assert len(registry) == 3
    assert registry.active_count() == 0


def test_recently_stopped_session_still_conflicts(client, registry):
    registry.retain_stopped = 1
    first = start(client)
    client.post(f"/api/sessions/{first}/stop")
    assert client.post(f"/api/sessions/{first}/stop").status_code == 409

    second = start(client)
    client.post(f"/api/sessions/{second}/stop")
    assert client.post(f"/api/sessions/{first}/stop").status_code == 404
    assert client.post(f"/api/sessions/{second}/stop").status_code == 409


def test_delete_stopped_session(registry):
    session_id = registry.create("situps", None)
    registry.stop(session_id)
    registry.remove(session_id)
    assert len(registry) == 0
    registry.stop(registry.create("situps", None))
    assert len(registry) == 1
