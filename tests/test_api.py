import pytest
from fastapi.testclient import TestClient

from sched_guard.config import Settings, get_settings
from sched_guard.main import app
from sched_guard.utils import api_client


def schedule(**overrides):
    data = {
        "school_year": "2025",
        "semester": "1",
        "prof_id": 1,
        "section_id": 2,
        "subj_id": 30,
        "room_id": 9,
        "schedule_type": "Onsite",
        "days": ["monday"],
        "start_time": "08:00",
        "end_time": "09:30",
    }
    data.update(overrides)
    return data


EXISTING = schedule(id=1, section_id=1, subj_id=10, room_id=5, days=["monday", "wednesday"],
                    start_time="07:30:00", end_time="09:00:00", prof_name="Prof. Santos")


@pytest.fixture
def client():
    app.dependency_overrides[get_settings] = lambda: Settings()
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_root(client):
    assert client.get("/").json() == {"message": "Sched_Guard conflict service is running"}


def test_conflict_with_recommendations(client):
    body = {"new_schedule": schedule(), "existing_schedules": [EXISTING]}

    response = client.post("/check_schedule_conflict", json=body)

    assert response.status_code == 200
    data = response.json()
    assert data["conflict"] is True
    assert len(data["professorConflicts"]) == 1
    assert data["professorConflicts"][0]["conflictType"] == "PROFESSOR_SCHEDULE_CONFLICT"
    assert "Prof. Santos" in data["professorConflicts"][0]["conflictMessage"]
    assert data["roomConflicts"] == [] and data["sectionConflicts"] == [] and data["subjectConflicts"] == []
    assert data["professorWorkload"]["isOverloaded"] is False
    first = data["recommendations"][0]
    assert (first["startTime"], first["endTime"]) == ("09:00", "10:30")
    assert first["days"] == ["monday"]
    assert first["validated"] is True


def test_no_conflict(client):
    body = {"new_schedule": schedule(days="tuesday,thursday"), "existing_schedules": [EXISTING]}

    data = client.post("/check_schedule_conflict", json=body).json()

    assert data["conflict"] is False
    assert data["message"] == "No conflicts detected."
    assert "recommendations" not in data


def test_rule_violation_reported_without_engine_conflict(client):
    body = {"new_schedule": schedule(start_time="11:30", end_time="12:30"), "existing_schedules": []}

    data = client.post("/check_schedule_conflict", json=body).json()

    assert data["conflict"] is True
    assert data["ruleViolations"][0].startswith("Lunch Break")


def test_workload_override_per_request(client):
    existing = [schedule(id=i, section_id=100 + i, subj_id=i, room_id=50 + i, days=["friday"]) for i in range(2)]
    body = {"new_schedule": schedule(), "existing_schedules": existing, "max_subjects_per_professor": 2}

    data = client.post("/check_schedule_conflict", json=body).json()

    assert data["professorWorkload"] == {
        "currentLoad": 2,
        "maxLoad": 2,
        "isOverloaded": True,
        "conflictMessage": data["professorWorkload"]["conflictMessage"],
    }
    assert data["conflict"] is True


def test_invalid_interval_is_rejected(client):
    body = {"new_schedule": schedule(start_time="10:00", end_time="09:00"), "existing_schedules": []}

    response = client.post("/check_schedule_conflict", json=body)

    assert response.status_code == 422
    assert response.json()["type"] == "InvalidInterval"


def test_onsite_without_room_is_rejected(client):
    body = {"new_schedule": schedule(room_id=None), "existing_schedules": []}

    response = client.post("/check_schedule_conflict", json=body)

    assert response.status_code == 422
    assert response.json() == {"type": "NoRoomForOnsiteSchedule", "message": "Onsite schedules need a room"}


def test_existing_onsite_row_without_room_is_accepted(client):
    roomless = schedule(id=3, prof_id=7, section_id=8, subj_id=12, room_id=None, days=["friday"])
    body = {"new_schedule": schedule(), "existing_schedules": [roomless]}

    response = client.post("/check_schedule_conflict", json=body)

    assert response.status_code == 200
    assert response.json()["conflict"] is False


def test_existing_required_without_store(client):
    response = client.post("/check_schedule_conflict", json={"new_schedule": schedule()})

    assert response.status_code == 400


def test_recommend_schedule_with_window(client):
    body = {
        "new_schedule": schedule(),
        "existing_schedules": [EXISTING],
        "window_start": "07:30",
        "window_end": "16:30",
    }

    recs = client.post("/recommend_schedule", json=body).json()["recommendations"]

    reasons = [r["reason"] for r in recs]
    assert any("2 hours later" in r for r in reasons)
    assert all(r["endTime"] <= "16:30" for r in recs)


def test_recommend_degenerate_window(client):
    body = {"new_schedule": schedule(), "existing_schedules": [EXISTING],
            "window_start": "10:00", "window_end": "10:00"}

    assert client.post("/recommend_schedule", json=body).json() == {"recommendations": []}


def test_available_time_slots(client):
    body = {"new_schedule": schedule(), "existing_schedules": [EXISTING], "limit": 3}

    data = client.post("/available_time_slots", json=body).json()

    assert data["total_slots"] == 3
    assert [s["start_time"] for s in data["available_slots"]["monday"]] == ["09:00", "09:10", "09:20"]


def test_alternative_professors(client):
    busy = schedule(id=7, prof_id=4, section_id=8, subj_id=11, room_id=6)
    body = {
        "new_schedule": schedule(),
        "existing_schedules": [EXISTING, busy],
        "candidates": [{"id": 4, "name": "Busy"}, {"id": 5, "name": "Free"}],
    }

    data = client.post("/alternative_professors", json=body).json()

    assert data == {"alternativeProfessors": [{"id": "5", "name": "Free", "currentLoad": 0}]}


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise api_client.requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.payload


def test_existing_loaded_from_store(monkeypatch):
    calls = []
    row = {"sched_id": 1, "prof_id": 1, "section": 1, "subject_id": 10, "room_id": 5,
           "schedule_type": "Onsite", "days": '["monday"]', "start_time": "07:30:00", "end_time": "09:00:00"}

    def fake_get(url, params=None, timeout=None):
        calls.append((url, params))
        return FakeResponse({"success": True, "data": [row]})

    monkeypatch.setattr(api_client.requests, "get", fake_get)
    app.dependency_overrides[get_settings] = lambda: Settings(store_url="http://store.test/api/")
    try:
        data = TestClient(app).post("/check_schedule_conflict", json={"new_schedule": schedule()}).json()
    finally:
        app.dependency_overrides.clear()

    assert calls == [("http://store.test/api/schedule.php", {"school_year": "2025", "semester": "1"})]
    assert len(data["professorConflicts"]) == 1


def test_store_failure_is_bad_gateway(monkeypatch):
    monkeypatch.setattr(api_client.requests, "get", lambda *a, **kw: FakeResponse({}, status=500))
    app.dependency_overrides[get_settings] = lambda: Settings(store_url="http://store.test")
    try:
        response = TestClient(app).post("/check_schedule_conflict", json={"new_schedule": schedule()})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 502
    assert response.json()["type"] == "ScheduleStoreError"


def store_returning(monkeypatch, rows):
    monkeypatch.setattr(api_client.requests, "get",
                        lambda *a, **kw: FakeResponse({"success": True, "data": rows}))
    app.dependency_overrides[get_settings] = lambda: Settings(store_url="http://store.test")


def test_stored_onsite_row_without_room_is_accepted(monkeypatch):
    row = {"id": 3, "prof_id": 7, "section_id": 8, "subj_id": 12, "room_id": None,
           "schedule_type": "Onsite", "days": '["monday"]', "start_time": "08:00:00", "end_time": "09:30:00"}
    store_returning(monkeypatch, [row])
    try:
        response = TestClient(app).post("/check_schedule_conflict", json={"new_schedule": schedule()})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    assert response.json()["roomConflicts"] == []


@pytest.mark.parametrize("bad", [
    {"prof_id": None},
    {"start_time": "25:00:00"},
    {"days": '["monday",'},
])
def test_unreadable_stored_row_is_bad_gateway(monkeypatch, bad):
    row = {"id": 3, "prof_id": 7, "section_id": 8, "subj_id": 12, "room_id": 4,
           "days": '["monday"]', "start_time": "08:00:00", "end_time": "09:30:00"}
    row.update(bad)
    store_returning(monkeypatch, [row])
    try:
        response = TestClient(app).post("/check_schedule_conflict", json={"new_schedule": schedule()})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 502
    assert response.json()["type"] == "ScheduleStoreError"
