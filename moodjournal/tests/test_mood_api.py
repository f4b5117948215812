from __future__ import annotations

from datetime import date

import pytest

pytestmark = pytest.mark.integration


def _save(client, headers, **payload):
    payload.setdefault("mood", "Happy")
    return client.post("/api/mood", json=payload, headers=headers)


def test_create_then_update(client, auth_headers):
    resp = _save(client, auth_headers, entry_date="2026-05-20", intensity=7, notes="sunny")
    assert resp.status_code == 201
    body = resp.get_json()
    assert (body["year"], body["month"]) == (2026, 5)
    entry_id = body["id"]

    resp = _save(client, auth_headers, id=entry_id, entry_date="2026-05-20", mood="Calm", intensity="")
    assert resp.status_code == 200
    entry = resp.get_json()["entry"]
    assert entry["id"] == entry_id
    assert entry["mood"] == "Calm"
    assert entry["intensity"] is None


@pytest.mark.parametrize(
    "payload",
    [
        {"mood": ""},
        {"mood": "   "},
        {"mood": "Happy", "intensity": 11},
        {"mood": "Happy", "notes": "n" * 501},
    ],
)
def test_validation_errors(client, auth_headers, payload):
    resp = client.post("/api/mood", json=payload, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "validation_error"


def test_update_unknown_id_is_404(client, auth_headers):
    resp = _save(client, auth_headers, id=999)
    assert resp.status_code == 404


def test_form_loads_existing_entry_for_date(client, auth_headers):
    entry_id = _save(client, auth_headers, entry_date="2026-05-20", mood="Anxious").get_json()["id"]

    resp = client.get("/api/mood/new?date=2026-05-20", headers=auth_headers)
    body = resp.get_json()
    assert body["entry"]["id"] == entry_id
    assert "Energetic" in body["palette"]

    resp = client.get("/api/mood/new?date=2026-05-21", headers=auth_headers)
    assert resp.get_json()["entry"] == {
        "id": None,
        "entry_date": "2026-05-21",
        "mood": "",
        "notes": None,
        "intensity": None,
    }


def test_calendar_month(client, auth_headers):
    _save(client, auth_headers, entry_date="2026-05-02", mood="Sad")
    _save(client, auth_headers, entry_date="2026-05-02", mood="Excited")

    resp = client.get("/api/mood?year=2026&month=5", headers=auth_headers)
    body = resp.get_json()
    assert body["month_name"] == "May 2026"
    assert len(body["entries"]) == 2
    assert body["moods_by_date"] == {"2026-05-02": "Excited"}


def test_delete_and_isolation(app, client, auth_headers, other_headers):
    entry_id = _save(client, auth_headers).get_json()["id"]
    intruder = app.test_client()

    resp = intruder.delete(f"/api/mood/{entry_id}", headers=other_headers)
    assert resp.get_json() == {"ok": True, "deleted": False}
    resp = intruder.post("/api/mood", json={"id": entry_id, "mood": "Sad"}, headers=other_headers)
    assert resp.status_code == 404

    resp = client.delete(f"/api/mood/{entry_id}", headers=auth_headers)
    assert resp.get_json() == {"ok": True, "deleted": True}


def test_statistics_endpoint(client, auth_headers):
    today = date.today().isoformat()
    _save(client, auth_headers, entry_date=today, mood="Happy", intensity=4)
    _save(client, auth_headers, entry_date=today, mood="Happy", intensity=7)

    resp = client.get("/api/mood/statistics?window_days=7", headers=auth_headers)
    body = resp.get_json()
    assert body["window_days"] == 7
    assert body["total_entries"] == 2
    assert body["mood_counts"] == [{"mood": "Happy", "count": 2}]
    assert body["average_intensity"] == 5.5

    assert client.get("/api/mood/statistics?window_days=0", headers=auth_headers).status_code == 400
