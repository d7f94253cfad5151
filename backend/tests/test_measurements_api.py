"""
Measurement endpoint tests
"""
from datetime import datetime, timedelta, timezone

from pressure_tracker import db
from pressure_tracker.models import Measurement


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.get_json()
    assert data["status"] == "ok"
    assert data["time"].endswith("Z")


def test_create_returns_serialized_measurement(client):
    response = client.post("/api/measurements", json={
        "systolic": 142, "diastolic": 88, "pulse": 71, "measuredAt": "2026-03-01T07:15:30.250Z",
    })

    assert response.status_code == 201
    assert response.get_json() == {
        "id": 1,
        "systolic": 142,
        "diastolic": 88,
        "pulse": 71,
        "measuredAt": "2026-03-01T07:15:30.250Z",
        "status": "elevated",
    }


def test_create_then_fetch_round_trips(client, add_measurement):
    created = add_measurement(131, 84, pulse=66, measuredAt="2026-03-02T21:05:00+03:00")

    response = client.get(f"/api/measurements/{created['id']}")

    assert response.status_code == 200
    fetched = response.get_json()
    assert fetched == created
    assert fetched["measuredAt"] == "2026-03-02T18:05:00.000Z"


def test_create_defaults_measured_at_to_now(client, add_measurement):
    before = datetime.now(timezone.utc) - timedelta(seconds=1)
    created = add_measurement()
    measured_at = datetime.fromisoformat(created["measuredAt"].replace("Z", "+00:00"))

    assert measured_at >= before
    assert created["pulse"] is None
    assert created["status"] == "prehypertension"


def test_create_with_invalid_fields_returns_all_errors(client):
    response = client.post("/api/measurements", json={
        "systolic": 300, "diastolic": "x", "measuredAt": "yesterday",
    })

    assert response.status_code == 400
    assert response.get_json() == {"errors": [
        "systolic must be between 40 and 260",
        "diastolic must be a number",
        "measuredAt must be a valid date",
    ]}
    assert client.get("/api/measurements").get_json() == []


def test_create_rejects_non_object_body(client):
    response = client.post("/api/measurements", json=[120, 80])
    assert response.status_code == 400
    assert response.get_json() == {"errors": ["Request body must be a JSON object"]}


def test_create_rejects_malformed_json(client):
    response = client.post("/api/measurements", data="{not json", content_type="application/json")
    assert response.status_code == 400
    assert response.get_json() == {"errors": ["Request body must be valid JSON"]}


def test_create_requires_json_content_type(client):
    response = client.post("/api/measurements", data="systolic=120")
    assert response.status_code == 415


def test_get_unknown_id_is_404(client):
    response = client.get("/api/measurements/999")
    assert response.status_code == 404
    assert response.get_json() == {"error": "Not found"}


def test_list_is_most_recent_first(client, add_measurement):
    add_measurement(110, measuredAt="2026-03-01T08:00:00Z")
    add_measurement(130, measuredAt="2026-03-03T08:00:00Z")
    add_measurement(120, measuredAt="2026-03-02T08:00:00Z")

    data = client.get("/api/measurements").get_json()

    assert [m["systolic"] for m in data] == [130, 120, 110]


def test_list_limit_is_clamped(app, client):
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    with app.app_context():
        db.session.add_all(
            Measurement(systolic=120, diastolic=80, measured_at=base + timedelta(minutes=i))
            for i in range(510)
        )
        db.session.commit()

    assert len(client.get("/api/measurements?limit=10000").get_json()) == 500
    assert len(client.get("/api/measurements?limit=5").get_json()) == 5
    assert len(client.get("/api/measurements?limit=abc").get_json()) == 100
    assert len(client.get("/api/measurements").get_json()) == 100


def test_patch_clears_pulse_and_keeps_other_fields(client, add_measurement):
    created = add_measurement(125, 82, pulse=70, measuredAt="2026-03-01T08:00:00Z")

    response = client.patch(f"/api/measurements/{created['id']}", json={"pulse": None})

    assert response.status_code == 200
    assert response.get_json() == {**created, "pulse": None}


def test_patch_updates_status_from_new_values(client, add_measurement):
    created = add_measurement(118, 76)

    response = client.patch(f"/api/measurements/{created['id']}", json={"systolic": "165"})

    assert response.status_code == 200
    data = response.get_json()
    assert data["systolic"] == 165
    assert data["diastolic"] == 76
    assert data["status"] == "high"


def test_patch_without_fields_is_rejected(client, add_measurement):
    created = add_measurement()

    response = client.patch(f"/api/measurements/{created['id']}", json={})

    assert response.status_code == 400
    assert response.get_json() == {"error": "No fields to update"}


def test_patch_with_invalid_field_changes_nothing(client, add_measurement):
    created = add_measurement(120, 80, pulse=60)

    response = client.patch(f"/api/measurements/{created['id']}", json={"systolic": 130, "pulse": 400})

    assert response.status_code == 400
    assert response.get_json() == {"errors": ["pulse must be between 20 and 250"]}
    assert client.get(f"/api/measurements/{created['id']}").get_json() == created


def test_patch_unknown_id_is_404(client):
    response = client.patch("/api/measurements/42", json={"systolic": 120})
    assert response.status_code == 404
    assert response.get_json() == {"error": "Not found"}


def test_delete_then_delete_again(client, add_measurement):
    created = add_measurement()

    first = client.delete(f"/api/measurements/{created['id']}")
    second = client.delete(f"/api/measurements/{created['id']}")

    assert first.status_code == 204
    assert first.data == b""
    assert second.status_code == 404
    assert client.get(f"/api/measurements/{created['id']}").status_code == 404


def test_delete_nonexistent_is_404(client):
    assert client.delete("/api/measurements/7").status_code == 404


def test_export_csv(client, add_measurement):
    add_measurement(185, 95, pulse=80, measuredAt="2026-03-02T08:00:00Z")
    add_measurement(115, 75, measuredAt="2026-03-01T08:00:00Z")

    response = client.get("/api/measurements/export.csv")

    assert response.status_code == 200
    assert response.mimetype == "text/csv"
    assert response.headers["Content-Disposition"].startswith("attachment; filename=measurements_export_")
    lines = response.get_data(as_text=True).splitlines()
    assert lines == [
        "id,measured_at,systolic,diastolic,pulse,status",
        "1,2026-03-02T08:00:00.000Z,185,95,80,danger",
        "2,2026-03-01T08:00:00.000Z,115,75,,normal",
    ]


def test_unknown_route_is_json_404(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert "error" in response.get_json()


def test_huge_integers_are_not_numbers(client, add_measurement):
    created = add_measurement()
    huge = 10 ** 400

    create = client.post("/api/measurements", json={"systolic": huge, "diastolic": 80})
    patch = client.patch(f"/api/measurements/{created['id']}", json={"pulse": huge})

    assert create.status_code == 400
    assert create.get_json() == {"errors": ["systolic must be a number"]}
    assert patch.status_code == 400
    assert patch.get_json() == {"errors": ["pulse must be a number"]}


def test_measured_at_outside_datetime_range_is_rejected(client):
    response = client.post("/api/measurements", json={
        "systolic": 120, "diastolic": 80, "measuredAt": "0001-01-01T00:30:00+01:00",
    })

    assert response.status_code == 400
    assert response.get_json() == {"errors": ["measuredAt must be a valid date"]}
