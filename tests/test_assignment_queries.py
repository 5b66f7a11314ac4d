from __future__ import annotations

from db import db
from models.assignment import Assignment


def _cancel(assignment_id):
    db.session.get(Assignment, assignment_id).status = "cancelled"
    db.session.commit()


def test_bus_query_returns_only_active_with_staff_details(app, client, make_assignment):
    active = make_assignment(bus_id=1, staff_id=2, role="conductor")
    cancelled = make_assignment(bus_id=1, staff_id=1, role="driver")
    _cancel(cancelled["id"])
    make_assignment(bus_id=2, staff_id=1)

    r = client.get("/api/assignments/bus/1")
    assert r.status_code == 200
    data = r.get_json()
    assert data["bus_id"] == 1
    assert data["count"] == len(data["assignments"]) == 1

    row = data["assignments"][0]
    assert row["id"] == active["id"]
    assert row["staff_name"] == "Jane Conductor"
    assert row["staff_position"] == "conductor"
    assert "bus_plate_number" not in row
    assert "bus_model" not in row


def test_bus_query_omits_unknown_staff(client, make_assignment):
    make_assignment(bus_id=1, staff_id=77)
    row = client.get("/api/assignments/bus/1").get_json()["assignments"][0]
    assert "staff_name" not in row
    assert "staff_position" not in row


def test_bus_query_bad_id(client):
    r = client.get("/api/assignments/bus/first")
    assert r.status_code == 400
    assert r.get_json()["error"] == "Invalid bus ID"


def test_staff_query_includes_every_status_with_bus_details(app, client, make_assignment):
    a1 = make_assignment(bus_id=1, staff_id=1)
    a2 = make_assignment(bus_id=2, staff_id=1, start_date="2025-02-01")
    a3 = make_assignment(bus_id=5, staff_id=1, start_date="2025-03-01")
    _cancel(a2["id"])
    make_assignment(bus_id=1, staff_id=2, role="conductor")

    r = client.get("/api/assignments/staff/1")
    assert r.status_code == 200
    data = r.get_json()
    assert data["staff_id"] == 1
    assert data["count"] == len(data["assignments"]) == 3
    assert [row["id"] for row in data["assignments"]] == [a3["id"], a2["id"], a1["id"]]

    by_id = {row["id"]: row for row in data["assignments"]}
    assert by_id[a2["id"]]["status"] == "cancelled"
    assert by_id[a1["id"]]["bus_plate_number"] == "ABC-1234"
    assert by_id[a1["id"]]["bus_model"] == "Toyota Coaster"
    assert by_id[a2["id"]]["bus_plate_number"] == "XYZ-5678"
    assert "bus_plate_number" not in by_id[a3["id"]]
    assert all("staff_name" not in row for row in data["assignments"])


def test_staff_query_bad_id_and_empty(client):
    assert client.get("/api/assignments/staff/x1").status_code == 400
    r = client.get("/api/assignments/staff/3")
    assert r.get_json() == {"staff_id": 3, "assignments": [], "count": 0}
