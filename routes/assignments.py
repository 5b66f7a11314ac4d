# routes/assignments.py
from __future__ import annotations

import re
from datetime import date, datetime as _dt

from flask import Blueprint, request, jsonify, current_app

from models.assignment import INT_MAX, INT_MIN, ROLES, STATUS_ACTIVE
from services import assignment_store as store
from services.assignment_store import StoreError
from services.directory import with_bus_details, with_staff_details

assignments_bp = Blueprint("assignments", __name__, url_prefix="/api/assignments")

_INT_RE = re.compile(r"[+-]?\d+")
_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


class InvalidInput(ValueError):
    """Client input that fails validation; the message goes back to the caller."""


# ---------- small utils ----------

def _path_int(raw: str, label: str) -> int:
    raw = (raw or "").strip()
    if not _INT_RE.fullmatch(raw):
        raise InvalidInput(f"Invalid {label} ID")
    val = int(raw)
    if not INT_MIN <= val <= INT_MAX:
        raise InvalidInput(f"Invalid {label} ID")
    return val

def _parse_day(raw, field: str) -> date:
    msg = f"Invalid {field} format. Use YYYY-MM-DD"
    if not isinstance(raw, str) or not _DATE_RE.fullmatch(raw):
        raise InvalidInput(msg)
    try:
        return _dt.strptime(raw, "%Y-%m-%d").date()
    except ValueError:
        raise InvalidInput(msg)

def _required_id(data: dict, field: str) -> int:
    val = data.get(field)
    # bool is an int subclass; `true` is not an id
    if isinstance(val, bool) or not isinstance(val, int):
        if val is None:
            raise InvalidInput(f"{field} is required")
        raise InvalidInput(f"{field} must be an integer")
    if not INT_MIN <= val <= INT_MAX:
        raise InvalidInput(f"{field} must be an integer")
    if val == 0:
        raise InvalidInput(f"{field} is required")
    return val

def _assignment_payload() -> dict:
    """
    Validate a create/update body:
      { "bus_id": <int>, "staff_id": <int>, "role": "driver|conductor",
        "start_date": "YYYY-MM-DD", "end_date": "YYYY-MM-DD" (optional) }
    """
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        raise InvalidInput("Request body must be a JSON object")

    bus_id = _required_id(data, "bus_id")
    staff_id = _required_id(data, "staff_id")

    role = data.get("role")
    if not isinstance(role, str) or not role:
        raise InvalidInput("role is required")
    start_raw = data.get("start_date")
    if not isinstance(start_raw, str) or not start_raw.strip():
        raise InvalidInput("start_date is required")

    start_date = _parse_day(start_raw, "start_date")
    end_raw = data.get("end_date")
    end_date = _parse_day(end_raw, "end_date") if end_raw not in (None, "") else None

    if role not in ROLES:
        raise InvalidInput("Role must be 'driver' or 'conductor'")

    return dict(bus_id=bus_id, staff_id=staff_id, role=role,
                start_date=start_date, end_date=end_date)

def _lookups():
    d = current_app.extensions["directory"]
    return d["bus"], d["staff"]


@assignments_bp.errorhandler(InvalidInput)
def _bad_request(e: InvalidInput):
    current_app.logger.info("[assignments] %s %s rejected: %s", request.method, request.path, e)
    return jsonify(error=str(e)), 400


# ──────────────── CRUD ────────────────
@assignments_bp.route("", methods=["POST"])
def create_assignment():
    payload = _assignment_payload()
    current_app.logger.debug("[assignments][POST] payload=%s", payload)
    try:
        a = store.create_assignment(**payload)
    except StoreError:
        return jsonify(error="Failed to create assignment"), 500

    current_app.logger.info(
        "[assignments][POST] created id=%s bus_id=%s staff_id=%s role=%s",
        a.id, a.bus_id, a.staff_id, a.role,
    )
    return jsonify(a.to_dict()), 201


@assignments_bp.route("", methods=["GET"])
def list_assignments():
    try:
        rows = store.list_assignments()
    except StoreError:
        return jsonify(error="Failed to retrieve assignments"), 500

    bus_lookup, staff_lookup = _lookups()
    out = [with_staff_details(with_bus_details(a.to_dict(), bus_lookup), staff_lookup) for a in rows]
    current_app.logger.debug("[assignments][GET] rows=%d", len(out))
    return jsonify(assignments=out, count=len(out)), 200


@assignments_bp.route("/<assignment_id>", methods=["GET"])
def get_assignment(assignment_id):
    aid = _path_int(assignment_id, "assignment")
    try:
        a = store.get_assignment(aid)
    except StoreError:
        return jsonify(error="Database error"), 500
    if a is None:
        return jsonify(error="Assignment not found"), 404
    return jsonify(a.to_dict()), 200


@assignments_bp.route("/<assignment_id>", methods=["PUT"])
def update_assignment(assignment_id):
    """
    Full overwrite of bus_id, staff_id, role, start_date and end_date.
    Status is never changed here.
    """
    aid = _path_int(assignment_id, "assignment")
    payload = _assignment_payload()
    try:
        a = store.update_assignment(aid, **payload)
    except StoreError:
        return jsonify(error="Failed to update assignment"), 500
    if a is None:
        return jsonify(error="Assignment not found"), 404

    current_app.logger.info("[assignments][PUT] updated id=%s", aid)
    return jsonify(a.to_dict()), 200


@assignments_bp.route("/<assignment_id>", methods=["DELETE"])
def delete_assignment(assignment_id):
    aid = _path_int(assignment_id, "assignment")
    try:
        removed = store.delete_assignment(aid)
    except StoreError:
        return jsonify(error="Failed to delete assignment"), 500
    if not removed:
        return jsonify(error="Assignment not found"), 404

    current_app.logger.info("[assignments][DELETE] removed id=%s", aid)
    return jsonify(message="Assignment deleted successfully"), 200


# ──────────────── Queries ────────────────
@assignments_bp.route("/bus/<bus_id>", methods=["GET"])
def staff_for_bus(bus_id):
    """Active assignments on one bus, decorated with staff details."""
    bid = _path_int(bus_id, "bus")
    try:
        rows = store.list_assignments_for_bus(bid, status=STATUS_ACTIVE)
    except StoreError:
        return jsonify(error="Failed to retrieve assignments"), 500

    _, staff_lookup = _lookups()
    out = [with_staff_details(a.to_dict(), staff_lookup) for a in rows]
    return jsonify(bus_id=bid, assignments=out, count=len(out)), 200


@assignments_bp.route("/staff/<staff_id>", methods=["GET"])
def assignments_for_staff(staff_id):
    sid = _path_int(staff_id, "staff")
    try:
        rows = store.list_assignments_for_staff(sid)
    except StoreError:
        return jsonify(error="Failed to retrieve assignments"), 500

    bus_lookup, _ = _lookups()
    out = [with_bus_details(a.to_dict(), bus_lookup) for a in rows]
    return jsonify(staff_id=sid, assignments=out, count=len(out)), 200
