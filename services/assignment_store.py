# services/assignment_store.py
"""
Data access for the `assignments` table.

Public API:
  - ensure_schema()
  - create_assignment(bus_id, staff_id, role, start_date, end_date=None) -> Assignment
  - get_assignment(assignment_id) -> Assignment | None
  - list_assignments() -> list[Assignment]
  - list_assignments_for_bus(bus_id, status=None) -> list[Assignment]
  - list_assignments_for_staff(staff_id) -> list[Assignment]
  - update_assignment(assignment_id, ...) -> Assignment | None
  - delete_assignment(assignment_id) -> bool

Lists are newest first (created_at DESC, id DESC).
"Not found" is None/False, never an exception; every driver failure
(constraint violation, lost connection, out-of-range parameter, ...) surfaces
as StoreError.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from db import db
from models.assignment import Assignment, STATUS_ACTIVE, _utcnow


class StoreError(Exception):
    """The datastore rejected or failed a statement."""


class StartupError(RuntimeError):
    """The service cannot start: no database configured or it is unreachable."""


def _fail(what: str, exc: Exception) -> StoreError:
    db.session.rollback()
    current_app.logger.exception("[store] %s failed", what)
    return StoreError(f"{what} failed: {exc.__class__.__name__}")


def _newest_first(query):
    return query.order_by(Assignment.created_at.desc(), Assignment.id.desc())


# ---------- schema ----------

def ensure_schema() -> None:
    """Create the table, its unique constraint and indexes if they don't exist."""
    try:
        db.create_all()
    except SQLAlchemyError as e:
        current_app.logger.error("[store] cannot reach database: %s", e)
        raise StartupError("database unreachable") from e
    current_app.logger.info("[store] assignments table ready")


# ---------- writes ----------

def create_assignment(
    bus_id: int,
    staff_id: int,
    role: str,
    start_date: date,
    end_date: Optional[date] = None,
) -> Assignment:
    a = Assignment(
        bus_id=bus_id,
        staff_id=staff_id,
        role=role,
        start_date=start_date,
        end_date=end_date,
        status=STATUS_ACTIVE,
    )
    try:
        db.session.add(a)
        db.session.commit()
        db.session.refresh(a)
    except (SQLAlchemyError, OverflowError) as e:
        raise _fail("create_assignment", e) from e
    return a


def update_assignment(
    assignment_id: int,
    bus_id: int,
    staff_id: int,
    role: str,
    start_date: date,
    end_date: Optional[date] = None,
) -> Optional[Assignment]:
    """
    Overwrite the mutable fields of one row. Status is left untouched.
    Returns None when no row has that id.
    """
    try:
        matched = (
            Assignment.query
            .filter(Assignment.id == assignment_id)
            .update(
                {
                    Assignment.bus_id: bus_id,
                    Assignment.staff_id: staff_id,
                    Assignment.role: role,
                    Assignment.start_date: start_date,
                    Assignment.end_date: end_date,
                    Assignment.updated_at: _utcnow(),
                },
                synchronize_session=False,
            )
        )
        if not matched:
            db.session.rollback()
            return None
        db.session.commit()
    except (SQLAlchemyError, OverflowError) as e:
        raise _fail("update_assignment", e) from e
    return get_assignment(assignment_id)


def delete_assignment(assignment_id: int) -> bool:
    try:
        removed = (
            Assignment.query
            .filter(Assignment.id == assignment_id)
            .delete(synchronize_session=False)
        )
        db.session.commit()
    except (SQLAlchemyError, OverflowError) as e:
        raise _fail("delete_assignment", e) from e
    return bool(removed)


# ---------- reads ----------

def get_assignment(assignment_id: int) -> Optional[Assignment]:
    try:
        return db.session.get(Assignment, assignment_id)
    except (SQLAlchemyError, OverflowError) as e:
        raise _fail("get_assignment", e) from e


def list_assignments() -> List[Assignment]:
    try:
        return _newest_first(Assignment.query).all()
    except (SQLAlchemyError, OverflowError) as e:
        raise _fail("list_assignments", e) from e


def list_assignments_for_bus(bus_id: int, status: Optional[str] = None) -> List[Assignment]:
    q = Assignment.query.filter(Assignment.bus_id == bus_id)
    if status:
        q = q.filter(Assignment.status == status)
    try:
        return _newest_first(q).all()
    except (SQLAlchemyError, OverflowError) as e:
        raise _fail("list_assignments_for_bus", e) from e


def list_assignments_for_staff(staff_id: int) -> List[Assignment]:
    try:
        return _newest_first(Assignment.query.filter(Assignment.staff_id == staff_id)).all()
    except (SQLAlchemyError, OverflowError) as e:
        raise _fail("list_assignments_for_staff", e) from e
