# models/assignment.py
from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy.sql import func

from db import db

ROLES = ("driver", "conductor")
STATUSES = ("active", "completed", "cancelled")
STATUS_ACTIVE = "active"

# bounds of the INTEGER id columns
INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

def _one_of(column: str, values) -> str:
    return f"{column} IN (" + ", ".join(f"'{v}'" for v in values) + ")"

def _to_utc_iso(dt):
    if not dt:
        return None
    # SQLite hands back naive values; they were written as UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat()


class Assignment(db.Model):
    """A staff member (driver or conductor) assigned to a bus for a date range."""
    __tablename__ = "assignments"

    id         = db.Column(db.Integer, primary_key=True)
    bus_id     = db.Column(db.Integer, nullable=False, index=True)
    staff_id   = db.Column(db.Integer, nullable=False, index=True)
    role       = db.Column(db.String(20), nullable=False)
    start_date = db.Column(db.Date, nullable=False, index=True)
    end_date   = db.Column(db.Date, nullable=True)
    status     = db.Column(db.String(20), nullable=False, default=STATUS_ACTIVE,
                           server_default=STATUS_ACTIVE, index=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False,
                           default=_utcnow, server_default=func.now())
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False,
                           default=_utcnow, onupdate=_utcnow, server_default=func.now())

    __table_args__ = (
        db.UniqueConstraint("bus_id", "staff_id", "role", "start_date", name="uq_assignment_bus_staff_role_start"),
        db.CheckConstraint(_one_of("role", ROLES), name="ck_assignment_role"),
        db.CheckConstraint(_one_of("status", STATUSES), name="ck_assignment_status"),
    )

    def to_dict(self) -> dict:
        out = {
            "id": self.id,
            "bus_id": self.bus_id,
            "staff_id": self.staff_id,
            "role": self.role,
            "start_date": self.start_date.isoformat(),
        }
        if self.end_date is not None:
            out["end_date"] = self.end_date.isoformat()
        out.update(
            status=self.status,
            created_at=_to_utc_iso(self.created_at),
            updated_at=_to_utc_iso(self.updated_at),
        )
        return out

    def __repr__(self) -> str:
        return f"<Assignment {self.id} bus={self.bus_id} staff={self.staff_id} {self.role}/{self.status}>"
