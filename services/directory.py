# services/directory.py
"""
Bus and staff details used to decorate assignment records.

A lookup is any callable `id -> dict | None`. The bus and staff services are
not wired in yet, so the app ships with StaticDirectory instances built from
the tables below; an HTTP-backed client can be passed to create_app() instead.
"""

from __future__ import annotations

from typing import Callable, Dict, Mapping, Optional

Lookup = Callable[[int], Optional[Dict[str, str]]]

MOCK_BUSES: Dict[int, Dict[str, str]] = {
    1: {"plate_number": "ABC-1234", "model": "Toyota Coaster"},
    2: {"plate_number": "XYZ-5678", "model": "Isuzu NPR"},
}

MOCK_STAFF: Dict[int, Dict[str, str]] = {
    1: {"name": "John Driver", "position": "driver"},
    2: {"name": "Jane Conductor", "position": "conductor"},
}


class StaticDirectory:
    """Read-only id -> attributes table. Never mutated after construction."""

    def __init__(self, rows: Mapping[int, Mapping[str, str]]):
        self._rows = {int(k): dict(v) for k, v in rows.items()}

    def __call__(self, key: int) -> Optional[Dict[str, str]]:
        row = self._rows.get(key)
        return dict(row) if row is not None else None


def default_bus_lookup() -> StaticDirectory:
    return StaticDirectory(MOCK_BUSES)

def default_staff_lookup() -> StaticDirectory:
    return StaticDirectory(MOCK_STAFF)


def _merge(record: dict, details: Optional[Mapping[str, str]], fields: Mapping[str, str]) -> dict:
    if not details:
        return record
    for src, dst in fields.items():
        val = details.get(src)
        if val:
            record[dst] = val
    return record

def with_bus_details(record: dict, lookup: Lookup) -> dict:
    """Add bus_plate_number / bus_model when the bus is known; otherwise leave them out."""
    return _merge(record, lookup(record["bus_id"]),
                  {"plate_number": "bus_plate_number", "model": "bus_model"})

def with_staff_details(record: dict, lookup: Lookup) -> dict:
    """Add staff_name / staff_position when the staff member is known; otherwise leave them out."""
    return _merge(record, lookup(record["staff_id"]),
                  {"name": "staff_name", "position": "staff_position"})
