from __future__ import annotations
import pytest

from app import create_app
from config import TestingConfig
from db import db


@pytest.fixture()
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    with app.test_client() as c:
        yield c


@pytest.fixture()
def make_assignment(client):
    def _make(**overrides):
        body = {"bus_id": 1, "staff_id": 1, "role": "driver", "start_date": "2025-01-06"}
        body.update(overrides)
        r = client.post("/api/assignments", json=body)
        assert r.status_code == 201, r.get_json()
        return r.get_json()
    return _make
