from __future__ import annotations
import pytest

from app import create_app
from config import TestingConfig
from services.assignment_store import StartupError


def test_health_ok(client):
    rv = client.get("/health")
    assert rv.status_code == 200
    assert rv.get_json() == {"status": "ok", "service": "bus-staff-assignment"}


def test_cors_allows_any_origin(client):
    rv = client.get("/health", headers={"Origin": "http://dashboard.example"})
    assert rv.headers.get("Access-Control-Allow-Origin") in ("*", "http://dashboard.example")

    pre = client.options(
        "/api/assignments",
        headers={
            "Origin": "http://dashboard.example",
            "Access-Control-Request-Method": "PUT",
        },
    )
    assert pre.status_code in (200, 204)
    assert pre.headers.get("Access-Control-Allow-Origin") in ("*", "http://dashboard.example")


def test_unknown_route_is_json_404(client):
    rv = client.get("/nope")
    assert rv.status_code == 404
    assert rv.get_json()["error"] == "Not Found"


def test_wrong_method_is_json_405(client):
    rv = client.patch("/api/assignments/1", json={})
    assert rv.status_code == 405
    assert "error" in rv.get_json()


def test_missing_database_url_aborts_startup():
    class NoDatabase(TestingConfig):
        SQLALCHEMY_DATABASE_URI = None

    with pytest.raises(StartupError):
        create_app(NoDatabase)


def test_unreachable_database_aborts_startup(tmp_path):
    class BadPath(TestingConfig):
        # parent directory doesn't exist, sqlite can't open the file
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'missing' / 'db.sqlite'}"

    with pytest.raises(StartupError):
        create_app(BadPath)


def test_database_url_scheme_is_normalized():
    from config import _database_url

    assert _database_url("postgres://u:p@db:5432/x") == "postgresql://u:p@db:5432/x"
    assert _database_url("mysql+pymysql://u:p@db/x") == "mysql+pymysql://u:p@db/x"
    assert _database_url("") is None
    assert _database_url(None) is None
