# backend/config.py
import os

from dotenv import load_dotenv

# Load .env in local/dev; on the platform the variables come from the environment
load_dotenv()


def _to_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "on"}

def _to_int(val: str | None, default: int) -> int:
    try:
        return int(val) if val is not None else default
    except ValueError:
        return default

def _database_url(val: str | None) -> str | None:
    """SQLAlchemy only accepts the `postgresql://` scheme; Supabase hands out `postgres://`."""
    if not val:
        return None
    val = val.strip()
    if val.startswith("postgres://"):
        val = "postgresql://" + val[len("postgres://"):]
    return val


class Config:
    # ── Core ─────────────────────────────────────────────────────────────────
    SERVICE_NAME = "bus-staff-assignment"
    SERVICE_MODE = (os.environ.get("SERVICE_MODE") or "debug").strip().lower()  # debug | release
    DEBUG = _to_bool(os.environ.get("FLASK_DEBUG"), SERVICE_MODE != "release")
    HOST = os.environ.get("HOST", "0.0.0.0")
    PORT = _to_int(os.environ.get("PORT"), 8082)

    # ── Database ────────────────────────────────────────────────────────────
    SQLALCHEMY_DATABASE_URI = _database_url(os.environ.get("DATABASE_URL"))
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
        "pool_recycle": 180,
        "pool_size": _to_int(os.environ.get("DB_POOL_SIZE"), 5),
        "max_overflow": _to_int(os.environ.get("DB_MAX_OVERFLOW"), 10),
        "pool_timeout": _to_int(os.environ.get("DB_POOL_TIMEOUT"), 30),
        "connect_args": {
            "connect_timeout": _to_int(os.environ.get("DB_CONNECT_TIMEOUT"), 10),
        },
    }

    # ── Sibling services (placeholders, lookups are still static) ───────────
    BUS_SERVICE_URL = os.environ.get("BUS_SERVICE_URL", "http://localhost:8080")
    STAFF_SERVICE_URL = os.environ.get("STAFF_SERVICE_URL", "http://localhost:8081")


class TestingConfig(Config):
    __test__ = False  # keep pytest from collecting it
    DEBUG = True
    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.environ.get("TEST_DATABASE_URL", "sqlite:///:memory:")
    # SQLite in-memory runs on a static pool; the pool sizing knobs don't apply
    SQLALCHEMY_ENGINE_OPTIONS = {}
