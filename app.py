# backend/app.py
from __future__ import annotations

import logging
import sys

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix
from flask_cors import CORS

from config import Config
from db import db, migrate

# Ensure models are imported so create_all / Flask-Migrate see them
from models.assignment import Assignment

# Blueprints
from routes.assignments import assignments_bp

from services.assignment_store import StartupError, ensure_schema
from services.directory import Lookup, default_bus_lookup, default_staff_lookup


def _configure_logging(app: Flask) -> None:
    level = logging.DEBUG if app.config.get("SERVICE_MODE") != "release" else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s: %(message)s")
    app.logger.setLevel(level)


def create_app(
    config_object=None,
    *,
    bus_lookup: Lookup | None = None,
    staff_lookup: Lookup | None = None,
) -> Flask:
    app = Flask(__name__)

    # Respect reverse proxy headers (scheme / host)
    app.wsgi_app = ProxyFix(app.wsgi_app, x_proto=1, x_host=1)  # type: ignore[arg-type]

    # Load config
    app.config.from_object(config_object or Config)
    _configure_logging(app)

    if not app.config.get("SQLALCHEMY_DATABASE_URI"):
        app.logger.error("[app] DATABASE_URL environment variable is required")
        raise StartupError("DATABASE_URL environment variable is required")

    # CORS (wide open; auth lives in front of this service)
    CORS(app, resources={r"/*": {"origins": "*"}}, send_wildcard=True)

    db.init_app(app)
    migrate.init_app(app, db)

    # Bus / staff details: static tables until the sibling services are wired in
    app.extensions["directory"] = {
        "bus": bus_lookup if bus_lookup is not None else default_bus_lookup(),
        "staff": staff_lookup if staff_lookup is not None else default_staff_lookup(),
    }

    with app.app_context():
        _ = Assignment  # registered on db.metadata
        ensure_schema()

    # Health check
    @app.route("/health")
    def health_check():
        return jsonify(status="ok", service=app.config["SERVICE_NAME"]), 200

    @app.errorhandler(404)
    def handle_404(e):
        return jsonify(error="Not Found", path=request.path), 404

    # Global error handler
    @app.errorhandler(Exception)
    def handle_any_error(e: Exception):
        if isinstance(e, HTTPException):
            return jsonify(error=e.description), e.code
        app.logger.exception("[app] unhandled error on %s %s", request.method, request.path)
        return jsonify(error="Internal server error"), 500

    app.register_blueprint(assignments_bp)

    # CLI: create the table and indexes without starting the server
    @app.cli.command("init-db")
    def init_db_cmd():
        ensure_schema()
        print("Assignments table ready.")

    app.logger.info(
        "[app] %s ready (mode=%s, bus_service=%s, staff_service=%s)",
        app.config["SERVICE_NAME"], app.config.get("SERVICE_MODE"),
        app.config.get("BUS_SERVICE_URL"), app.config.get("STAFF_SERVICE_URL"),
    )
    return app


# Optional local entrypoint (useful for quick dev runs)
if __name__ == "__main__":
    try:
        app = create_app()
    except StartupError as e:
        logging.getLogger(__name__).critical("Failed to start: %s", e)
        sys.exit(1)
    app.logger.info("Bus Staff Assignment Service starting on port %s", app.config["PORT"])
    app.run(
        host=app.config["HOST"],
        port=app.config["PORT"],
        debug=app.config["DEBUG"],
    )
