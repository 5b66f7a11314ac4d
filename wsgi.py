# wsgi.py
import logging
import sys

from app import create_app
from services.assignment_store import StartupError

try:
    app = create_app()
except StartupError as e:
    # No degraded mode: refuse to boot without a reachable database
    logging.getLogger("wsgi").critical("Failed to start: %s", e)
    sys.exit(1)

# Local dev only: `python wsgi.py`
if __name__ == "__main__":
    app.run(host=app.config["HOST"], port=app.config["PORT"])
