# backend/db.py
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate

# one shared instance for the whole app
db = SQLAlchemy()
migrate = Migrate()
