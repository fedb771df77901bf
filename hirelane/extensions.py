"""Flask extensions, created unbound and initialised in ``create_app``."""
from flask_bcrypt import Bcrypt
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

__all__ = ["bcrypt", "cors", "db", "jwt", "migrate"]

# persistence: tenant-scoped models plus alembic migrations
db = SQLAlchemy()
migrate = Migrate()

# recruiter and applicant identity tokens; passwords are bcrypt hashed
jwt = JWTManager()
bcrypt = Bcrypt()

# the dashboard and portal front-ends run on another origin
cors = CORS()
