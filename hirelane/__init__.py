from flask import Flask
from config import Config
from pymysql import connect
from .extensions import *
from .models import *
from .errors import register_error_handlers
from .logger import configure as configure_logging, get_logger
from .routes.auth_routes import auth_bp
from .routes.job_routes import job_bp
from .routes.application_routes import application_bp
from .routes.team_routes import team_bp
from .routes.apply_routes import apply_bp
from .routes.portal_routes import portal_bp
from .routes.health_routes import health_bp
from hirelane.database.seed.seed_all import seed_all

log = get_logger(__name__)


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    # the browser front-end needs the candidate session cookie
    cors.init_app(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
                  supports_credentials=True)

    if app.config.get("CREATE_DATABASE") and app.config["SQLALCHEMY_DATABASE_URI"].startswith("mysql"):
        create_database_if_not_exists(config_class)

    # extensions initialization
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    bcrypt.init_app(app)

    register_error_handlers(app)

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(job_bp, url_prefix="/api/dashboard/jobs")
    app.register_blueprint(application_bp, url_prefix="/api/dashboard/applications")
    app.register_blueprint(team_bp, url_prefix="/api/dashboard/team")
    app.register_blueprint(apply_bp, url_prefix="/api/apply")
    app.register_blueprint(portal_bp, url_prefix="/api/portal")
    app.register_blueprint(health_bp, url_prefix="/api")

    app.cli.add_command(seed_all)

    return app


def create_database_if_not_exists(config_class=Config):
    host_parts = config_class.DB_HOST.split(":")
    host = host_parts[0]
    port = int(host_parts[1]) if len(host_parts) > 1 else 3306

    log.info("Ensuring database '%s' exists on %s:%s as '%s'",
             config_class.DB_NAME, host, port, config_class.DB_USER)

    conn = connect(
        host=host,
        port=port,
        user=config_class.DB_USER,
        password=config_class.DB_PASSWORD or ""
    )
    try:
        with conn.cursor() as cursor:
            cursor.execute(f"CREATE DATABASE IF NOT EXISTS `{config_class.DB_NAME}`")
        conn.commit()
    finally:
        conn.close()
