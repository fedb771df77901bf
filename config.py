import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()  # pulls variables from .env


def _database_uri():
    if os.getenv('DATABASE_URL'):
        return os.getenv('DATABASE_URL')

    if not Config.DB_HOST:
        return "sqlite:///hirelane.db"

    # Build MySQL connection string (using PyMySQL driver)
    return (
        f"mysql+pymysql://{Config.DB_USER}@{Config.DB_HOST}/{Config.DB_NAME}"
        if not Config.DB_PASSWORD else
        f"mysql+pymysql://{Config.DB_USER}:{Config.DB_PASSWORD}@{Config.DB_HOST}/{Config.DB_NAME}"
    )


class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-change-me')
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', SECRET_KEY)
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=3)

    DB_HOST = os.getenv('DB_HOST')
    DB_USER = os.getenv('DB_USER')
    DB_PASSWORD = os.getenv('DB_PASSWORD')
    DB_NAME = os.getenv('DB_NAME', 'hirelane')

    SQLALCHEMY_TRACK_MODIFICATIONS = False  # disables overhead warning

    CORS_ORIGINS = os.getenv('CORS_ORIGINS', 'http://localhost:3000').split(',')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # comma separated; empty means the built-in vocabulary
    SCREENING_KEYWORDS = [
        kw.strip() for kw in os.getenv('SCREENING_KEYWORDS', '').split(',') if kw.strip()
    ]

    CANDIDATE_SESSION_COOKIE = 'candidate_session'
    CANDIDATE_SESSION_MAX_AGE = 60 * 60 * 24 * 30  # 30 days
    SESSION_COOKIE_SECURE = os.getenv('FLASK_ENV') == 'production'

    CREATE_DATABASE = True


Config.SQLALCHEMY_DATABASE_URI = _database_uri()


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret'
    JWT_SECRET_KEY = 'test-jwt-secret-with-enough-length-for-hs256'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SCREENING_KEYWORDS = []
    SESSION_COOKIE_SECURE = False
    CREATE_DATABASE = False
    BCRYPT_LOG_ROUNDS = 4
