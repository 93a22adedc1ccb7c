"""
Project: Tableside
Description:
Application configuration. Values come from the environment (a local .env
file is loaded first) and are applied with app.config.from_object().
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-change-me")
    PORT = int(os.environ.get("PORT", 3001))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # "memory" keeps everything in process, "sql" stores documents through Flask-SQLAlchemy
    STORE_BACKEND = os.environ.get("STORE_BACKEND", "memory")
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///tableside.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SEED_MOCK_DATA = _env_bool("SEED_MOCK_DATA", True)

    TAX_RATE = float(os.environ.get("TAX_RATE", 0.18))
    DEFAULT_TIP_RATE = float(os.environ.get("DEFAULT_TIP_RATE", 0.20))
    STRICT_STATUS_TRANSITIONS = _env_bool("STRICT_STATUS_TRANSITIONS", True)

    SOCKETIO_ASYNC_MODE = os.environ.get("SOCKETIO_ASYNC_MODE") or None
    TOKEN_MAX_AGE = int(os.environ.get("TOKEN_MAX_AGE", 60 * 60 * 12))

    # Used by the Python client (api_client / notifications)
    TABLESIDE_API_URL = os.environ.get("TABLESIDE_API_URL", "http://localhost:3001")
    TABLESIDE_WS_URL = os.environ.get("TABLESIDE_WS_URL", TABLESIDE_API_URL)


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SOCKETIO_ASYNC_MODE = "threading"
    STORE_BACKEND = "memory"
    SEED_MOCK_DATA = True
