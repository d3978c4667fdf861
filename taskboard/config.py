import os
from datetime import timedelta

from dotenv import load_dotenv

# Load .env from project root so local development settings are picked up
load_dotenv()


def _csv(value):
    return [item.strip() for item in value.split(",") if item.strip()]


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # "token" (Authorization: Bearer) or "session" (server-held session cookie)
    AUTH_MODE = os.environ.get("AUTH_MODE", "token")

    JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY", "change-this-jwt-secret")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=int(os.environ.get("JWT_EXPIRES_HOURS", "168")))

    SESSION_COOKIE_NAME = os.environ.get("SESSION_COOKIE_NAME", "todo.sid")
    SESSION_LIFETIME = timedelta(days=int(os.environ.get("SESSION_LIFETIME_DAYS", "7")))
    AUTH_COOKIE_SECURE = os.environ.get("AUTH_COOKIE_SECURE", "1") == "1"
    AUTH_COOKIE_SAMESITE = os.environ.get("AUTH_COOKIE_SAMESITE", "Lax")

    MONGO_URI = os.environ.get("MONGO_URI", "mongodb://localhost:27017/?directConnection=true")
    MONGO_DB_NAME = os.environ.get("MONGO_DB_NAME", "taskboard")
    MONGO_TIMEOUT_MS = int(os.environ.get("MONGO_TIMEOUT_MS", "5000"))

    BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", "10"))
    PASSWORD_MIN_LENGTH = int(os.environ.get("PASSWORD_MIN_LENGTH", "6"))

    CORS_ORIGINS = _csv(os.environ.get("CORS_ORIGINS", "http://localhost:5173"))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    DEBUG = os.environ.get("FLASK_DEBUG", "0") == "1"
