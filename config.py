import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./inkhouse.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    # Only enable behind a reverse proxy that sets X-Forwarded-For itself
    TRUST_PROXY_HEADERS = data.get("TRUST_PROXY_HEADERS", False)
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENVIRONMENT = data.get("ENVIRONMENT", "development")

    # Tokens: access and refresh tokens are signed with independent secrets
    JWT_ACCESS_SECRET = data.get("JWT_ACCESS_SECRET", "dev-access-secret-change-in-production")
    JWT_REFRESH_SECRET = data.get("JWT_REFRESH_SECRET", "dev-refresh-secret-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_TTL_HOURS = data.get("ACCESS_TOKEN_TTL_HOURS", 4)
    REFRESH_TOKEN_TTL_DAYS = data.get("REFRESH_TOKEN_TTL_DAYS", 30)

    # Session rows govern revocation, not the refresh token signature
    SIGNUP_SESSION_TTL_DAYS = data.get("SIGNUP_SESSION_TTL_DAYS", 30)
    LOGIN_SESSION_TTL_DAYS = data.get("LOGIN_SESSION_TTL_DAYS", 7)

    PASSWORD_RESET_TTL_MINUTES = data.get("PASSWORD_RESET_TTL_MINUTES", 60)
    BCRYPT_ROUNDS = data.get("BCRYPT_ROUNDS", 10)

    # Fixed-window rate limits
    API_RATE_LIMIT = data.get("API_RATE_LIMIT", 1000)
    API_RATE_WINDOW_SECONDS = data.get("API_RATE_WINDOW_SECONDS", 3600)
    LOGIN_RATE_LIMIT = data.get("LOGIN_RATE_LIMIT", 100)
    LOGIN_RATE_WINDOW_SECONDS = data.get("LOGIN_RATE_WINDOW_SECONDS", 900)
    SIGNUP_RATE_LIMIT = data.get("SIGNUP_RATE_LIMIT", 100)
    SIGNUP_RATE_WINDOW_SECONDS = data.get("SIGNUP_RATE_WINDOW_SECONDS", 900)

    MAX_ACTIVE_API_KEYS = data.get("MAX_ACTIVE_API_KEYS", 5)

    # Email (Resend HTTP API)
    RESEND_API_KEY = data.get("RESEND_API_KEY", "")
    RESEND_API_URL = data.get("RESEND_API_URL", "https://api.resend.com/emails")
    EMAIL_FROM = data.get("EMAIL_FROM", "noreply@inkhouse.local")
    APP_NAME = data.get("APP_NAME", "Inkhouse")
    APP_URL = data.get("APP_URL", "http://localhost:3000")
    SUPER_ADMIN_EMAIL = data.get("SUPER_ADMIN_EMAIL", "")
    BULK_EMAIL_DELAY_MS = data.get("BULK_EMAIL_DELAY_MS", 600)
