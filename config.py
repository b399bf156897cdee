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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./accounts.db")
    ROUTE_PREFIX = data.get("ROUTE_PREFIX", "/users")
    APP_DOMAIN = data.get("APP_DOMAIN", "http://localhost:8000")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_EXPIRES_MINUTES = int(data.get("JWT_EXPIRES_MINUTES", 60 * 24))
    RESET_TOKEN_TTL_MINUTES = int(data.get("RESET_TOKEN_TTL_MINUTES", 60))
    # Verification does not gate login unless this is switched on
    REQUIRE_VERIFIED_LOGIN = bool(data.get("REQUIRE_VERIFIED_LOGIN", False))
    SMTP_ENABLED = bool(data.get("SMTP_ENABLED", False))
    SMTP_HOST = data.get("SMTP_HOST", "")
    SMTP_PORT = int(data.get("SMTP_PORT", 587))
    SMTP_USER = data.get("SMTP_USER", "")
    SMTP_PASSWORD = data.get("SMTP_PASSWORD", "")
    SMTP_USE_TLS = bool(data.get("SMTP_USE_TLS", False))
    SMTP_STARTTLS = bool(data.get("SMTP_STARTTLS", True))
    SMTP_TIMEOUT_SECONDS = float(data.get("SMTP_TIMEOUT_SECONDS", 10))
    SMTP_FROM_EMAIL = data.get("SMTP_FROM_EMAIL", "no-reply@localhost")
    SMTP_FROM_NAME = data.get("SMTP_FROM_NAME", "Accounts")
    SUPPORT_EMAIL = data.get("SUPPORT_EMAIL", "support@localhost")
