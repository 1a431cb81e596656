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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./tenantauth.db")
    API_PREFIX = data.get("API_PREFIX", "")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # Access and refresh tokens must be signed with different secrets
    JWT_ACCESS_SECRET = data.get("JWT_ACCESS_SECRET", "dev-access-secret-change-in-production")
    JWT_REFRESH_SECRET = data.get("JWT_REFRESH_SECRET", "dev-refresh-secret-change-in-production")
    JWT_ACCESS_EXPIRES_MINUTES = int(data.get("JWT_ACCESS_EXPIRES_MINUTES", 15))
    JWT_REFRESH_EXPIRES_DAYS = int(data.get("JWT_REFRESH_EXPIRES_DAYS", 7))

    # Empty disables the first-admin bootstrap registration
    BOOTSTRAP_ADMIN_KEY = data.get("BOOTSTRAP_ADMIN_KEY", "")

    SMTP_HOST = data.get("SMTP_HOST", "")
    SMTP_PORT = int(data.get("SMTP_PORT", 587))
    SMTP_USE_TLS = bool(data.get("SMTP_USE_TLS", True))
    SMTP_USER = data.get("SMTP_USER", "")
    SMTP_PASSWORD = data.get("SMTP_PASSWORD", "")
    EMAIL_FROM = data.get("EMAIL_FROM", "noreply@localhost")

    APP_NAME = data.get("APP_NAME", "TenantAuth")
    APP_BASE_URL = data.get("APP_BASE_URL", "http://localhost:8000")
    FRONTEND_URL = data.get("FRONTEND_URL", "http://localhost:3000")
