import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.environ.get("QR_LOGIN_CONFIG", os.path.join(ROOT_PATH, "env.yaml"))

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


def _get(key, default=None):
    """Environment variables take precedence over env.yaml."""
    value = os.environ.get(key)
    if value is None:
        return data.get(key, default)
    if isinstance(default, bool):
        return value.lower() in ("1", "true", "yes", "on")
    if isinstance(default, int):
        return int(value)
    if isinstance(default, float):
        return float(value)
    if isinstance(default, list):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


class ApplicationConfig:
    DB_URI = _get("DB_URI", "sqlite+aiosqlite:///./qr_login.db")
    API_PREFIX = _get("API_PREFIX", "/api")
    API_PORT = _get("API_PORT", 8000)
    API_HOST = _get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = _get("CORS_ORIGINS", ["*"])
    LOG_LEVEL = _get("LOG_LEVEL", "INFO")

    # No default: the service refuses to start without a signing secret
    JWT_SECRET = _get("JWT_SECRET")
    JWT_ALGORITHM = _get("JWT_ALGORITHM", "HS256")
    ASSERTION_TTL_HOURS = _get("ASSERTION_TTL_HOURS", 24)

    SESSION_TTL_SECONDS = _get("SESSION_TTL_SECONDS", 300)

    STORAGE_RETRY_ATTEMPTS = _get("STORAGE_RETRY_ATTEMPTS", 3)
    STORAGE_RETRY_BACKOFF_SECONDS = _get("STORAGE_RETRY_BACKOFF_SECONDS", 0.5)
    STORAGE_RETRY_MAX_WAIT_SECONDS = _get("STORAGE_RETRY_MAX_WAIT_SECONDS", 4.0)

    REAPER_ENABLED = _get("REAPER_ENABLED", False)
    REAPER_INTERVAL_SECONDS = _get("REAPER_INTERVAL_SECONDS", 600)

    ADMIN_API_KEY = _get("ADMIN_API_KEY")
