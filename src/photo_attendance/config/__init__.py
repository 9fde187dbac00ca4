import os


def get_settings_module() -> str:
    # APP_ENV selects the settings module, 'development' by default
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "photo_attendance.config.production"

    if env in {"test", "testing"}:
        return "photo_attendance.config.testing"

    return "photo_attendance.config.development"


def backend_configured(db_config: dict) -> bool:
    """True when the data store connection settings are filled in."""
    return all(str(db_config.get(key) or "").strip() for key in ("host", "user", "database"))
