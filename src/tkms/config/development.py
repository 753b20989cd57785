import os

from . import env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "tkms"),
}

DEBUG = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Apply database/schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")

ADJUSTMENT_SETTINGS = {
    "enable_verbal_agreements": env_flag("ENABLE_VERBAL_AGREEMENTS", "1"),
    "allow_early_out": env_flag("ALLOW_EARLY_OUT", "1"),
    "allow_half_day": env_flag("ALLOW_HALF_DAY", "1"),
    "allow_late_in": env_flag("ALLOW_LATE_IN", "1"),
}
