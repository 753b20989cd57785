import os

from . import env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "tkms"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "tkms"),
}

DEBUG = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")

ADJUSTMENT_SETTINGS = {
    "enable_verbal_agreements": env_flag("ENABLE_VERBAL_AGREEMENTS"),
    "allow_early_out": env_flag("ALLOW_EARLY_OUT"),
    "allow_half_day": env_flag("ALLOW_HALF_DAY"),
    "allow_late_in": env_flag("ALLOW_LATE_IN"),
}
