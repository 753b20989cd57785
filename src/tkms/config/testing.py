import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "tkms_test"),
}

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False

ADJUSTMENT_SETTINGS = {
    "enable_verbal_agreements": True,
    "allow_early_out": True,
    "allow_half_day": False,
    "allow_late_in": True,
}
