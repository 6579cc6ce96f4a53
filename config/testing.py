import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timecard_test"),
}

STORAGE_BACKEND = "memory"
DAY_BOUNDARY = os.getenv("DAY_BOUNDARY", "jst_midnight")
HOLIDAY_SOURCE = "jpholiday"
LOG_LEVEL = "DEBUG"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
