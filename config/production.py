import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timecard_db"),
}

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mysql")
# Overnight shifts need "early_morning_cutoff"; see config.development.
DAY_BOUNDARY = os.getenv("DAY_BOUNDARY", "jst_midnight")
HOLIDAY_SOURCE = os.getenv("HOLIDAY_SOURCE", "mysql")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
