import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timecard_db"),
}

# "mysql" or "memory"
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mysql")

# "jst_midnight" or "early_morning_cutoff". Under jst_midnight a clock-out after
# midnight is rejected, so stores with overnight shifts need early_morning_cutoff.
DAY_BOUNDARY = os.getenv("DAY_BOUNDARY", "jst_midnight")

# "jpholiday" or "mysql" (holidays_jp table)
HOLIDAY_SOURCE = os.getenv("HOLIDAY_SOURCE", "jpholiday")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
