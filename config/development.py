import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# "memory" keeps records in-process; "mysql" uses DB_CONFIG
STORE_BACKEND = os.getenv("STORE_BACKEND", "memory")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_engine"),
    "connection_timeout": int(os.getenv("DB_TIMEOUT", "5")),
}

# If enabled, app will apply database/schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# Work calendar
WORK_TIMEZONE = os.getenv("WORK_TIMEZONE", "")
LATE_THRESHOLD = os.getenv("LATE_THRESHOLD", "09:00")
STANDARD_END = os.getenv("STANDARD_END", "17:00")
STANDARD_DAY_HOURS = int(os.getenv("STANDARD_DAY_HOURS", "8"))
LATE_EARLY_PRECEDENCE = os.getenv("LATE_EARLY_PRECEDENCE", "late_wins")
