SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

STORE_BACKEND = "memory"

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "attendance_engine_test",
    "connection_timeout": 1,
}

AUTO_INIT_DB = False

WORK_TIMEZONE = ""
LATE_THRESHOLD = "09:00"
STANDARD_END = "17:00"
STANDARD_DAY_HOURS = 8
LATE_EARLY_PRECEDENCE = "late_wins"
