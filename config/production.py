import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mysql")
STATE_FILE = os.getenv("STATE_FILE", "office_tracker_state.json")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "office_tracker"),
}

OFFICE_START = os.getenv("OFFICE_START", "09:30")
BASE_BREAK_MINUTES = int(os.getenv("BASE_BREAK_MINUTES", "60"))
REQUIRED_WORK_HOURS = int(os.getenv("REQUIRED_WORK_HOURS", "7"))

# Create the tracker_slots table on startup (mysql backend only)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

ROLLOVER_CHECK_SECONDS = int(os.getenv("ROLLOVER_CHECK_SECONDS", "60"))
# Interval rollover check, started by the first served request
START_SCHEDULER = bool(int(os.getenv("START_SCHEDULER", "1")))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
