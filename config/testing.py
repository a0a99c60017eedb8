SECRET_KEY = "test-secret"

STORAGE_BACKEND = "memory"
STATE_FILE = ""

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "office_tracker_test",
}

OFFICE_START = "09:30"
BASE_BREAK_MINUTES = 60
REQUIRED_WORK_HOURS = 7

ROLLOVER_CHECK_SECONDS = 60
# Tests drive rollover explicitly
START_SCHEDULER = False

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
