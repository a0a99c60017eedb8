"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_OFFICE_START = time(9, 30)
DEFAULT_BASE_BREAK_MINUTES = 60
DEFAULT_REQUIRED_WORK_HOURS = 7

DEFAULT_ROLLOVER_CHECK_SECONDS = 60

# Versioned storage slots
DAY_RECORD_KEY = "office-tracker-v2"
HISTORY_KEY = "office-tracker-history-v2"
DAY_MARKER_KEY = "office-tracker-date-v2"
