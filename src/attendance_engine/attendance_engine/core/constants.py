"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

MINUTES_PER_DAY = 24 * 60

DEFAULT_LATE_THRESHOLD = time(9, 0)
DEFAULT_STANDARD_END = time(17, 0)
DEFAULT_STANDARD_DAY_HOURS = 8

DEFAULT_HISTORY_LIMIT = 30
DEFAULT_STORE_TIMEOUT_SECONDS = 5

# Late-arrival severity by number of late days in the analysed window.
LATE_SEVERITY_HIGH_COUNT = 5
LATE_SEVERITY_MEDIUM_COUNT = 3

RETRY_AFTER_SECONDS = 2
