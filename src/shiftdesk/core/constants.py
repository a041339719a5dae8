"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SHIFT_START = "09:00"
DEFAULT_LOCATION = "Remote/Office"

# Check-in later than shift start + grace (strictly) is LATE.
LATE_GRACE_MINUTES = 30

# Check-out is refused before this many hours.
MIN_STAY_HOURS = 1

# Closed sessions shorter than this (strictly) are HALF-DAY.
HALF_DAY_HOURS = 5

# Ledger-only advisory threshold; never changes status.
FULL_SHIFT_HOURS = 7.5

ATTENDANCE_ID_PREFIX = "ATT"
LEAVE_ID_PREFIX = "LV"

DEFAULT_INBOX_LIMIT = 100
