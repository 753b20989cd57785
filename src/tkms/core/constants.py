"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# All time-of-day arithmetic happens in this zone. It is a property of the
# deployment, not of the user.
CANONICAL_TIMEZONE = "Asia/Manila"

TIME_OF_DAY_PATTERN = r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$"

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

# Statutory (DOLE) break deduction used when a schedule has no lunch window.
STATUTORY_LONG_SHIFT_MINUTES = 6 * 60
STATUTORY_MEDIUM_SHIFT_MINUTES = 4 * 60
STATUTORY_LONG_BREAK_MINUTES = 60
STATUTORY_MEDIUM_BREAK_MINUTES = 30

DEFAULT_HISTORY_LIMIT = 100
DEFAULT_RECOMPUTE_DAYS = 7
