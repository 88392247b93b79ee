"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TIMEZONE = "UTC"
DEFAULT_CLOCK_OUT_GRACE_MINUTES = 30
DEFAULT_MISSED_CLOCKOUT_INTERVAL_SECONDS = 5 * 60
DEFAULT_REGULAR_SHIFT_HOURS = 8.0

# A second clock event within this many seconds of the employee's last
# attendance change is refused (double scan / client retry).
DEFAULT_REPEAT_REQUEST_WINDOW_SECONDS = 10
