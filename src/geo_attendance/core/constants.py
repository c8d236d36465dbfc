"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

EARTH_RADIUS_M = 6_371_000
DEFAULT_WORK_START = time(8, 0, 0)
DEFAULT_HISTORY_LIMIT = 30
DEFAULT_TOKEN_HOURS = 24
CHECKOUT_NOTE_PREFIX = " | Check-out: "
