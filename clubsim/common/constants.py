"""
Shared constants for the club day replay.
"""

import re

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR

# Wall-clock timestamps in the input feed and in the report
CLOCK_PATTERN = re.compile(r"^(\d{2}):(\d{2})$")

# Header numbers and event codes
INTEGER_PATTERN = re.compile(r"^-?[0-9]+$")

# Allowed client identifiers
CLIENT_NAME_PATTERN = re.compile(r"^[a-z0-9_-]+$")
