"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
CLASS_CODE_PREFIX_LENGTH = 3
CLASS_CODE_DIGITS = 6
CLASS_CODE_MAX_ATTEMPTS = 5
MIN_PASSWORD_LENGTH = 6
PRN_PATTERN = r"^[a-z0-9-]{6,20}$"
