"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

PROFILE_TABLE = "user_infos"

DEFAULT_ACCESS_RIGHT = 0
DEFAULT_POSITION_CODE = 0
# Value written by a profile edit; differs from the creation default.
DEFAULT_UPDATE_POSITION_CODE = 100

NAME_FILTER_FIELDS = frozenset({"first_name", "last_name"})
EQUAL_FILTER_FIELDS = frozenset({"email", "tel", "sex"})
DATE_RANGE_FILTER_FIELDS = frozenset({"birthday", "hire_date"})

DEFAULT_PASSWORD_RESET_URL = "http://localhost:8000/password/reset/{token}?email={email}"
