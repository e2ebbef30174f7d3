"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

RETENTION_MONTHS = 3
DEFAULT_ADMIN_NAME = "Admin"
MANUAL_ADD_REASON = "Handmatig toegevoegd door admin"

PIN_MIN_LENGTH = 4
PIN_MAX_LENGTH = 6

TEMP_ID_PREFIX = "tmp-"

TABLE_SETTINGS = "settings"
TABLE_EMPLOYEES = "employees"
TABLE_TIME_LOGS = "time_logs"
TABLE_SHIFTS = "shifts"
TABLE_ADMIN_USERS = "admin_users"
