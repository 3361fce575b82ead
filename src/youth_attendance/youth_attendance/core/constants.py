"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DATE_KEY_PATTERN = r"\d{4}-\d{2}-\d{2}"
DATE_KEY_FORMAT = "%Y-%m-%d"

# Single key the whole group collection is persisted under.
STORAGE_KEY = "youth_attendance_groups"

LEADERBOARD_LIMIT = 5
LEADERBOARD_MIN_SESSIONS = 1
AT_RISK_LIMIT = 5
AT_RISK_STREAK = 2

MIN_RECORD_FIELDS = 5

# Column offsets of the tabular seed/export format.
COL_GROUP_ID = 1
COL_LEADER = 2
COL_CO_LEADER = 3
COL_MONTH_RANGE = 4
COL_MEMBER_NAME = 5
COL_PHONE = 6

EXPORT_HEADER = (
    "No",
    "Group_Id",
    "Leader",
    "Co_Leader",
    "Month_Range",
    "Member Name",
    "PHONE NUMBER",
)

SESSION_EXPORT_HEADER = ("Group", "Member Name", "Phone", "Status", "Date")

ALL_MONTH_RANGES = "All"
