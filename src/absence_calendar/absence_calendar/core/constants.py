"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

# Leave rows with this reason are administratively recorded absences, not leave.
UNEXCUSED_ABSENCE_REASON = "Unexcused Absence"

DATE_FORMAT = "%Y-%m-%d"

MANUAL_CLOCK_IN = time(9, 0)
MANUAL_CLOCK_OUT = time(17, 0)

PRESENT_OVERRIDE_COMMENT = "Overridden by HR: Marked Present"
NO_RECORD_DETAILS = "No Record"

# Sunday-first, matching the calendar grid.
WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
