from __future__ import annotations

from enum import Enum, IntEnum


class Role(str, Enum):
    """Roles stored on profiles."""

    ADMIN = "admin"
    HR = "hr"
    EMPLOYEE = "employee"


# Roles tracked by the roster and by absence marking.
ACTIVE_ROLES = (Role.EMPLOYEE, Role.HR)
# Roles allowed to see company-wide statistics and override attendance.
MANAGER_ROLES = (Role.ADMIN, Role.HR)


class ApprovalStatus(str, Enum):
    """Approval workflow state shared by attendance logs and leave requests."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class WorkMode(str, Enum):
    ONSITE = "onsite"
    WFH = "wfh"


class DayKind(IntEnum):
    """Single-user classification of a calendar day.

    Values are ordered by precedence: a higher value always wins a merge.
    """

    NONE = 0
    ABSENT = 1
    LEAVE = 2
    PRESENT = 3

    @property
    def label(self) -> str:
        return self.name.lower()


class DailyStatusKind(str, Enum):
    """Per-user status in the single-day roster."""

    PRESENT = "present"
    LEAVE = "leave"
    ABSENT_MARKED = "absent_marked"
    HOLIDAY = "holiday"
    ABSENT = "absent"
