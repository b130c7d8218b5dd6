# models/__init__.py

from .attendance import Attendance, AttendanceStore
from .leave import LeaveRequest, LeaveStore
from .users import User, UserStore

__all__ = [
    "Attendance",
    "AttendanceStore",
    "LeaveRequest",
    "LeaveStore",
    "User",
    "UserStore",
]
