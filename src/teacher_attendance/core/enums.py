from __future__ import annotations

from enum import Enum


class TeacherStatus(str, Enum):
    """Whether a teacher may log in and be assigned classes."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class AttendanceStatus(str, Enum):
    """Attendance mark stored per student and session."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"


class PaymentType(str, Enum):
    FULL = "full"
    HALF = "half"
    FREE = "free"


class WebSessionStatus(str, Enum):
    """Lifecycle of a QR login session."""

    PENDING = "pending"
    AUTHENTICATED = "authenticated"
    DISCONNECTED = "disconnected"


class TokenType(str, Enum):
    ADMIN = "admin"
    WEB = "web"
