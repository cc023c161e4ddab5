"""
QR Login Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class SubjectType(str, Enum):
    """Kind of web client that requested the session"""

    teacher = "teacher"
    admin = "admin"


class TeacherStatus(str, Enum):
    """Teacher account status"""

    active = "active"
    inactive = "inactive"


class SessionState(str, Enum):
    """Derived lifecycle state of a web session (never stored)"""

    pending = "pending"
    active = "active"
    expired = "expired"
