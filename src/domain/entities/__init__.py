"""
QR Login Domain Entities

Each entity in its own file.
"""

from .enums import SessionState, SubjectType, TeacherStatus

from .teacher import Teacher
from .teacher_tenant import TeacherTenant
from .web_session import WebSession

__all__ = [
    # Enums
    "SessionState",
    "SubjectType",
    "TeacherStatus",
    # Entities
    "Teacher",
    "TeacherTenant",
    "WebSession",
]
