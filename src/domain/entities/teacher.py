"""
Teacher Entity

The identity that claims web sessions from the mobile app.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Relationship, SQLModel

from src.domain.base import utcnow
from .enums import TeacherStatus

if TYPE_CHECKING:
    from .teacher_tenant import TeacherTenant


class Teacher(SQLModel, table=True):
    """
    Teacher entity - a person who signs in to the web dashboard by scanning a QR code.

    Business Rules:
    - external_id is human-assigned (e.g. "TCH001") and unique
    - external_id lookups are case-insensitive exact matches
    - Tenant memberships only grow through the handshake path
    """

    __tablename__ = "teachers"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    external_id: str = Field(unique=True, index=True, max_length=64)

    name: str = Field(max_length=255)
    email: str = Field(max_length=255)
    phone: Optional[str] = Field(default=None, max_length=32)

    status: TeacherStatus = Field(default=TeacherStatus.active)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    # Relationships
    tenant_links: list["TeacherTenant"] = Relationship(back_populates="teacher")
