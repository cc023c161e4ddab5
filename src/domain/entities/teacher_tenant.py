"""
TeacherTenant Entity

Links a Teacher to a tenant (company).
"""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

from src.domain.base import utcnow

if TYPE_CHECKING:
    from .teacher import Teacher


class TeacherTenant(SQLModel, table=True):
    """
    TeacherTenant entity - one row per (teacher, tenant) membership.

    Business Rules:
    - (teacher_id, tenant_id) is unique, so inserting twice is a no-op
    - Added when a teacher claims a session created under the tenant
    - Removed only by an administrator
    """

    __tablename__ = "teacher_tenants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    teacher_id: UUID = Field(foreign_key="teachers.id", nullable=False, index=True)
    tenant_id: UUID = Field(nullable=False, index=True)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    # Relationships
    teacher: "Teacher" = Relationship(back_populates="tenant_links")

    __table_args__ = (
        Index("idx_teacher_tenant_unique", "teacher_id", "tenant_id", unique=True),
    )
