"""
WebSession Entity

One QR-code-initiated login attempt.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import generate_session_id, utcnow
from .enums import SessionState, SubjectType


class WebSession(SQLModel, table=True):
    """
    WebSession entity - tracks one QR handshake from creation to claim.

    Business Rules:
    - session_id is generated at creation and never changes
    - Created inactive; only a claim activates it
    - Sessions past expires_at are invisible to every read path
    - No transition back to pending once active
    """

    __tablename__ = "web_sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    session_id: str = Field(
        default_factory=generate_session_id, unique=True, index=True, max_length=36
    )

    subject_type: SubjectType = Field(nullable=False)
    teacher_id: Optional[UUID] = Field(default=None, foreign_key="teachers.id", index=True)
    tenant_id: Optional[UUID] = Field(default=None, index=True)

    device_id: Optional[str] = Field(default=None, max_length=255)
    is_active: bool = Field(default=False)

    # Client metadata, refreshed on every claim
    ip_address: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=512)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    last_activity_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime)
    )
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_web_session_expires_at", "expires_at"),
        Index("idx_web_session_teacher_device", "teacher_id", "device_id", "is_active"),
    )

    def state(self, now: datetime) -> SessionState:
        if self.expires_at <= now:
            return SessionState.expired
        if self.is_active:
            return SessionState.active
        return SessionState.pending
