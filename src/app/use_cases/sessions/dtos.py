"""
Session Management DTOs
"""

from datetime import datetime
from typing import Optional

from src.app.use_cases.handshake.dtos import CamelModel
from src.domain.entities import SubjectType, WebSession


class ActiveSessionInfo(CamelModel):
    """An active web session with its device and client metadata"""

    session_id: str
    subject_type: SubjectType
    teacher_id: Optional[str] = None
    teacher_name: Optional[str] = None
    teacher_email: Optional[str] = None
    tenant_id: Optional[str] = None
    device_id: Optional[str] = None
    active: bool
    ip_address: str
    user_agent: str
    created_at: datetime
    last_activity_at: datetime
    expires_at: datetime

    @classmethod
    def from_entity(cls, web_session: WebSession, teacher=None) -> "ActiveSessionInfo":
        return cls(
            session_id=web_session.session_id,
            subject_type=web_session.subject_type,
            teacher_id=str(web_session.teacher_id) if web_session.teacher_id else None,
            teacher_name=teacher.name if teacher else None,
            teacher_email=teacher.email if teacher else None,
            tenant_id=str(web_session.tenant_id) if web_session.tenant_id else None,
            device_id=web_session.device_id,
            active=web_session.is_active,
            ip_address=web_session.ip_address or "unknown",
            user_agent=web_session.user_agent or "unknown",
            created_at=web_session.created_at,
            last_activity_at=web_session.last_activity_at or web_session.created_at,
            expires_at=web_session.expires_at,
        )


class VerifySessionResponse(CamelModel):
    """Response for verify session"""

    valid: bool
    session: ActiveSessionInfo


class DisconnectSessionResponse(CamelModel):
    """Response for disconnect session"""

    message: str
    session_id: str
