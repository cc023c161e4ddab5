"""
Handshake Use Case DTOs (Data Transfer Objects)

Commands are built by the API layer after request validation.
Responses serialize with camelCase keys, the shape web and mobile clients read.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from src.domain.entities import SubjectType


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Commands
# ============================================================================


class CreateSessionCommand(BaseModel):
    """Web client asks for a new QR session"""

    subject_type: SubjectType = SubjectType.teacher
    tenant_id: Optional[UUID] = None


class ClaimSessionCommand(BaseModel):
    """Mobile client claims a scanned session"""

    session_id: str
    external_id: str
    device_id: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


# ============================================================================
# Responses
# ============================================================================


class SubjectSummary(CamelModel):
    """Teacher as shown to both clients"""

    id: str
    external_id: str
    name: str
    email: str
    tenant_refs: List[str]


class SessionInfo(CamelModel):
    """Session fields exposed to the poller"""

    session_id: str
    active: bool
    subject_type: SubjectType


class CreateSessionResponse(CamelModel):
    """Response for create session use case"""

    success: bool = True
    session_id: str
    expires_at: datetime
    expires_at_epoch_millis: int
    qr_payload: Dict[str, Any]
    qr_code: Optional[str] = None


class ClaimSessionResponse(CamelModel):
    """Response for claim session use case"""

    success: bool = True
    message: str
    session_id: str
    assertion: str
    subject: SubjectSummary


class PollSessionResponse(CamelModel):
    """Response for poll session use case (only authenticated is set while pending)"""

    authenticated: bool
    subject: Optional[SubjectSummary] = None
    session: Optional[SessionInfo] = None
    assertion: Optional[str] = None
