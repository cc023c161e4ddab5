"""
Create Session Use Case

Issues a short-lived, unclaimed web session for the QR code.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable

from config import ApplicationConfig
from src.libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import epoch_millis, utcnow
from src.domain.entities import WebSession
from .dtos import CreateSessionCommand, CreateSessionResponse

logger = logging.getLogger(__name__)

QR_PAYLOAD_TYPE = "web-auth"


class CreateSessionUseCase:
    """
    Use case for starting a QR handshake.

    Business Rules:
    - session_id is a fresh UUID4
    - Session starts inactive and expires SESSION_TTL_SECONDS after creation
    - tenant_id, when given, is joined to the claiming teacher later
    - Only storage faults can fail this use case
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utcnow):
        self.uow = uow
        self.clock = clock

    async def execute(self, command: CreateSessionCommand) -> Result[CreateSessionResponse]:
        """
        Execute create session use case.

        Args:
            command: CreateSessionCommand with subject type and optional tenant

        Returns:
            Result with CreateSessionResponse (session id, expiry, QR payload)
        """
        now = self.clock()

        async with self.uow:
            web_session = WebSession(
                subject_type=command.subject_type,
                tenant_id=command.tenant_id,
                is_active=False,
                expires_at=now + timedelta(seconds=ApplicationConfig.SESSION_TTL_SECONDS),
                last_activity_at=now,
                created_at=now,
            )
            await self.uow.web_sessions.create(web_session)
            await self.uow.commit()
            session_id = web_session.session_id
            expires_at = web_session.expires_at

        logger.info(
            f"Web session {session_id} created "
            f"(type={command.subject_type.value}, tenant={command.tenant_id})"
        )

        qr_payload = {
            "type": QR_PAYLOAD_TYPE,
            "sessionId": session_id,
            "subjectType": command.subject_type.value,
            "issuedAtEpochMillis": epoch_millis(now),
        }
        if command.tenant_id is not None:
            qr_payload["tenantId"] = str(command.tenant_id)

        return Return.ok(
            CreateSessionResponse(
                session_id=session_id,
                expires_at=expires_at,
                expires_at_epoch_millis=epoch_millis(expires_at),
                qr_payload=qr_payload,
            )
        )
