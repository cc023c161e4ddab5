"""
Claim Session Use Case

The mobile app claims a scanned web session and receives an assertion.
"""

import logging
from datetime import datetime
from typing import Callable

from src.libs.result import Error, Result, Return
from src.app.services.token_issuer import ITokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import SubjectType, Teacher, WebSession
from .assertions import build_subject_summary, issue_assertion
from .dtos import ClaimSessionCommand, ClaimSessionResponse

logger = logging.getLogger(__name__)

# Stored when the mobile app does not send a device identifier
DEFAULT_DEVICE_ID = "mobile-app"
UNKNOWN_CLIENT = "unknown"


class ClaimSessionUseCase:
    """
    Use case for claiming (activating) a web session from the mobile app.

    Decision order:
    1. Resolve the teacher by external id (case-insensitive). SUBJECT_NOT_FOUND
       is returned before the session is looked at.
    2. If this teacher already has another live, active session on the same
       device, that session stays canonical: its activity is refreshed, the
       scanned session is activated alongside it, and the assertion is keyed
       to the existing session.
    3. Otherwise the scanned session must be live, else SESSION_NOT_FOUND.
    4. An active session claimed from another device is re-bound to the new
       device; the same device re-claiming is an idempotent no-op.
    5. The session's tenant (if any) is added to the teacher's memberships.
    6. The session is bound to teacher and device and activated.

    Each record (membership, session) is written by its own atomic statement
    and committed on its own; retries converge on the same final state.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_issuer: ITokenIssuer,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.token_issuer = token_issuer
        self.clock = clock

    async def execute(self, command: ClaimSessionCommand) -> Result[ClaimSessionResponse]:
        """
        Execute claim session use case.

        Args:
            command: ClaimSessionCommand with session id, teacher external id,
                optional device id and client metadata

        Returns:
            Result with ClaimSessionResponse, or Error
            (SUBJECT_NOT_FOUND, SESSION_NOT_FOUND)
        """
        now = self.clock()
        device_id = command.device_id or DEFAULT_DEVICE_ID
        ip_address = command.ip_address or UNKNOWN_CLIENT
        user_agent = command.user_agent or UNKNOWN_CLIENT

        async with self.uow:
            # 1. Resolve teacher first: an unknown teacher never touches the session
            teacher = await self.uow.teachers.find_by_external_id(command.external_id)
            if teacher is None:
                logger.warning(f"Claim rejected: teacher {command.external_id!r} not found")
                return Return.err(Error("SUBJECT_NOT_FOUND", "Teacher not found"))

            # 2. Device already holds a live session for this teacher
            existing = await self.uow.web_sessions.find_live_for_device(
                teacher.id, device_id, now, exclude_session_id=command.session_id
            )
            if existing is not None:
                return await self._merge_into_existing(
                    existing, teacher, command.session_id, device_id, ip_address, user_agent, now
                )

            # 3. Locate the scanned session
            web_session = await self.uow.web_sessions.get_live_by_session_id(
                command.session_id, now
            )
            if web_session is None:
                logger.warning(f"Claim rejected: session {command.session_id} not found or expired")
                return Return.err(
                    Error("SESSION_NOT_FOUND", "Session not found or expired")
                )

            # 4. Re-authentication vs idempotent re-claim
            if web_session.is_active and web_session.device_id:
                if web_session.device_id != device_id:
                    logger.warning(
                        f"Session {web_session.session_id} re-authenticated on a different "
                        f"device ({web_session.device_id} -> {device_id})"
                    )
                else:
                    logger.info(
                        f"Session {web_session.session_id} re-claimed by the same device; no change"
                    )

            # 5. Tenant association
            if web_session.tenant_id is not None:
                added = await self.uow.teachers.add_tenant_membership(
                    teacher.id, web_session.tenant_id
                )
                await self.uow.commit()
                if added:
                    logger.info(
                        f"Teacher {teacher.external_id} joined tenant {web_session.tenant_id}"
                    )
                else:
                    logger.info(
                        f"Teacher {teacher.external_id} already belongs to tenant "
                        f"{web_session.tenant_id}; membership unchanged"
                    )

            # 6. Bind and activate
            activated = await self.uow.web_sessions.activate(
                web_session.session_id, teacher.id, device_id, ip_address, user_agent, now
            )
            if not activated:
                return Return.err(
                    Error("SESSION_NOT_FOUND", "Session not found or expired")
                )
            await self.uow.commit()

            logger.info(
                f"Session {web_session.session_id} activated for teacher "
                f"{teacher.external_id} on device {device_id}"
            )

            return Return.ok(
                await self._build_response(
                    teacher, web_session.session_id, "Authentication successful"
                )
            )

    async def _merge_into_existing(
        self,
        existing: WebSession,
        teacher: Teacher,
        scanned_session_id: str,
        device_id: str,
        ip_address: str,
        user_agent: str,
        now: datetime,
    ) -> Result[ClaimSessionResponse]:
        logger.info(
            f"Device {device_id} already holds session {existing.session_id} for teacher "
            f"{teacher.external_id}; merging scanned session {scanned_session_id} into it"
        )

        await self.uow.web_sessions.touch(existing.session_id, ip_address, user_agent, now)
        await self.uow.commit()

        # The scanned session is activated too, but never replaces the existing one
        scanned_activated = await self.uow.web_sessions.activate(
            scanned_session_id, teacher.id, device_id, ip_address, user_agent, now
        )
        await self.uow.commit()
        if not scanned_activated:
            logger.info(f"Scanned session {scanned_session_id} not found or expired; skipped")

        return Return.ok(
            await self._build_response(
                teacher,
                existing.session_id,
                "Authentication successful (existing session updated)",
            )
        )

    async def _build_response(
        self, teacher: Teacher, session_id: str, message: str
    ) -> ClaimSessionResponse:
        tenant_ids = await self.uow.teachers.get_tenant_ids(teacher.id)
        assertion = issue_assertion(
            self.token_issuer, teacher, tenant_ids, SubjectType.teacher, session_id
        )
        return ClaimSessionResponse(
            message=message,
            session_id=session_id,
            assertion=assertion,
            subject=build_subject_summary(teacher, tenant_ids),
        )
