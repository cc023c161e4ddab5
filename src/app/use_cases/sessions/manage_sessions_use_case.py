"""
Manage Sessions Use Case

Lists, verifies and disconnects web sessions after the handshake.
"""

import logging
from datetime import datetime
from typing import Callable, List
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from .dtos import ActiveSessionInfo, DisconnectSessionResponse, VerifySessionResponse

logger = logging.getLogger(__name__)


class ManageSessionsUseCase:
    """
    Use case for managing claimed web sessions.

    Business Rules:
    - Only active, unexpired sessions are listed or verified
    - Teachers see and disconnect only their own sessions
    - Disconnecting ends the session for good (expires it now); a session
      never goes back to pending
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utcnow):
        self.uow = uow
        self.clock = clock

    async def list_active_sessions(self, teacher_id: UUID) -> Result[List[ActiveSessionInfo]]:
        """
        List the active sessions of the requesting teacher.

        Args:
            teacher_id: Teacher UUID from the caller's assertion

        Returns:
            Result with active sessions, most recently used first
        """
        now = self.clock()
        async with self.uow:
            teacher = await self.uow.teachers.get_by_id(teacher_id)
            if teacher is None:
                return Return.err(Error("SUBJECT_NOT_FOUND", "Teacher not found"))

            sessions = await self.uow.web_sessions.get_active_by_teacher_id(teacher_id, now)
            infos = [ActiveSessionInfo.from_entity(s, teacher) for s in sessions]

        logger.info(f"Found {len(infos)} active session(s) for teacher {teacher_id}")
        return Return.ok(infos)

    async def verify_session(self, session_id: str) -> Result[VerifySessionResponse]:
        """Check that a session is active and unexpired"""
        now = self.clock()
        async with self.uow:
            web_session = await self.uow.web_sessions.get_live_by_session_id(session_id, now)
            if web_session is None or not web_session.is_active:
                return Return.err(
                    Error("SESSION_NOT_FOUND", "Session not found or expired")
                )

            teacher = None
            if web_session.teacher_id is not None:
                teacher = await self.uow.teachers.get_by_id(web_session.teacher_id)

            return Return.ok(
                VerifySessionResponse(
                    valid=True, session=ActiveSessionInfo.from_entity(web_session, teacher)
                )
            )

    async def disconnect_session(
        self, session_id: str, requesting_teacher_id: UUID
    ) -> Result[DisconnectSessionResponse]:
        """
        End one of the requesting teacher's sessions.

        Returns:
            Result with DisconnectSessionResponse, or Error
            (SESSION_NOT_FOUND, FORBIDDEN)
        """
        now = self.clock()
        async with self.uow:
            web_session = await self.uow.web_sessions.get_live_by_session_id(session_id, now)
            if web_session is None:
                return Return.err(Error("SESSION_NOT_FOUND", "Session not found"))

            if web_session.teacher_id != requesting_teacher_id:
                return Return.err(
                    Error("FORBIDDEN", "Session does not belong to current teacher")
                )

            expired = await self.uow.web_sessions.expire(session_id, now)
            if not expired:
                return Return.err(Error("SESSION_NOT_FOUND", "Session not found"))
            await self.uow.commit()

        logger.info(f"Session {session_id} disconnected by teacher {requesting_teacher_id}")
        return Return.ok(
            DisconnectSessionResponse(
                message="Session disconnected successfully", session_id=session_id
            )
        )

    async def list_tenant_sessions(self, tenant_id: UUID) -> Result[List[ActiveSessionInfo]]:
        """
        List active sessions of every teacher belonging to a tenant (admin view).
        """
        now = self.clock()
        async with self.uow:
            teacher_ids = await self.uow.teachers.get_ids_by_tenant_id(tenant_id)
            sessions = await self.uow.web_sessions.get_active_by_teacher_ids(teacher_ids, now)

            teachers = {}
            for teacher_id in {s.teacher_id for s in sessions}:
                teachers[teacher_id] = await self.uow.teachers.get_by_id(teacher_id)

            infos = [ActiveSessionInfo.from_entity(s, teachers.get(s.teacher_id)) for s in sessions]

        logger.info(
            f"Found {len(infos)} active session(s) across {len(teacher_ids)} "
            f"teacher(s) of tenant {tenant_id}"
        )
        return Return.ok(infos)
