"""
Poll Session Use Case

The web client asks whether its QR session has been claimed yet.
"""

from datetime import datetime
from typing import Callable

from src.libs.result import Error, Result, Return
from src.app.services.token_issuer import ITokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from .assertions import build_subject_summary, issue_assertion
from .dtos import PollSessionResponse, SessionInfo


class PollSessionUseCase:
    """
    Use case for polling a web session's status.

    Business Rules:
    - Read only; polling never mutates a session
    - Expired sessions are reported as SESSION_NOT_FOUND
    - Every authenticated poll mints a fresh assertion
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

    async def execute(self, session_id: str) -> Result[PollSessionResponse]:
        now = self.clock()

        async with self.uow:
            web_session = await self.uow.web_sessions.get_live_by_session_id(session_id, now)
            if web_session is None:
                return Return.err(
                    Error("SESSION_NOT_FOUND", "Session not found or expired")
                )

            if not web_session.is_active or web_session.teacher_id is None:
                return Return.ok(PollSessionResponse(authenticated=False))

            teacher = await self.uow.teachers.get_by_id(web_session.teacher_id)
            if teacher is None:
                return Return.err(Error("SUBJECT_NOT_FOUND", "Teacher not found"))

            tenant_ids = await self.uow.teachers.get_tenant_ids(teacher.id)

            assertion = issue_assertion(
                self.token_issuer,
                teacher,
                tenant_ids,
                web_session.subject_type,
                web_session.session_id,
            )

            return Return.ok(
                PollSessionResponse(
                    authenticated=True,
                    subject=build_subject_summary(teacher, tenant_ids),
                    session=SessionInfo(
                        session_id=web_session.session_id,
                        active=web_session.is_active,
                        subject_type=web_session.subject_type,
                    ),
                    assertion=assertion,
                )
            )
