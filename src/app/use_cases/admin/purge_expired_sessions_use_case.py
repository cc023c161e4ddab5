"""
Use Case: Purge Expired Sessions

Hard-deletes web sessions whose expiry has passed. Run on demand by an
administrator or periodically by the background reaper.
"""

import logging
from datetime import datetime
from typing import Callable

from pydantic import BaseModel

from src.libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow

logger = logging.getLogger(__name__)


class PurgeExpiredSessionsResponse(BaseModel):
    """Response DTO for PurgeExpiredSessionsUseCase"""

    status: str
    sessions_purged: int
    purged_before: datetime


class PurgeExpiredSessionsUseCase:
    """
    Delete every web session with expires_at at or before now.

    Expired sessions are already invisible to every read path, so purging
    only reclaims storage and never changes what a client observes.
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utcnow):
        self.uow = uow
        self.clock = clock

    async def execute(self) -> Result[PurgeExpiredSessionsResponse]:
        now = self.clock()

        async with self.uow:
            purged = await self.uow.web_sessions.delete_expired(now)
            await self.uow.commit()

        if purged:
            logger.info(f"Purged {purged} expired web session(s)")
        else:
            logger.debug("No expired web sessions to purge")

        return Return.ok(
            PurgeExpiredSessionsResponse(
                status="purged", sessions_purged=purged, purged_before=now
            )
        )
