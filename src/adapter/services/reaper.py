"""
Background purge of expired web sessions.

Expired sessions are already hidden from every read, so the reaper only
reclaims storage. A failed pass is logged and the loop keeps going.
"""

import asyncio
import logging

from src.adapter.services.database import Database
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.admin import PurgeExpiredSessionsUseCase
from src.domain.errors import TransientStorageError

logger = logging.getLogger(__name__)


async def purge_once(database: Database) -> int:
    async with database.session_factory() as session:
        result = await PurgeExpiredSessionsUseCase(SqlAlchemyUnitOfWork(session)).execute()
    return result.value.sessions_purged


async def run_reaper(database: Database, interval_seconds: float) -> None:
    """Purge expired sessions every interval_seconds until cancelled."""
    logger.info(f"Session reaper started (interval={interval_seconds}s)")
    try:
        while True:
            await asyncio.sleep(interval_seconds)
            try:
                await purge_once(database)
            except TransientStorageError:
                logger.warning("Session reaper pass skipped: storage unavailable")
            except Exception:
                logger.exception("Session reaper pass failed")
    except asyncio.CancelledError:
        logger.info("Session reaper stopped")
        raise
