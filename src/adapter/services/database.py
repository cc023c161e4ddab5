"""
Storage handle.

One Database is built at application startup and handed to everything that
needs storage; there is no module-level engine. Connections are checked with
a pre-ping before use, so a dropped connection is replaced transparently on
the next checkout. Anything that still fails is retried by the repositories
(see storage_retry).
"""

import logging
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

logger = logging.getLogger(__name__)


class Database:
    def __init__(self, db_uri: str, echo: bool = False):
        self.engine = create_async_engine(
            db_uri, echo=echo, future=True, pool_pre_ping=True
        )
        self.session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

    async def create_all(self) -> None:
        # Import entities so their tables are registered on the metadata
        import src.domain.entities  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database schema ensured")

    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            yield session

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database connections closed")
