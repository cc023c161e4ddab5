from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.teacher_repository import TeacherRepository
from src.adapter.repositories.web_session_repository import WebSessionRepository
from src.adapter.services.storage_retry import TRANSIENT_STORAGE_ERRORS
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import TransientStorageError


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.teachers = TeacherRepository(self.session)
        self.web_sessions = WebSessionRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        # A failed commit is never replayed: the pending writes are gone with the connection
        try:
            await self.session.commit()
        except TRANSIENT_STORAGE_ERRORS as exc:
            await self.session.rollback()
            raise TransientStorageError("Storage temporarily unavailable") from exc

    async def rollback(self):
        await self.session.rollback()
