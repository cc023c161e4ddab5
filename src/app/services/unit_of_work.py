from abc import ABC, abstractmethod

from src.app.repositories.teacher_repository import ITeacherRepository
from src.app.repositories.web_session_repository import IWebSessionRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    teachers: ITeacherRepository
    web_sessions: IWebSessionRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
