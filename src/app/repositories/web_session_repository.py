from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import WebSession


class IWebSessionRepository(ABC):
    """Web session store interface - application layer

    Every lookup takes the current instant and only sees sessions with
    expires_at > now, whether or not expired rows are still stored.
    """

    @abstractmethod
    async def create(self, web_session: WebSession) -> WebSession:
        """Insert a new session"""
        pass

    @abstractmethod
    async def get_live_by_session_id(
        self, session_id: str, now: datetime
    ) -> Optional[WebSession]:
        """Get an unexpired session by its public session_id"""
        pass

    @abstractmethod
    async def find_live_for_device(
        self,
        teacher_id: UUID,
        device_id: str,
        now: datetime,
        exclude_session_id: Optional[str] = None,
    ) -> Optional[WebSession]:
        """Find an active, unexpired session bound to the teacher and device"""
        pass

    @abstractmethod
    async def activate(
        self,
        session_id: str,
        teacher_id: UUID,
        device_id: str,
        ip_address: str,
        user_agent: str,
        now: datetime,
    ) -> bool:
        """Conditionally bind and activate an unexpired session. Returns False if none matched."""
        pass

    @abstractmethod
    async def touch(
        self, session_id: str, ip_address: str, user_agent: str, now: datetime
    ) -> bool:
        """Refresh activity timestamp and client metadata of an unexpired session"""
        pass

    @abstractmethod
    async def get_active_by_teacher_id(
        self, teacher_id: UUID, now: datetime
    ) -> List[WebSession]:
        """Get all active, unexpired sessions of a teacher"""
        pass

    @abstractmethod
    async def get_active_by_teacher_ids(
        self, teacher_ids: List[UUID], now: datetime
    ) -> List[WebSession]:
        """Get all active, unexpired sessions of several teachers"""
        pass

    @abstractmethod
    async def expire(self, session_id: str, now: datetime) -> bool:
        """End an unexpired session immediately by moving expires_at to now"""
        pass

    @abstractmethod
    async def expire_for_teacher_tenant(
        self, teacher_id: UUID, tenant_id: UUID, now: datetime
    ) -> int:
        """End every live, active session of a teacher created under a tenant. Returns count."""
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Physically remove expired sessions. Returns count."""
        pass
