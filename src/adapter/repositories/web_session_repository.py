from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.storage_retry import storage_retry
from src.app.repositories.web_session_repository import IWebSessionRepository
from src.domain.entities import WebSession


class WebSessionRepository(IWebSessionRepository):
    """Web session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @storage_retry
    async def create(self, web_session: WebSession) -> WebSession:
        """Insert a new session"""
        self.session.add(web_session)
        await self.session.flush()
        await self.session.refresh(web_session)
        return web_session

    @storage_retry
    async def get_live_by_session_id(
        self, session_id: str, now: datetime
    ) -> Optional[WebSession]:
        """Get an unexpired session by its public session_id"""
        stmt = (
            select(WebSession)
            .where(WebSession.session_id == session_id, WebSession.expires_at > now)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    @storage_retry
    async def find_live_for_device(
        self,
        teacher_id: UUID,
        device_id: str,
        now: datetime,
        exclude_session_id: Optional[str] = None,
    ) -> Optional[WebSession]:
        """Find an active, unexpired session bound to the teacher and device"""
        stmt = select(WebSession).where(
            WebSession.teacher_id == teacher_id,
            WebSession.device_id == device_id,
            WebSession.is_active == True,  # noqa: E712
            WebSession.expires_at > now,
        )
        if exclude_session_id is not None:
            stmt = stmt.where(WebSession.session_id != exclude_session_id)
        # Oldest first so repeated rescans keep converging on the same session
        stmt = stmt.order_by(WebSession.created_at).limit(1)
        result = await self.session.exec(stmt.execution_options(populate_existing=True))
        return result.first()

    @storage_retry
    async def activate(
        self,
        session_id: str,
        teacher_id: UUID,
        device_id: str,
        ip_address: str,
        user_agent: str,
        now: datetime,
    ) -> bool:
        """Bind and activate the session in a single conditional UPDATE"""
        stmt = (
            update(WebSession)
            .where(WebSession.session_id == session_id, WebSession.expires_at > now)
            .values(
                teacher_id=teacher_id,
                is_active=True,
                device_id=device_id,
                ip_address=ip_address,
                user_agent=user_agent,
                last_activity_at=now,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    @storage_retry
    async def touch(
        self, session_id: str, ip_address: str, user_agent: str, now: datetime
    ) -> bool:
        """Refresh activity and client metadata without touching the binding"""
        stmt = (
            update(WebSession)
            .where(WebSession.session_id == session_id, WebSession.expires_at > now)
            .values(ip_address=ip_address, user_agent=user_agent, last_activity_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    @storage_retry
    async def get_active_by_teacher_id(
        self, teacher_id: UUID, now: datetime
    ) -> List[WebSession]:
        """Get all active, unexpired sessions of a teacher"""
        stmt = (
            select(WebSession)
            .where(
                WebSession.teacher_id == teacher_id,
                WebSession.is_active == True,  # noqa: E712
                WebSession.expires_at > now,
            )
            .order_by(WebSession.last_activity_at.desc())
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    @storage_retry
    async def get_active_by_teacher_ids(
        self, teacher_ids: List[UUID], now: datetime
    ) -> List[WebSession]:
        """Get all active, unexpired sessions of several teachers"""
        if not teacher_ids:
            return []
        stmt = (
            select(WebSession)
            .where(
                WebSession.teacher_id.in_(teacher_ids),
                WebSession.is_active == True,  # noqa: E712
                WebSession.expires_at > now,
            )
            .order_by(WebSession.last_activity_at.desc())
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    @storage_retry
    async def expire(self, session_id: str, now: datetime) -> bool:
        """End an unexpired session by moving expires_at to now"""
        stmt = (
            update(WebSession)
            .where(WebSession.session_id == session_id, WebSession.expires_at > now)
            .values(expires_at=now, last_activity_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    @storage_retry
    async def expire_for_teacher_tenant(
        self, teacher_id: UUID, tenant_id: UUID, now: datetime
    ) -> int:
        """Deactivate and expire the teacher's live sessions on one tenant"""
        stmt = (
            update(WebSession)
            .where(
                WebSession.teacher_id == teacher_id,
                WebSession.tenant_id == tenant_id,
                WebSession.is_active == True,  # noqa: E712
                WebSession.expires_at > now,
            )
            .values(is_active=False, expires_at=now, last_activity_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    @storage_retry
    async def delete_expired(self, now: datetime) -> int:
        """Physically remove sessions whose expires_at has passed"""
        stmt = delete(WebSession).where(WebSession.expires_at <= now)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
