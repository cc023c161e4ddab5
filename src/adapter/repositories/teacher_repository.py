from typing import List, Optional
from uuid import UUID, uuid4

from sqlalchemy import delete, func
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.storage_retry import storage_retry
from src.app.repositories.teacher_repository import ITeacherRepository
from src.domain.base import utcnow
from src.domain.entities import Teacher, TeacherTenant

# Dialects with a native INSERT ... ON CONFLICT DO NOTHING
_UPSERT_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


class TeacherRepository(ITeacherRepository):
    """Teacher repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @storage_retry
    async def get_by_id(self, teacher_id: UUID) -> Optional[Teacher]:
        """Get teacher by ID"""
        stmt = select(Teacher).where(Teacher.id == teacher_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    @storage_retry
    async def find_by_external_id(self, external_id: str) -> Optional[Teacher]:
        """Get teacher by external ID, ignoring case"""
        stmt = select(Teacher).where(
            func.lower(Teacher.external_id) == external_id.strip().lower()
        )
        result = await self.session.exec(stmt)
        return result.first()

    @storage_retry
    async def create(self, teacher: Teacher) -> Teacher:
        """Create a new teacher"""
        self.session.add(teacher)
        await self.session.flush()
        await self.session.refresh(teacher)
        return teacher

    @storage_retry
    async def get_tenant_ids(self, teacher_id: UUID) -> List[UUID]:
        """Get the tenants a teacher belongs to, oldest first"""
        stmt = (
            select(TeacherTenant.tenant_id)
            .where(TeacherTenant.teacher_id == teacher_id)
            .order_by(TeacherTenant.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    @storage_retry
    async def get_ids_by_tenant_id(self, tenant_id: UUID) -> List[UUID]:
        """Get the IDs of all teachers belonging to a tenant"""
        stmt = select(TeacherTenant.teacher_id).where(TeacherTenant.tenant_id == tenant_id)
        result = await self.session.exec(stmt)
        return list(result.all())

    @storage_retry
    async def add_tenant_membership(self, teacher_id: UUID, tenant_id: UUID) -> bool:
        """
        Insert the (teacher, tenant) pair unless it already exists.

        The unique index on (teacher_id, tenant_id) decides; concurrent claims
        for the same teacher cannot produce a duplicate row.
        """
        values = {
            "id": uuid4(),
            "teacher_id": teacher_id,
            "tenant_id": tenant_id,
            "created_at": utcnow(),
        }
        dialect_insert = _UPSERT_INSERTS.get(self.session.bind.dialect.name)

        if dialect_insert is not None:
            stmt = (
                dialect_insert(TeacherTenant.__table__)
                .values(**values)
                .on_conflict_do_nothing(index_elements=["teacher_id", "tenant_id"])
            )
            result = await self.session.execute(stmt)
            return result.rowcount > 0

        # Other backends: let the unique index reject the duplicate inside a savepoint
        try:
            async with self.session.begin_nested():
                self.session.add(TeacherTenant(**values))
        except IntegrityError:
            return False
        return True

    @storage_retry
    async def remove_tenant_membership(self, teacher_id: UUID, tenant_id: UUID) -> bool:
        """Remove a membership"""
        stmt = delete(TeacherTenant).where(
            TeacherTenant.teacher_id == teacher_id, TeacherTenant.tenant_id == tenant_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
