from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Teacher


class ITeacherRepository(ABC):
    """Teacher repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, teacher_id: UUID) -> Optional[Teacher]:
        """Get teacher by ID"""
        pass

    @abstractmethod
    async def find_by_external_id(self, external_id: str) -> Optional[Teacher]:
        """Get teacher by external ID (case-insensitive exact match)"""
        pass

    @abstractmethod
    async def create(self, teacher: Teacher) -> Teacher:
        """Create a new teacher"""
        pass

    @abstractmethod
    async def get_tenant_ids(self, teacher_id: UUID) -> List[UUID]:
        """Get the tenants a teacher belongs to, oldest first"""
        pass

    @abstractmethod
    async def get_ids_by_tenant_id(self, tenant_id: UUID) -> List[UUID]:
        """Get the IDs of all teachers belonging to a tenant"""
        pass

    @abstractmethod
    async def add_tenant_membership(self, teacher_id: UUID, tenant_id: UUID) -> bool:
        """Idempotent set-insert. Returns False when the membership already existed."""
        pass

    @abstractmethod
    async def remove_tenant_membership(self, teacher_id: UUID, tenant_id: UUID) -> bool:
        """Remove a membership. Returns False when there was none."""
        pass
