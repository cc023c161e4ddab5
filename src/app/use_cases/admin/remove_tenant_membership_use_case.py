"""
Use Case: Remove Tenant Membership

Detaches a teacher from a tenant and ends the teacher's active sessions
that were claimed under that tenant.
"""

import logging
from datetime import datetime
from typing import Callable
from uuid import UUID

from pydantic import BaseModel

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow

logger = logging.getLogger(__name__)


class RemoveTenantMembershipResponse(BaseModel):
    """Response DTO for RemoveTenantMembershipUseCase"""

    status: str
    teacher_id: str
    external_id: str
    tenant_id: str
    remaining_tenant_ids: list[str]
    sessions_expired: int = 0


class RemoveTenantMembershipUseCase:
    """
    Remove one (teacher, tenant) association.

    Business Logic:
    1. Resolve the teacher by external identifier (case-insensitive)
    2. Delete the association if present
    3. Expire the teacher's live sessions scoped to the tenant
    4. Return the teacher's remaining tenants
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utcnow):
        self.uow = uow
        self.clock = clock

    async def execute(
        self, external_id: str, tenant_id: UUID
    ) -> Result[RemoveTenantMembershipResponse]:
        """
        Execute remove tenant membership use case.

        Errors:
            - SUBJECT_NOT_FOUND: No teacher with that external identifier
            - MEMBERSHIP_NOT_FOUND: Teacher is not associated with the tenant
        """
        now = self.clock()
        async with self.uow:
            teacher = await self.uow.teachers.find_by_external_id(external_id)
            if teacher is None:
                return Return.err(Error("SUBJECT_NOT_FOUND", "Teacher not found"))

            removed = await self.uow.teachers.remove_tenant_membership(teacher.id, tenant_id)
            if not removed:
                return Return.err(
                    Error(
                        "MEMBERSHIP_NOT_FOUND",
                        "Teacher is not associated with this tenant",
                        reason=f"teacher={teacher.external_id} tenant={tenant_id}",
                    )
                )

            expired = await self.uow.web_sessions.expire_for_teacher_tenant(
                teacher.id, tenant_id, now
            )
            await self.uow.commit()
            remaining = await self.uow.teachers.get_tenant_ids(teacher.id)

            response = RemoveTenantMembershipResponse(
                status="removed",
                teacher_id=str(teacher.id),
                external_id=teacher.external_id,
                tenant_id=str(tenant_id),
                remaining_tenant_ids=[str(t) for t in remaining],
                sessions_expired=expired,
            )

        logger.info(
            f"Removed teacher {response.external_id} from tenant {tenant_id}, "
            f"expired {expired} session(s)"
        )
        return Return.ok(response)
