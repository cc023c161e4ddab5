"""
Admin API Routes - Maintenance and Tenant Administration

Authentication is via Admin API Key, not teacher assertions.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.api.error import ClientError, ServerError
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import (
    PurgeExpiredSessionsResponse,
    PurgeExpiredSessionsUseCase,
    RemoveTenantMembershipResponse,
    RemoveTenantMembershipUseCase,
)
from src.app.use_cases.sessions import ActiveSessionInfo, ManageSessionsUseCase
from src.depends import get_unit_of_work

router = APIRouter(
    prefix="/admin", tags=["Admin"], dependencies=[Depends(verify_admin_api_key)]
)


@router.get(
    "/tenants/{tenant_id}/sessions",
    status_code=status.HTTP_200_OK,
    response_model=List[ActiveSessionInfo],
)
async def list_tenant_sessions(
    tenant_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Tenant Sessions

    Active web sessions of every teacher associated with the tenant.

    Requires: X-Admin-API-Key header
    """
    use_case = ManageSessionsUseCase(uow)
    result = await use_case.list_tenant_sessions(tenant_id)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.delete(
    "/teachers/{external_id}/tenants/{tenant_id}",
    status_code=status.HTTP_200_OK,
    response_model=RemoveTenantMembershipResponse,
)
async def remove_tenant_membership(
    external_id: str,
    tenant_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Remove Teacher From Tenant

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: SUBJECT_NOT_FOUND, MEMBERSHIP_NOT_FOUND
    """
    use_case = RemoveTenantMembershipUseCase(uow)
    result = await use_case.execute(external_id, tenant_id)

    if result.is_err():
        error = result.error
        if error.code in ("SUBJECT_NOT_FOUND", "MEMBERSHIP_NOT_FOUND"):
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/sessions/purge-expired",
    status_code=status.HTTP_200_OK,
    response_model=PurgeExpiredSessionsResponse,
)
async def purge_expired_sessions(uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Purge Expired Sessions

    Deletes expired web sessions now instead of waiting for the reaper.

    Requires: X-Admin-API-Key header
    """
    use_case = PurgeExpiredSessionsUseCase(uow)
    result = await use_case.execute()

    if result.is_err():
        raise ServerError(result.error)

    return result.value
