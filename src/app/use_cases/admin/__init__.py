"""Admin use cases for system administration operations."""

from .purge_expired_sessions_use_case import (
    PurgeExpiredSessionsUseCase,
    PurgeExpiredSessionsResponse,
)
from .remove_tenant_membership_use_case import (
    RemoveTenantMembershipUseCase,
    RemoveTenantMembershipResponse,
)

__all__ = [
    "PurgeExpiredSessionsUseCase",
    "PurgeExpiredSessionsResponse",
    "RemoveTenantMembershipUseCase",
    "RemoveTenantMembershipResponse",
]
