"""
Use Cases

Organized into domain folders:
- handshake/: QR session create, claim and poll
- sessions/: Session listing, verification and disconnect
- admin/: Maintenance and tenant administration

Import from subdirectories for better organization.
"""

from .handshake import (
    CreateSessionUseCase,
    ClaimSessionUseCase,
    PollSessionUseCase,
)
from .sessions import ManageSessionsUseCase
from .admin import (
    PurgeExpiredSessionsUseCase,
    RemoveTenantMembershipUseCase,
)

__all__ = [
    # Handshake
    "CreateSessionUseCase",
    "ClaimSessionUseCase",
    "PollSessionUseCase",
    # Sessions
    "ManageSessionsUseCase",
    # Admin
    "PurgeExpiredSessionsUseCase",
    "RemoveTenantMembershipUseCase",
]
