"""
Admin API Key Authentication

Validates admin API keys for maintenance and tenant administration endpoints.
"""

from fastapi import Header, status
from src.libs.result import Error
from src.api.error import ClientError
from config import ApplicationConfig


async def verify_admin_api_key(x_admin_api_key: str = Header(None)):
    """
    Verify admin API key from X-Admin-API-Key header.

    Service-to-service auth, separate from teacher assertions. When no
    ADMIN_API_KEY is configured every admin request is refused.

    Raises:
        ClientError: 401 if key is missing or invalid, 503 if admin access is disabled
    """
    valid_admin_key = ApplicationConfig.ADMIN_API_KEY
    if not valid_admin_key:
        raise ClientError(
            Error("ADMIN_DISABLED", "Admin API is not configured"),
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    if not x_admin_api_key:
        raise ClientError(
            Error("UNAUTHORIZED", "Admin API key required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    if x_admin_api_key != valid_admin_key:
        raise ClientError(
            Error("INVALID_API_KEY", "Invalid admin API key"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return True
