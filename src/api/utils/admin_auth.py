"""
Service key authentication

The billing integration and the sweep scheduler call the /admin routes with
a shared key in the X-Admin-API-Key header. End users never hold this key.
"""

import secrets

from fastapi import Header, status
from libs.result import Error
from src.api.error import ClientError
from config import ApplicationConfig


async def verify_admin_api_key(x_admin_api_key: str = Header(None)) -> bool:
    """
    Reject service calls without a matching X-Admin-API-Key.

    Raises:
        ClientError: 401 UNAUTHORIZED when the header is absent,
            401 INVALID_API_KEY when it does not match
    """
    if not x_admin_api_key:
        raise ClientError(
            Error("UNAUTHORIZED", "Service API key required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    if not secrets.compare_digest(
        x_admin_api_key.encode(), str(ApplicationConfig.ADMIN_API_KEY).encode()
    ):
        raise ClientError(
            Error("INVALID_API_KEY", "Invalid service API key"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return True
