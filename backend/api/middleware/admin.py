"""
Admin authorization middleware.

Every admin endpoint re-validates the caller on the server: bearer token,
identity lookup through Supabase Auth, then allow-list match.
"""

from typing import Callable, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials

from api.dependencies import get_admin_gate_factory
from modules.admin.gate import (
    AdminAccessGate,
    ERROR_ACCESS_DENIED,
    ERROR_NOT_AUTHENTICATED,
    ERROR_TIMEOUT,
)
from modules.admin.models import AdminIdentity, IdentityUser

from .auth import bearer_scheme

GateFactory = Callable[[Optional[str]], AdminAccessGate]

ADMIN_ERROR_STATUS = {
    ERROR_NOT_AUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ERROR_ACCESS_DENIED: status.HTTP_403_FORBIDDEN,
    ERROR_TIMEOUT: status.HTTP_504_GATEWAY_TIMEOUT,
}


def status_for_identity(identity: AdminIdentity) -> int:
    """HTTP status for a failed admin check."""
    return ADMIN_ERROR_STATUS.get(identity.error, status.HTTP_401_UNAUTHORIZED)


async def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    gate_factory: GateFactory = Depends(get_admin_gate_factory),
) -> IdentityUser:
    """
    Dependency that requires an admin caller.

    Usage:
        @router.get("/admin-only")
        async def admin_route(admin: IdentityUser = Depends(require_admin)):
            return {"email": admin.email}
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    identity = await gate_factory(credentials.credentials).check_admin_access()
    if identity.is_admin and identity.user is not None:
        return identity.user

    raise HTTPException(
        status_code=status_for_identity(identity),
        detail=identity.error or "Unauthorized",
    )
