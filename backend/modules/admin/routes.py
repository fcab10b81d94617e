"""
Admin API endpoints: access check and site settings.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials

from api.dependencies import get_admin_gate_factory, get_site_settings_service
from api.middleware.admin import GateFactory, require_admin, status_for_identity
from api.middleware.auth import bearer_scheme

from .identity import extract_cookie_token
from .interfaces import ISiteSettingsService
from .models import (
    AdminCheckResponse,
    AdminCheckUser,
    IdentityUser,
    SiteSetting,
    SiteSettingsResponse,
    UpsertSiteSettingRequest,
)
from .exceptions import MissingSettingKeyError

router = APIRouter()


@router.get("/check", response_model=AdminCheckResponse)
async def check_admin(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    gate_factory: GateFactory = Depends(get_admin_gate_factory),
):
    """
    Check whether the caller is an admin.

    The token is taken from the bearer header, falling back to the
    Supabase session cookie (``sb-<project>-auth-token``).
    """
    token = credentials.credentials if credentials else extract_cookie_token(request.cookies)
    if not token:
        return JSONResponse(
            status_code=401,
            content=AdminCheckResponse(is_admin=False, error="No session").model_dump(),
        )

    identity = await gate_factory(token).check_admin_access()

    if identity.is_admin and identity.user is not None:
        return AdminCheckResponse(is_admin=True, user=AdminCheckUser(email=identity.user.email))

    status_code = status_for_identity(identity)
    if status_code == 403:
        # A signed-in non-admin gets a plain negative answer
        return AdminCheckResponse(is_admin=False, error=identity.error)

    return JSONResponse(
        status_code=status_code,
        content=AdminCheckResponse(is_admin=False, error=identity.error).model_dump(),
    )


@router.get("/settings", response_model=SiteSettingsResponse)
async def list_settings(
    admin: IdentityUser = Depends(require_admin),
    service: ISiteSettingsService = Depends(get_site_settings_service),
) -> SiteSettingsResponse:
    return SiteSettingsResponse(settings=await service.list_settings())


@router.put("/settings", response_model=SiteSetting)
async def upsert_setting(
    request: UpsertSiteSettingRequest,
    admin: IdentityUser = Depends(require_admin),
    service: ISiteSettingsService = Depends(get_site_settings_service),
) -> SiteSetting:
    """Create or replace a site setting."""
    try:
        return await service.upsert_setting(request.key, request.value)
    except MissingSettingKeyError:
        raise HTTPException(status_code=400, detail="Key is required")
