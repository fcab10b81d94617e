"""
Admin module data models.
"""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, Field


class IdentityUser(BaseModel):
    """User as reported by the identity provider."""

    id: str
    email: Optional[str] = None
    email_confirmed_at: Optional[datetime] = None
    last_sign_in_at: Optional[datetime] = None


class IdentitySession(BaseModel):
    """Current session as reported by the identity provider."""

    access_token: Optional[str] = None
    user: Optional[IdentityUser] = None


class UserLookup(BaseModel):
    """Outcome of an identity lookup: a user, an error, or neither."""

    user: Optional[IdentityUser] = None
    error: Optional[str] = None


class AdminIdentity(BaseModel):
    """
    Result of an admin access check. Derived, never stored.

    ``user`` is only populated when ``is_admin`` is true; ``error`` is
    None only on success.
    """

    is_admin: bool = False
    user: Optional[IdentityUser] = None
    error: Optional[str] = None


class AdminCheckUser(BaseModel):
    email: Optional[str] = None


class AdminCheckResponse(BaseModel):
    """Response of GET /api/admin/check."""

    is_admin: bool
    user: Optional[AdminCheckUser] = None
    error: Optional[str] = None


# -----------------------------------------------------------------------------
# Site settings
# -----------------------------------------------------------------------------


class SiteSetting(BaseModel):
    """A key/value row of the ``site_settings`` table."""

    key: str
    value: Any = None
    updated_at: Optional[datetime] = None


class UpsertSiteSettingRequest(BaseModel):
    key: Optional[str] = Field(None, description="Setting key")
    value: Any = Field(None, description="JSON value")


class SiteSettingsResponse(BaseModel):
    settings: list[SiteSetting]
