"""
Admin module interfaces.

The access gate depends on IIdentityProvider only, so it can be driven by
Supabase Auth in production and by an in-memory fake in tests.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import IdentitySession, SiteSetting, UserLookup


@runtime_checkable
class IIdentityProvider(Protocol):
    """Source of the current caller's identity."""

    async def get_user(self) -> UserLookup:
        """
        Resolve the current user.

        Expected failures (bad or expired token) are returned as
        ``UserLookup(error=...)``. Anything else may raise.
        """
        ...

    async def get_session(self) -> Optional[IdentitySession]:
        """The current session, or None when there is none."""
        ...


@runtime_checkable
class ISiteSettingsService(Protocol):
    """Interface for site-wide key/value settings."""

    async def list_settings(self) -> list[SiteSetting]:
        """All settings ordered by key."""
        ...

    async def upsert_setting(self, key: Optional[str], value: Any) -> SiteSetting:
        """
        Create or replace a setting.

        Raises:
            MissingSettingKeyError: If the key is empty
        """
        ...
