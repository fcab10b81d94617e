"""
Admin module.

Decides who is an administrator and stores site-wide settings.

Public API:
- AdminAccessGate: Allow-list check with a bounded identity lookup
- IIdentityProvider / SupabaseIdentityProvider: Identity sources
- ISiteSettingsService: Site settings
"""

from .interfaces import IIdentityProvider, ISiteSettingsService
from .models import (
    AdminIdentity,
    IdentityUser,
    IdentitySession,
    UserLookup,
    SiteSetting,
)
from .gate import AdminAccessGate, normalize_admin_emails
from .identity import SupabaseIdentityProvider, extract_cookie_token
from .exceptions import MissingSettingKeyError

__all__ = [
    # Interfaces
    "IIdentityProvider",
    "ISiteSettingsService",
    # Models
    "AdminIdentity",
    "IdentityUser",
    "IdentitySession",
    "UserLookup",
    "SiteSetting",
    # Gate
    "AdminAccessGate",
    "normalize_admin_emails",
    "SupabaseIdentityProvider",
    "extract_cookie_token",
    # Exceptions
    "MissingSettingKeyError",
]
