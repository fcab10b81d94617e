"""
Admin access gate.

Answers "is the current caller an administrator" from the identity
provider and an email allow-list, within a bounded time. The gate never
raises: every outcome is an AdminIdentity.
"""

import asyncio
import logging
from typing import Iterable, Optional, Union

from .interfaces import IIdentityProvider
from .models import AdminIdentity

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 3.0

ERROR_TIMEOUT = "Timeout"
ERROR_NOT_AUTHENTICATED = "Not authenticated"
ERROR_ACCESS_DENIED = "Access denied"
ERROR_UNKNOWN = "Unknown error"


def normalize_admin_emails(raw: Union[str, Iterable[str], None]) -> frozenset[str]:
    """
    Normalize an admin allow-list.

    Accepts the comma-separated configuration value or any iterable of
    emails. Entries are stripped and lower-cased; blanks are dropped.

    Example:
        >>> sorted(normalize_admin_emails(" Admin@Example.com ,, ops@example.com"))
        ['admin@example.com', 'ops@example.com']
    """
    if raw is None:
        return frozenset()
    if isinstance(raw, str):
        raw = raw.split(",")
    return frozenset(email.strip().lower() for email in raw if email and email.strip())


class AdminAccessGate:
    """
    Checks the caller against the admin allow-list.

    Args:
        identity_provider: Source of the current user and session
        admin_emails: Allow-list (raw configuration string or list)
        timeout: Seconds to wait for the identity lookup
    """

    def __init__(
        self,
        identity_provider: IIdentityProvider,
        admin_emails: Union[str, Iterable[str], None],
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self._provider = identity_provider
        self._admin_emails = normalize_admin_emails(admin_emails)
        self._timeout = timeout

    @property
    def admin_emails(self) -> frozenset[str]:
        return self._admin_emails

    def is_admin_email(self, email: Optional[str]) -> bool:
        """Case-insensitive allow-list match, ignoring surrounding whitespace."""
        if not email:
            return False
        return email.strip().lower() in self._admin_emails

    async def check_admin_access(self) -> AdminIdentity:
        """
        Decide whether the current caller is an admin.

        The identity lookup is cancelled if it does not finish within the
        timeout. Outcomes:
            - lookup too slow: error "Timeout"
            - lookup failed or no user: error "Not authenticated"
            - email on the allow-list: admin, user populated
            - otherwise: error "Access denied"
            - unexpected exception: its message (or "Unknown error")
        """
        try:
            lookup = await asyncio.wait_for(self._provider.get_user(), timeout=self._timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Admin check timed out after {self._timeout}s")
            return AdminIdentity(is_admin=False, error=ERROR_TIMEOUT)
        except Exception as e:
            logger.error(f"Error checking admin access: {e}")
            return AdminIdentity(is_admin=False, error=str(e) or ERROR_UNKNOWN)

        if lookup.error or lookup.user is None:
            return AdminIdentity(is_admin=False, error=ERROR_NOT_AUTHENTICATED)

        if self.is_admin_email(lookup.user.email):
            return AdminIdentity(is_admin=True, user=lookup.user)

        return AdminIdentity(is_admin=False, user=None, error=ERROR_ACCESS_DENIED)

    async def get_auth_token(self) -> Optional[str]:
        """
        Access token of the current session.

        Returns None when there is no session, the session has no token, or
        the lookup fails. Admin status is not checked.
        """
        try:
            session = await self._provider.get_session()
        except Exception as e:
            logger.warning(f"Session lookup failed: {e}")
            return None

        if session is None or not session.access_token:
            return None
        return session.access_token
