"""
Identity providers backed by Supabase Auth.

The server never trusts a client-side admin check: each admin request
carries its own access token (bearer header, or the Supabase session
cookie) which is resolved here through ``auth.get_user(jwt)``.
"""

import asyncio
import json
import logging
from typing import Any, Mapping, Optional

from supabase import AuthError, Client

from .interfaces import IIdentityProvider
from .models import IdentitySession, IdentityUser, UserLookup

logger = logging.getLogger(__name__)

SESSION_COOKIE_PREFIX = "sb-"
SESSION_COOKIE_SUFFIX = "-auth-token"


def extract_cookie_token(cookies: Mapping[str, str]) -> Optional[str]:
    """
    Find the access token in a Supabase session cookie.

    The cookie is named ``sb-<project>-auth-token`` and holds a JSON object
    with ``access_token`` (or ``token``). Returns None if there is no such
    cookie or it cannot be parsed.
    """
    for name, value in cookies.items():
        if not (name.startswith(SESSION_COOKIE_PREFIX) and name.endswith(SESSION_COOKIE_SUFFIX)):
            continue
        try:
            session = json.loads(value)
        except (TypeError, ValueError):
            logger.debug(f"Unparseable session cookie: {name}")
            return None
        if not isinstance(session, dict):
            return None
        return session.get("access_token") or session.get("token")
    return None


def _to_identity_user(user: Any) -> IdentityUser:
    return IdentityUser(
        id=str(user.id),
        email=getattr(user, "email", None),
        email_confirmed_at=getattr(user, "email_confirmed_at", None),
        last_sign_in_at=getattr(user, "last_sign_in_at", None),
    )


class SupabaseIdentityProvider(IIdentityProvider):
    """
    Resolves a bearer access token through Supabase Auth.

    The Supabase client is synchronous, so lookups run in a worker thread.
    """

    def __init__(self, client: Client, access_token: Optional[str]):
        self._client = client
        self._access_token = access_token

    async def get_user(self) -> UserLookup:
        if not self._access_token:
            return UserLookup(error="No token")

        try:
            response = await asyncio.to_thread(self._client.auth.get_user, self._access_token)
        except AuthError as e:
            logger.info(f"Token rejected by Supabase Auth: {e}")
            return UserLookup(error=str(e) or "Unauthorized")

        if response is None or response.user is None:
            return UserLookup(error="Unauthorized")

        return UserLookup(user=_to_identity_user(response.user))

    async def get_session(self) -> Optional[IdentitySession]:
        if not self._access_token:
            return None
        return IdentitySession(access_token=self._access_token)
