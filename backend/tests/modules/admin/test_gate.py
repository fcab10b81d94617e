"""Tests for the admin access gate."""

import asyncio

import pytest
from unittest.mock import AsyncMock

from modules.admin.gate import (
    AdminAccessGate,
    ERROR_ACCESS_DENIED,
    ERROR_NOT_AUTHENTICATED,
    ERROR_TIMEOUT,
    ERROR_UNKNOWN,
    normalize_admin_emails,
)
from modules.admin.models import IdentitySession

from tests.conftest import ADMIN_EMAIL, StubIdentityProvider


class SlowIdentityProvider(StubIdentityProvider):
    """Provider whose lookup never finishes in time."""

    def __init__(self):
        super().__init__()
        self.cancelled = False

    async def get_user(self):
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return await super().get_user()


class TestNormalizeAdminEmails:
    def test_comma_separated(self):
        assert normalize_admin_emails(" A@x.com ,b@X.com,, ") == frozenset({"a@x.com", "b@x.com"})

    def test_list(self):
        assert normalize_admin_emails(["A@x.com", "  ", ""]) == frozenset({"a@x.com"})

    @pytest.mark.parametrize("raw", [None, "", " , "])
    def test_empty(self, raw):
        assert normalize_admin_emails(raw) == frozenset()


class TestIsAdminEmail:
    def test_case_and_whitespace_insensitive(self):
        gate = AdminAccessGate(StubIdentityProvider(), "Admin@CandleTime.test")
        assert gate.is_admin_email("  admin@candletime.TEST ") is True

    @pytest.mark.parametrize("email", [None, "", "other@candletime.test"])
    def test_not_admin(self, email):
        gate = AdminAccessGate(StubIdentityProvider(), ADMIN_EMAIL)
        assert gate.is_admin_email(email) is False


class TestCheckAdminAccess:
    @pytest.mark.asyncio
    async def test_admin(self):
        gate = AdminAccessGate(StubIdentityProvider(email="ADMIN@candletime.test "), ADMIN_EMAIL)

        identity = await gate.check_admin_access()

        assert identity.is_admin is True
        assert identity.error is None
        assert identity.user.id == "admin-1"

    @pytest.mark.asyncio
    async def test_not_on_allow_list(self):
        gate = AdminAccessGate(StubIdentityProvider(email="user@example.com"), ADMIN_EMAIL)

        identity = await gate.check_admin_access()

        assert identity.is_admin is False
        assert identity.user is None
        assert identity.error == ERROR_ACCESS_DENIED

    @pytest.mark.asyncio
    async def test_lookup_error(self):
        gate = AdminAccessGate(StubIdentityProvider(error="invalid JWT"), ADMIN_EMAIL)

        identity = await gate.check_admin_access()

        assert identity.is_admin is False
        assert identity.error == ERROR_NOT_AUTHENTICATED

    @pytest.mark.asyncio
    async def test_no_user(self):
        gate = AdminAccessGate(StubIdentityProvider(email=None), ADMIN_EMAIL)
        assert (await gate.check_admin_access()).error == ERROR_NOT_AUTHENTICATED

    @pytest.mark.asyncio
    async def test_empty_allow_list_denies_everyone(self):
        gate = AdminAccessGate(StubIdentityProvider(), "")
        assert (await gate.check_admin_access()).error == ERROR_ACCESS_DENIED

    @pytest.mark.asyncio
    async def test_timeout_cancels_lookup(self):
        provider = SlowIdentityProvider()
        gate = AdminAccessGate(provider, ADMIN_EMAIL, timeout=0.01)

        identity = await gate.check_admin_access()

        assert identity.is_admin is False
        assert identity.error == ERROR_TIMEOUT
        assert provider.cancelled is True

    @pytest.mark.asyncio
    async def test_unexpected_exception(self):
        provider = AsyncMock()
        provider.get_user.side_effect = RuntimeError("connection reset")
        gate = AdminAccessGate(provider, ADMIN_EMAIL)

        identity = await gate.check_admin_access()

        assert identity.is_admin is False
        assert identity.error == "connection reset"

    @pytest.mark.asyncio
    async def test_exception_without_message(self):
        provider = AsyncMock()
        provider.get_user.side_effect = RuntimeError()
        gate = AdminAccessGate(provider, ADMIN_EMAIL)

        assert (await gate.check_admin_access()).error == ERROR_UNKNOWN


class TestGetAuthToken:
    @pytest.mark.asyncio
    async def test_session_token(self):
        provider = AsyncMock()
        provider.get_session.return_value = IdentitySession(access_token="abc")
        gate = AdminAccessGate(provider, ADMIN_EMAIL)

        assert await gate.get_auth_token() == "abc"

    @pytest.mark.asyncio
    async def test_no_session(self):
        gate = AdminAccessGate(StubIdentityProvider(), ADMIN_EMAIL)
        assert await gate.get_auth_token() is None

    @pytest.mark.asyncio
    async def test_session_without_token(self):
        provider = AsyncMock()
        provider.get_session.return_value = IdentitySession(access_token=None)
        gate = AdminAccessGate(provider, ADMIN_EMAIL)

        assert await gate.get_auth_token() is None

    @pytest.mark.asyncio
    async def test_lookup_failure(self):
        provider = AsyncMock()
        provider.get_session.side_effect = RuntimeError("boom")
        gate = AdminAccessGate(provider, ADMIN_EMAIL)

        assert await gate.get_auth_token() is None

    @pytest.mark.asyncio
    async def test_does_not_check_admin_status(self):
        provider = AsyncMock()
        provider.get_session.return_value = IdentitySession(access_token="user-token")
        gate = AdminAccessGate(provider, "")

        assert await gate.get_auth_token() == "user-token"
        provider.get_user.assert_not_called()
