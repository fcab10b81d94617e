"""Tests for Supabase-backed identity lookup."""

import json

import pytest
from types import SimpleNamespace
from unittest.mock import MagicMock

from supabase import AuthError

from modules.admin.identity import SupabaseIdentityProvider, extract_cookie_token


class TestExtractCookieToken:
    def test_access_token(self):
        cookies = {"sb-abcd-auth-token": json.dumps({"access_token": "tok-1"})}
        assert extract_cookie_token(cookies) == "tok-1"

    def test_token_field(self):
        cookies = {"sb-abcd-auth-token": json.dumps({"token": "tok-2"})}
        assert extract_cookie_token(cookies) == "tok-2"

    def test_ignores_other_cookies(self):
        assert extract_cookie_token({"session": "x", "sb-abcd-other": "{}"}) is None

    @pytest.mark.parametrize("value", ["not json", "[1, 2]", "{}"])
    def test_unusable_cookie(self, value):
        assert extract_cookie_token({"sb-abcd-auth-token": value}) is None


class TestSupabaseIdentityProvider:
    @pytest.mark.asyncio
    async def test_resolves_user(self):
        client = MagicMock()
        client.auth.get_user.return_value = SimpleNamespace(
            user=SimpleNamespace(id="u-1", email="admin@candletime.test")
        )
        provider = SupabaseIdentityProvider(client, "tok-1")

        lookup = await provider.get_user()

        client.auth.get_user.assert_called_once_with("tok-1")
        assert lookup.error is None
        assert lookup.user.email == "admin@candletime.test"

    @pytest.mark.asyncio
    async def test_without_token(self):
        client = MagicMock()
        lookup = await SupabaseIdentityProvider(client, None).get_user()

        assert lookup.user is None
        assert lookup.error
        client.auth.get_user.assert_not_called()

    @pytest.mark.asyncio
    async def test_rejected_token(self):
        client = MagicMock()
        client.auth.get_user.side_effect = AuthError("invalid JWT", None)

        lookup = await SupabaseIdentityProvider(client, "bad").get_user()

        assert lookup.user is None
        assert "invalid JWT" in lookup.error

    @pytest.mark.asyncio
    async def test_no_user_in_response(self):
        client = MagicMock()
        client.auth.get_user.return_value = None

        lookup = await SupabaseIdentityProvider(client, "tok").get_user()
        assert lookup.user is None

    @pytest.mark.asyncio
    async def test_session(self):
        provider = SupabaseIdentityProvider(MagicMock(), "tok-1")
        session = await provider.get_session()
        assert session.access_token == "tok-1"

        assert await SupabaseIdentityProvider(MagicMock(), None).get_session() is None
