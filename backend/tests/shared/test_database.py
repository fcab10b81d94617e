"""Tests for shared/database.py."""

import pytest
from unittest.mock import patch, MagicMock

from shared.database import (
    get_supabase_anon_client,
    get_supabase_client,
    reset_client_cache,
)


class TestSupabaseClient:
    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_creates_and_caches_client(self, mock_settings, mock_create):
        """Should create the service client once."""
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_service_role_key = "test-key"
        mock_create.return_value = MagicMock()

        client1 = get_supabase_client()
        client2 = get_supabase_client()

        mock_create.assert_called_once_with("https://test.supabase.co", "test-key")
        assert client1 is client2

    @pytest.mark.parametrize("url, key", [("", ""), ("", "test-key"), ("https://test.supabase.co", "")])
    @patch("shared.database.get_settings")
    def test_raises_without_config(self, mock_settings, url, key):
        mock_settings.return_value.supabase_url = url
        mock_settings.return_value.supabase_service_role_key = key

        with pytest.raises(RuntimeError, match="configuration missing"):
            get_supabase_client()


class TestSupabaseAnonClient:
    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_uses_anon_key(self, mock_settings, mock_create):
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_anon_key = "anon-key"
        mock_settings.return_value.supabase_service_role_key = "service-key"
        mock_create.side_effect = [MagicMock(name="anon"), MagicMock(name="service")]

        anon = get_supabase_anon_client()
        service = get_supabase_client()

        assert mock_create.call_args_list[0].args == ("https://test.supabase.co", "anon-key")
        assert anon is not service
        assert get_supabase_anon_client() is anon

    @patch("shared.database.get_settings")
    def test_raises_without_config(self, mock_settings):
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_anon_key = ""

        with pytest.raises(RuntimeError, match="SUPABASE_ANON_KEY"):
            get_supabase_anon_client()


class TestResetClientCache:
    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_reset_client_cache(self, mock_settings, mock_create):
        """Should reset the cache and allow new client creation."""
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_service_role_key = "test-key"
        mock_create.side_effect = [MagicMock(name="client1"), MagicMock(name="client2")]

        client1 = get_supabase_client()
        reset_client_cache()
        client2 = get_supabase_client()

        assert mock_create.call_count == 2
        assert client1 is not client2
