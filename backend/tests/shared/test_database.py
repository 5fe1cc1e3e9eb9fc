"""Tests for shared/database.py."""

import pytest
from unittest.mock import patch, MagicMock

from shared.database import get_supabase_client, reset_client_cache


class TestSupabaseClient:
    def setup_method(self):
        """Reset cache before each test."""
        reset_client_cache()

    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_creates_client_with_anon_key(self, mock_settings, mock_create):
        """Should create client with the anon key."""
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_anon_key = "test-anon-key"
        mock_create.return_value = MagicMock()

        client = get_supabase_client()

        mock_create.assert_called_once_with("https://test.supabase.co", "test-anon-key")
        assert client is mock_create.return_value

    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_caches_client(self, mock_settings, mock_create):
        """Should cache the client and not recreate it."""
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_anon_key = "test-anon-key"
        mock_create.return_value = MagicMock()

        assert get_supabase_client() is get_supabase_client()
        mock_create.assert_called_once()

    @pytest.mark.parametrize(
        "url,key",
        [("", ""), ("", "test-anon-key"), ("https://test.supabase.co", "")],
    )
    @patch("shared.database.get_settings")
    def test_raises_without_config(self, mock_settings, url, key):
        """Should raise if URL or key is missing."""
        mock_settings.return_value.supabase_url = url
        mock_settings.return_value.supabase_anon_key = key

        with pytest.raises(RuntimeError, match="configuration missing"):
            get_supabase_client()


class TestResetClientCache:
    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_reset_creates_new_client(self, mock_settings, mock_create):
        """After reset, a new client should be created."""
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_anon_key = "test-anon-key"
        mock_create.side_effect = [MagicMock(), MagicMock()]

        first = get_supabase_client()
        reset_client_cache()
        second = get_supabase_client()

        assert first is not second
        assert mock_create.call_count == 2
