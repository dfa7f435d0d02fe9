"""Tests for the Supabase client singleton."""

from unittest.mock import patch

import pytest

from mindful.db import client as db_client


@pytest.fixture(autouse=True)
def fresh_client():
    db_client.reset_client()
    yield
    db_client.reset_client()


def test_client_is_singleton(mock_supabase):
    with patch("mindful.db.client.create_client", return_value=mock_supabase) as create:
        first = db_client.get_client()
        second = db_client.get_client()

    assert first is second is mock_supabase
    create.assert_called_once_with("https://test.supabase.co", "test-anon-key-not-real")


def test_unconfigured_supabase_raises():
    with patch.object(db_client.settings, "_instance") as fake_settings:
        fake_settings.supabase_configured = False
        with pytest.raises(RuntimeError):
            db_client.get_client()
