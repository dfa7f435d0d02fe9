"""Supabase access for MindfulAI."""

from .client import get_client, reset_client

__all__ = ["get_client", "reset_client"]
