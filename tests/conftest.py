"""
Pytest configuration and fixtures for MindfulAI tests.
"""

import asyncio
import os
import pytest
from unittest.mock import MagicMock

# Set test environment before importing mindful modules
os.environ["MINDFUL_ENV"] = "development"
os.environ["SUPABASE_URL"] = "https://test.supabase.co"
os.environ["SUPABASE_ANON_KEY"] = "test-anon-key-not-real"

from onboarding.gateway import AuthSession, IdentityGateway
from onboarding.errors import GatewayFailure


class FakeIdentityGateway(IdentityGateway):
    """
    In-memory IdentityGateway.

    Records every call. Set `*_error` to make a call fail, or `hold` to an
    asyncio.Event to park calls until it is set.
    """

    def __init__(self, account_id: str = "acct-123"):
        self.account_id = account_id
        self.calls: list[tuple] = []
        self.profiles: dict[str, dict] = {}
        self.create_error: Exception | None = None
        self.verify_error: Exception | None = None
        self.persist_error: Exception | None = None
        self.hold: asyncio.Event | None = None

    def count(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)

    async def _maybe_wait(self):
        if self.hold is not None:
            await self.hold.wait()

    async def create_account(self, email, password, metadata):
        self.calls.append(("create_account", email, password, metadata))
        await self._maybe_wait()
        if self.create_error:
            raise self.create_error
        return self.account_id

    async def verify_credentials(self, email, password):
        self.calls.append(("verify_credentials", email, password))
        await self._maybe_wait()
        if self.verify_error:
            raise self.verify_error
        return AuthSession(user_id=self.account_id, email=email, access_token="token-abc")

    async def persist_profile(self, account_id, profile):
        self.calls.append(("persist_profile", account_id, profile))
        if self.persist_error:
            raise self.persist_error
        self.profiles[account_id] = profile.to_row(account_id)


@pytest.fixture
def gateway():
    """Fresh in-memory gateway per test."""
    return FakeIdentityGateway()


@pytest.fixture
def failing_gateway():
    """Gateway whose account creation is rejected."""
    gw = FakeIdentityGateway()
    gw.create_error = GatewayFailure("User already registered")
    gw.verify_error = GatewayFailure("Invalid login credentials")
    return gw


@pytest.fixture
def mock_supabase():
    """Mock Supabase client for unit tests."""
    mock_client = MagicMock()

    # Mock table operations
    mock_table = MagicMock()
    mock_table.select.return_value = mock_table
    mock_table.insert.return_value = mock_table
    mock_table.eq.return_value = mock_table
    mock_table.execute.return_value = MagicMock(data=[])

    mock_client.table.return_value = mock_table

    # Mock auth responses
    mock_client.auth.sign_up.return_value = MagicMock(
        user=MagicMock(id="user-1", email="a@b.com"),
        session=None,
    )
    mock_client.auth.sign_in_with_password.return_value = MagicMock(
        user=MagicMock(id="user-1", email="a@b.com"),
        session=MagicMock(access_token="jwt-token"),
    )

    return mock_client


@pytest.fixture
def sign_up_fields():
    """A valid sign-up form."""
    return {"name": "Ada Lovelace", "email": "ada@example.com", "password": "secret1"}


@pytest.fixture
def sign_in_fields():
    """A valid sign-in form."""
    return {"email": "ada@example.com", "password": "secret1"}
