"""
Identity Gateway.

Contract between onboarding and the external identity/storage service,
plus the Supabase implementation used in production.

Every method either returns its result or raises GatewayFailure.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .content import SIGN_IN_FALLBACK_ERROR, SIGN_UP_FALLBACK_ERROR
from .errors import GatewayFailure
from .payload import ProfileRecord

if TYPE_CHECKING:
    from supabase import Client

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthSession:
    """Authenticated session returned by a successful sign-in."""
    user_id: str
    email: str | None = None
    access_token: str | None = None


class IdentityGateway(ABC):
    """Account registration, credential checks and profile storage."""

    @abstractmethod
    async def create_account(self, email: str, password: str, metadata: dict) -> str:
        """Register a new account. Returns the new account id."""

    @abstractmethod
    async def verify_credentials(self, email: str, password: str) -> AuthSession:
        """Sign in an existing account."""

    @abstractmethod
    async def persist_profile(self, account_id: str, profile: ProfileRecord) -> None:
        """Store the profile record for `account_id`."""


def _failure_reason(exc: Exception, fallback: str) -> str:
    """Message from a Supabase exception (auth and postgrest both carry .message)."""
    message = getattr(exc, "message", None) or str(exc)
    return message or fallback


class SupabaseIdentityGateway(IdentityGateway):
    """
    IdentityGateway backed by Supabase Auth and a `profiles` table.

    The client is resolved lazily so constructing the gateway never
    reads settings. supabase-py is synchronous; each request runs in a
    worker thread so the event loop stays free while it is out.
    """

    def __init__(self, client: "Client | None" = None, profiles_table: str | None = None):
        self._client = client
        self._profiles_table = profiles_table

    @property
    def client(self) -> "Client":
        if self._client is None:
            from mindful.db.client import get_client

            self._client = get_client()
        return self._client

    @property
    def profiles_table(self) -> str:
        if self._profiles_table is None:
            from mindful.config import settings

            self._profiles_table = settings.profiles_table
        return self._profiles_table

    async def create_account(self, email: str, password: str, metadata: dict) -> str:
        try:
            response = await asyncio.to_thread(self.client.auth.sign_up, {
                "email": email,
                "password": password,
                "options": {"data": metadata},
            })
        except Exception as e:
            logger.warning(f"Supabase sign_up failed: {e}")
            raise GatewayFailure(_failure_reason(e, SIGN_UP_FALLBACK_ERROR)) from e

        user = getattr(response, "user", None)
        if not user or not user.id:
            logger.warning("Supabase sign_up returned no user")
            raise GatewayFailure(SIGN_UP_FALLBACK_ERROR)

        return user.id

    async def verify_credentials(self, email: str, password: str) -> AuthSession:
        try:
            response = await asyncio.to_thread(self.client.auth.sign_in_with_password, {
                "email": email,
                "password": password,
            })
        except Exception as e:
            logger.warning(f"Supabase sign_in_with_password failed: {e}")
            raise GatewayFailure(_failure_reason(e, SIGN_IN_FALLBACK_ERROR)) from e

        user = getattr(response, "user", None)
        session = getattr(response, "session", None)
        if not user or not session:
            logger.warning("Supabase sign_in returned no session")
            raise GatewayFailure(SIGN_IN_FALLBACK_ERROR)

        return AuthSession(
            user_id=user.id,
            email=user.email,
            access_token=session.access_token,
        )

    async def persist_profile(self, account_id: str, profile: ProfileRecord) -> None:
        try:
            query = self.client.table(self.profiles_table).insert([profile.to_row(account_id)])
            await asyncio.to_thread(query.execute)
        except Exception as e:
            logger.warning(f"Profile insert failed for {account_id}: {e}")
            raise GatewayFailure(_failure_reason(e, SIGN_UP_FALLBACK_ERROR)) from e
