"""Tests for the Supabase-backed identity gateway (mocked client)."""

import asyncio
import time

import pytest
from unittest.mock import MagicMock

from onboarding.controller import AuthFormController, SubmitStatus
from onboarding.errors import GatewayFailure
from onboarding.gateway import SupabaseIdentityGateway
from onboarding.payload import ProfileRecord


def _run(coro):
    return asyncio.run(coro)


class _SupabaseError(Exception):
    """Stand-in for supabase auth / postgrest errors, which expose .message."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


@pytest.fixture
def supabase_gateway(mock_supabase):
    return SupabaseIdentityGateway(client=mock_supabase, profiles_table="profiles")


class TestCreateAccount:

    def test_sign_up_payload(self, supabase_gateway, mock_supabase):
        account_id = _run(supabase_gateway.create_account(
            "a@b.com", "secret1", {"full_name": "Ada", "symptoms": ["anxiety"]},
        ))

        assert account_id == "user-1"
        mock_supabase.auth.sign_up.assert_called_once_with({
            "email": "a@b.com",
            "password": "secret1",
            "options": {"data": {"full_name": "Ada", "symptoms": ["anxiety"]}},
        })

    def test_error_message_surfaced(self, supabase_gateway, mock_supabase):
        mock_supabase.auth.sign_up.side_effect = _SupabaseError("User already registered")
        with pytest.raises(GatewayFailure) as exc:
            _run(supabase_gateway.create_account("a@b.com", "secret1", {}))
        assert exc.value.reason == "User already registered"

    def test_empty_error_message_falls_back(self, supabase_gateway, mock_supabase):
        mock_supabase.auth.sign_up.side_effect = _SupabaseError("")
        with pytest.raises(GatewayFailure) as exc:
            _run(supabase_gateway.create_account("a@b.com", "secret1", {}))
        assert exc.value.reason == "An error occurred during sign up"

    def test_missing_user_is_failure(self, supabase_gateway, mock_supabase):
        mock_supabase.auth.sign_up.return_value = MagicMock(user=None)
        with pytest.raises(GatewayFailure):
            _run(supabase_gateway.create_account("a@b.com", "secret1", {}))


class TestVerifyCredentials:

    def test_returns_session(self, supabase_gateway, mock_supabase):
        session = _run(supabase_gateway.verify_credentials("a@b.com", "secret1"))

        assert session.user_id == "user-1"
        assert session.access_token == "jwt-token"
        mock_supabase.auth.sign_in_with_password.assert_called_once_with({
            "email": "a@b.com",
            "password": "secret1",
        })

    def test_rejected_credentials(self, supabase_gateway, mock_supabase):
        mock_supabase.auth.sign_in_with_password.side_effect = _SupabaseError(
            "Invalid login credentials"
        )
        with pytest.raises(GatewayFailure) as exc:
            _run(supabase_gateway.verify_credentials("a@b.com", "wrong"))
        assert str(exc.value) == "Invalid login credentials"


class TestPersistProfile:

    def test_inserts_profile_row(self, supabase_gateway, mock_supabase):
        profile = ProfileRecord(full_name="Ada", symptom_ids=["anxiety", "ptsd"])
        _run(supabase_gateway.persist_profile("user-1", profile))

        mock_supabase.table.assert_called_once_with("profiles")
        mock_supabase.table.return_value.insert.assert_called_once_with([
            {"id": "user-1", "full_name": "Ada", "symptoms": ["anxiety", "ptsd"]},
        ])

    def test_insert_failure(self, supabase_gateway, mock_supabase):
        mock_supabase.table.return_value.execute.side_effect = _SupabaseError(
            "duplicate key value violates unique constraint"
        )
        with pytest.raises(GatewayFailure) as exc:
            _run(supabase_gateway.persist_profile("user-1", ProfileRecord(full_name="Ada")))
        assert "duplicate key" in exc.value.reason


class TestEventLoopStaysFree:
    """Supabase calls are blocking; they must not hold the event loop."""

    def test_double_submit_through_slow_client(self, supabase_gateway, mock_supabase, sign_up_fields):
        signed_up = mock_supabase.auth.sign_up.return_value

        def slow_sign_up(credentials):
            time.sleep(0.1)
            return signed_up

        mock_supabase.auth.sign_up.side_effect = slow_sign_up
        controller = AuthFormController(supabase_gateway)

        async def scenario():
            first = asyncio.create_task(controller.submit(sign_up_fields, ["anxiety"]))
            await asyncio.sleep(0)
            second = await controller.submit(sign_up_fields, ["anxiety"])
            return await first, second

        first, second = _run(scenario())

        assert first.ok
        assert second.status == SubmitStatus.BUSY
        assert mock_supabase.auth.sign_up.call_count == 1
        mock_supabase.auth.sign_in_with_password.assert_not_called()

    def test_other_work_runs_during_request(self, supabase_gateway, mock_supabase):
        def slow_sign_in(credentials):
            time.sleep(0.1)
            return mock_supabase.auth.sign_in_with_password.return_value

        mock_supabase.auth.sign_in_with_password.side_effect = slow_sign_in
        ticks = []

        async def ticker():
            for _ in range(3):
                ticks.append(time.monotonic())
                await asyncio.sleep(0.01)

        async def scenario():
            request = asyncio.create_task(supabase_gateway.verify_credentials("a@b.com", "secret1"))
            await ticker()
            assert not request.done()
            return await request

        session = _run(scenario())
        assert session.user_id == "user-1"
        assert len(ticks) == 3
