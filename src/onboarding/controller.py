"""
Account Form Controller.

Owns the sign-up / sign-in mode and submission status of the account
step, and drives the identity gateway on submit.

Sign-up is two calls (create account, then persist profile) and is not
transactional: if the second call fails the account stays, the failure
is surfaced, and nothing is rolled back or retried.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping

from .content import SIGN_IN_SUCCESS, SIGN_UP_SUCCESS, fallback_error
from .errors import (
    FormValidationError,
    GatewayFailure,
    OnboardingError,
    ProfilePersistenceError,
)
from .forms import AuthMode, SignInForm, SignUpForm, parse_account_form
from .gateway import AuthSession, IdentityGateway
from .payload import AccountSubmission

logger = logging.getLogger(__name__)


class SubmitStatus(Enum):
    """How a submit() call ended."""
    SUCCEEDED = "succeeded"
    INVALID = "invalid"            # rejected locally, no gateway call
    FAILED = "failed"              # gateway rejected the request
    PARTIAL = "partial"            # account created, profile not stored
    BUSY = "busy"                  # another submit is in flight; ignored
    NOT_READY = "not_ready"        # account step not active; ignored


@dataclass
class SubmitResult:
    status: SubmitStatus
    error: OnboardingError | None = None
    account_id: str | None = None
    session: AuthSession | None = None

    @property
    def ok(self) -> bool:
        return self.status == SubmitStatus.SUCCEEDED


@dataclass
class AuthFormState:
    """
    Visible state of the account form.

    `submitting` is only True between the start of a dispatched submit and
    its resolution. `last_error` is reset by every new submit and every
    mode switch.
    """
    mode: AuthMode = AuthMode.SIGN_UP
    submitting: bool = False
    last_error: str | None = None
    notice: str | None = None
    authenticated: bool = False

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "submitting": self.submitting,
            "last_error": self.last_error,
            "notice": self.notice,
            "authenticated": self.authenticated,
        }


class AuthFormController:
    """One account form; at most one submission in flight at a time."""

    def __init__(self, gateway: IdentityGateway, mode: AuthMode = AuthMode.SIGN_UP):
        self.gateway = gateway
        self.state = AuthFormState(mode=mode)
        self.auth_session: AuthSession | None = None

    @property
    def mode(self) -> AuthMode:
        return self.state.mode

    @property
    def submitting(self) -> bool:
        return self.state.submitting

    @property
    def last_error(self) -> str | None:
        return self.state.last_error

    def set_mode(self, mode: AuthMode) -> None:
        """Switch form mode. Always clears the current error."""
        self.state.mode = mode
        self.state.last_error = None

    def toggle_mode(self) -> AuthMode:
        self.set_mode(self.state.mode.other)
        return self.state.mode

    async def submit(
        self,
        fields: Mapping[str, Any],
        symptom_ids: Iterable[str] = (),
    ) -> SubmitResult:
        """
        Validate and dispatch the form for the current mode.

        Never raises for onboarding failures: the outcome is reported in
        the returned SubmitResult and mirrored in `state.last_error`.
        """
        if self.state.submitting:
            logger.warning("Ignoring submit: a submission is already in flight")
            return SubmitResult(SubmitStatus.BUSY)

        mode = self.state.mode
        # Snapshot now; the selection may change while we await the gateway
        symptom_ids = list(symptom_ids)
        self.state.last_error = None
        self.state.notice = None

        try:
            form = parse_account_form(mode, fields)
        except FormValidationError as e:
            self.state.last_error = e.message
            return SubmitResult(SubmitStatus.INVALID, error=e)

        # A new attempt replaces whatever the last sign-in established
        self.state.authenticated = False
        self.auth_session = None
        self.state.submitting = True
        try:
            if mode == AuthMode.SIGN_UP:
                return await self._sign_up(form, symptom_ids)
            return await self._sign_in(form)
        except ProfilePersistenceError as e:
            self.state.last_error = e.message
            return SubmitResult(SubmitStatus.PARTIAL, error=e, account_id=e.account_id)
        except OnboardingError as e:
            self.state.last_error = e.message
            return SubmitResult(SubmitStatus.FAILED, error=e)
        except Exception as e:
            # A gateway that breaks its contract still must not crash the form
            logger.exception(f"Unexpected {mode.value} failure")
            failure = GatewayFailure(str(e) or fallback_error(mode))
            self.state.last_error = failure.message
            return SubmitResult(SubmitStatus.FAILED, error=failure)
        finally:
            self.state.submitting = False

    async def _sign_up(self, form: SignUpForm, symptom_ids: list[str]) -> SubmitResult:
        submission = AccountSubmission(
            email=form.email,
            password=form.password,
            full_name=form.full_name,
            symptom_ids=symptom_ids,
        )

        account_id = await self.gateway.create_account(
            submission.email,
            submission.password,
            metadata=submission.metadata(),
        )
        logger.info(f"Account created: {account_id}")

        try:
            await self.gateway.persist_profile(account_id, submission.profile())
        except Exception as e:
            reason = getattr(e, "reason", None) or str(e) or fallback_error(AuthMode.SIGN_UP)
            logger.error(f"Account {account_id} created but profile was not saved: {reason}")
            raise ProfilePersistenceError(reason, account_id) from e

        self.state.mode = AuthMode.SIGN_IN
        self.state.notice = SIGN_UP_SUCCESS
        return SubmitResult(SubmitStatus.SUCCEEDED, account_id=account_id)

    async def _sign_in(self, form: SignInForm) -> SubmitResult:
        session = await self.gateway.verify_credentials(form.email, form.password)
        logger.info(f"Signed in: {session.user_id}")

        self.auth_session = session
        self.state.authenticated = True
        self.state.notice = SIGN_IN_SUCCESS
        return SubmitResult(SubmitStatus.SUCCEEDED, session=session)
