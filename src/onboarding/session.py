"""
Onboarding Session.

One user's pass through the flow: symptom selection, step machine and
account form bound together. Held in process memory only.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Mapping

from . import content
from .catalog import DEFAULT_CATALOG, SymptomCatalog
from .controller import AuthFormController, SubmitResult, SubmitStatus
from .forms import AuthMode
from .gateway import IdentityGateway
from .selection import SelectionSet
from .state import OnboardingStateMachine, OnboardingStep

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    """Get current UTC time."""
    return datetime.now(timezone.utc)


class OnboardingSession:
    """Welcome -> symptoms -> account flow for a single user."""

    def __init__(
        self,
        gateway: IdentityGateway,
        catalog: SymptomCatalog = DEFAULT_CATALOG,
        session_id: str | None = None,
    ):
        self.id = session_id or uuid.uuid4().hex
        self.catalog = catalog
        self.selection = SelectionSet(catalog)
        self.machine = OnboardingStateMachine(self.selection)
        self.auth = AuthFormController(gateway)
        self.created_at = _utc_now()
        self.last_active_at = self.created_at

    @property
    def step(self) -> OnboardingStep:
        return self.machine.step

    def toggle_symptom(self, symptom_id: str) -> bool:
        return self.selection.toggle(symptom_id)

    def advance(self) -> bool:
        return self.machine.advance()

    def back(self) -> bool:
        return self.machine.back()

    def touch(self) -> None:
        """Record activity; idle expiry counts from here."""
        self.last_active_at = _utc_now()

    def is_expired(self, idle_minutes: int, now: datetime | None = None) -> bool:
        """Whether the session has been idle longer than `idle_minutes`."""
        idle = (now or _utc_now()) - self.last_active_at
        return idle.total_seconds() / 60 > idle_minutes

    def toggle_mode(self) -> bool:
        """Switch sign-up/sign-in. Only valid on the account step."""
        if self.step != OnboardingStep.CREATE_ACCOUNT:
            logger.warning(f"Ignoring mode switch on step {self.step.value} (session {self.id})")
            return False
        self.auth.toggle_mode()
        return True

    async def submit(self, fields: Mapping[str, Any]) -> SubmitResult:
        """Submit the account form. Only valid on the account step."""
        if self.step != OnboardingStep.CREATE_ACCOUNT:
            logger.warning(f"Ignoring submit on step {self.step.value} (session {self.id})")
            return SubmitResult(SubmitStatus.NOT_READY)
        return await self.auth.submit(fields, self.selection.snapshot())

    def view(self) -> dict:
        """JSON-ready description of everything the current step shows."""
        step = self.step
        data: dict[str, Any] = {
            "session_id": self.id,
            "title": content.APP_TITLE,
            "step": step.value,
            "can_advance": self.machine.can_advance,
            "can_go_back": self.machine.can_go_back,
            "selected_symptoms": self.selection.snapshot(),
        }

        if step == OnboardingStep.WELCOME:
            data["heading"] = content.WELCOME_HEADING
            data["body"] = content.WELCOME_BODY
            data["advance_label"] = content.WELCOME_ACTION

        elif step == OnboardingStep.SYMPTOMS:
            data["heading"] = content.SYMPTOMS_HEADING
            data["body"] = content.SYMPTOMS_BODY
            data["advance_label"] = content.CONTINUE_ACTION
            data["back_label"] = content.BACK_ACTION
            data["symptoms"] = [
                {**entry.to_dict(), "selected": entry.id in self.selection}
                for entry in self.catalog
            ]

        else:
            form = self.auth.state
            heading, body = content.form_heading(form.mode)
            data["heading"] = heading
            data["body"] = body
            data["back_label"] = content.BACK_ACTION
            data["form"] = {
                **form.to_dict(),
                "fields": ["name", "email", "password"]
                if form.mode == AuthMode.SIGN_UP
                else ["email", "password"],
                "submit_label": content.submit_label(form.mode, form.submitting),
                "submit_enabled": not form.submitting,
                "mode_switch_label": content.mode_switch_label(form.mode),
                "password_placeholder": content.password_placeholder(form.mode),
            }
            data["disclaimer"] = {
                "title": content.DISCLAIMER_TITLE,
                "text": content.DISCLAIMER,
            }

        return data
