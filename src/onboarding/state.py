"""
Onboarding Step State.

Three steps, walked in order: WELCOME -> SYMPTOMS -> CREATE_ACCOUNT.
Transitions are pure functions of (step, selection); the machine just
holds the current step and applies them.
"""

import logging
from enum import Enum

from .selection import SelectionSet

logger = logging.getLogger(__name__)


class OnboardingStep(Enum):
    """Onboarding flow steps."""
    WELCOME = "welcome"
    SYMPTOMS = "symptoms"
    CREATE_ACCOUNT = "create-account"


def can_advance(step: OnboardingStep, selection: SelectionSet) -> bool:
    """Whether advance() from `step` would move forward."""
    if step == OnboardingStep.WELCOME:
        return True
    if step == OnboardingStep.SYMPTOMS:
        # Nobody reaches account creation with zero symptoms
        return not selection.is_empty
    return False


def get_next_step(step: OnboardingStep, selection: SelectionSet) -> OnboardingStep:
    """
    Determine the step after `step`.

    Returns the current step if advancing is not allowed.
    """
    if not can_advance(step, selection):
        return step
    if step == OnboardingStep.WELCOME:
        return OnboardingStep.SYMPTOMS
    return OnboardingStep.CREATE_ACCOUNT


def get_previous_step(step: OnboardingStep) -> OnboardingStep:
    """Step reached by back(); WELCOME has no predecessor."""
    if step == OnboardingStep.SYMPTOMS:
        return OnboardingStep.WELCOME
    if step == OnboardingStep.CREATE_ACCOUNT:
        return OnboardingStep.SYMPTOMS
    return step


class OnboardingStateMachine:
    """
    Owns the current step for one session.

    The selection is shared with the rest of the session and is never
    cleared here, so going back from CREATE_ACCOUNT keeps prior choices.
    """

    def __init__(self, selection: SelectionSet):
        self.selection = selection
        self.step = OnboardingStep.WELCOME

    @property
    def can_advance(self) -> bool:
        return can_advance(self.step, self.selection)

    @property
    def can_go_back(self) -> bool:
        return self.step != OnboardingStep.WELCOME

    def advance(self) -> bool:
        """Move forward if allowed. Returns True if the step changed."""
        return self._move_to(get_next_step(self.step, self.selection))

    def back(self) -> bool:
        """Move backward if possible. Returns True if the step changed."""
        return self._move_to(get_previous_step(self.step))

    def _move_to(self, target: OnboardingStep) -> bool:
        if target == self.step:
            return False
        logger.debug(f"Onboarding step {self.step.value} -> {target.value}")
        self.step = target
        return True
