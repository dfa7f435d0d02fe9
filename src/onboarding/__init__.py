"""
MindfulAI Onboarding.

Walks a new user through three steps and hands the collected data to the
identity service:

1. Welcome
2. Symptoms - toggle one or more; continuing requires a non-empty selection
3. Create account - sign up (name, email, password) or sign in

Rendering-free: every step and transition is callable directly.
"""

from .catalog import SymptomCatalog, SymptomEntry, DEFAULT_CATALOG
from .selection import SelectionSet
from .state import OnboardingStep, OnboardingStateMachine
from .forms import AuthMode
from .controller import AuthFormController, AuthFormState, SubmitResult, SubmitStatus
from .gateway import AuthSession, IdentityGateway, SupabaseIdentityGateway
from .errors import (
    OnboardingError,
    FormValidationError,
    GatewayFailure,
    ProfilePersistenceError,
)
from .session import OnboardingSession

__all__ = [
    "SymptomCatalog",
    "SymptomEntry",
    "DEFAULT_CATALOG",
    "SelectionSet",
    "OnboardingStep",
    "OnboardingStateMachine",
    "AuthMode",
    "AuthFormController",
    "AuthFormState",
    "SubmitResult",
    "SubmitStatus",
    "AuthSession",
    "IdentityGateway",
    "SupabaseIdentityGateway",
    "OnboardingError",
    "FormValidationError",
    "GatewayFailure",
    "ProfilePersistenceError",
    "OnboardingSession",
]
