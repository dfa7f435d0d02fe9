"""
Onboarding error taxonomy.

All of these are caught at the AuthFormController.submit() boundary and
turned into the form's `last_error`; none of them escape to callers.
"""


class OnboardingError(Exception):
    """Base class for every user-facing onboarding failure."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class FormValidationError(OnboardingError):
    """
    Required field missing or password too short.

    Detected locally; the gateway is never called.
    """

    def __init__(self, problems: list[str]):
        self.problems = problems or ["Invalid form data"]
        super().__init__(self.problems[0])


class GatewayFailure(OnboardingError):
    """The identity/storage service rejected the request."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class ProfilePersistenceError(GatewayFailure):
    """
    Account was created but its profile record was not stored.

    No rollback is attempted; `account_id` identifies the orphaned account.
    """

    def __init__(self, reason: str, account_id: str):
        super().__init__(reason)
        self.account_id = account_id
