"""
Account submission payloads.

AccountSubmission is what the account form hands to the identity
gateway; ProfileRecord is the row stored once the account exists.
Neither is persisted by onboarding itself.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ProfileRecord:
    """Profile data stored against a newly created account."""
    full_name: str
    symptom_ids: list[str] = field(default_factory=list)

    def to_row(self, account_id: str) -> dict:
        """Row for the profiles table."""
        return {
            "id": account_id,
            "full_name": self.full_name,
            "symptoms": list(self.symptom_ids),
        }


@dataclass(frozen=True)
class AccountSubmission:
    """
    One sign-up or sign-in attempt.

    `full_name` and `symptom_ids` only matter for sign-up.
    """
    email: str
    password: str = field(repr=False)
    full_name: str | None = None
    symptom_ids: list[str] = field(default_factory=list)

    def metadata(self) -> dict:
        """User metadata attached to the account at creation."""
        return {
            "full_name": self.full_name,
            "symptoms": list(self.symptom_ids),
        }

    def profile(self) -> ProfileRecord:
        return ProfileRecord(
            full_name=self.full_name or "",
            symptom_ids=list(self.symptom_ids),
        )
