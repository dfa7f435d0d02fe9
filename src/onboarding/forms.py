"""
Onboarding Forms - account step.

The account step has two modes sharing one form:
- SIGN_UP: name, email, password (min. 6 characters)
- SIGN_IN: email, password

Field names match the rendered form (`name`, `email`, `password`).
"""

import logging
from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import FormValidationError

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

FIELD_LABELS = {
    "name": "Full name",
    "email": "Email address",
    "password": "Password",
}


class AuthMode(Enum):
    """Which submit the account form performs."""
    SIGN_UP = "sign_up"
    SIGN_IN = "sign_in"

    @property
    def other(self) -> "AuthMode":
        return AuthMode.SIGN_IN if self == AuthMode.SIGN_UP else AuthMode.SIGN_UP


# =============================================================================
# Shared field checks
# =============================================================================

def _as_text(v: Any) -> str:
    if v is None:
        return ""
    return str(v)


def _require(v: str, label: str) -> str:
    if not v:
        raise ValueError(f"{label} is required")
    return v


# =============================================================================
# Form Models
# =============================================================================

class SignInForm(BaseModel):
    """Credentials for an existing account."""

    model_config = ConfigDict(extra="ignore")

    email: str = Field(default="", validate_default=True)
    password: str = Field(default="", validate_default=True, repr=False)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: Any) -> str:
        return _as_text(v).strip()

    @field_validator("password", mode="before")
    @classmethod
    def coerce_password(cls, v: Any) -> str:
        # Passwords are taken verbatim, whitespace included
        return _as_text(v)

    @field_validator("email")
    @classmethod
    def email_required(cls, v: str) -> str:
        return _require(v, FIELD_LABELS["email"])

    @field_validator("password")
    @classmethod
    def password_required(cls, v: str) -> str:
        return _require(v, FIELD_LABELS["password"])


class SignUpForm(BaseModel):
    """New account details. `name` is accepted as an alias of full_name."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    full_name: str = Field(default="", alias="name", validate_default=True)
    email: str = Field(default="", validate_default=True)
    password: str = Field(default="", validate_default=True, repr=False)

    @field_validator("full_name", "email", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> str:
        return _as_text(v).strip()

    @field_validator("password", mode="before")
    @classmethod
    def coerce_password(cls, v: Any) -> str:
        return _as_text(v)

    @field_validator("full_name")
    @classmethod
    def full_name_required(cls, v: str) -> str:
        return _require(v, FIELD_LABELS["name"])

    @field_validator("email")
    @classmethod
    def email_required(cls, v: str) -> str:
        return _require(v, FIELD_LABELS["email"])

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str) -> str:
        _require(v, FIELD_LABELS["password"])
        if len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        return v


AccountForm = SignUpForm | SignInForm


def _describe(error: dict) -> str:
    """Turn one pydantic error into a user-facing sentence."""
    ctx_error = error.get("ctx", {}).get("error")
    if isinstance(ctx_error, ValueError):
        return str(ctx_error)
    field = str(error["loc"][0]) if error.get("loc") else ""
    label = FIELD_LABELS.get(field, field or "Form")
    return f"{label}: {error['msg']}"


def parse_account_form(mode: AuthMode, fields: Mapping[str, Any]) -> AccountForm:
    """
    Validate submitted fields for `mode`.

    Raises:
        FormValidationError: listing every problem, first one as message.
    """
    model = SignUpForm if mode == AuthMode.SIGN_UP else SignInForm
    try:
        return model.model_validate(dict(fields))
    except ValidationError as e:
        problems = [_describe(err) for err in e.errors()]
        logger.info(f"Rejected {mode.value} form: {problems}")
        raise FormValidationError(problems) from e
