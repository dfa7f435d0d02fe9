"""
User-facing copy for the onboarding flow.

Shared by the HTTP views and the CLI so every surface says the same thing.
"""

from .forms import AuthMode

APP_TITLE = "MindfulAI Therapy"

WELCOME_HEADING = "Welcome to MindfulAI Therapy"
WELCOME_BODY = (
    "Your personal AI therapist is here to help you on your journey to better "
    "mental health. Let's start by understanding how you're feeling."
)
WELCOME_ACTION = "Start Your Journey"

SYMPTOMS_HEADING = "How are you feeling?"
SYMPTOMS_BODY = "Select all that apply to you"
CONTINUE_ACTION = "Continue"
BACK_ACTION = "Go back"

DISCLAIMER_TITLE = "Important Notice"
DISCLAIMER = (
    "This AI therapy platform is for preliminary support only. If you're "
    "experiencing a crisis or emergency, please contact emergency services "
    "or a mental health professional immediately."
)

SIGN_UP_SUCCESS = "Account created successfully! You can now sign in."
SIGN_IN_SUCCESS = "Login successful!"

SIGN_UP_FALLBACK_ERROR = "An error occurred during sign up"
SIGN_IN_FALLBACK_ERROR = "An error occurred during login"

_FORM_HEADINGS = {
    AuthMode.SIGN_UP: (
        "Create Your Account",
        "Let's get you set up with your personal AI therapist",
    ),
    AuthMode.SIGN_IN: (
        "Welcome Back",
        "Sign in to continue your therapy journey",
    ),
}

_SUBMIT_LABELS = {
    # mode: (idle, in flight)
    AuthMode.SIGN_UP: ("Create Account", "Creating Account..."),
    AuthMode.SIGN_IN: ("Sign In", "Signing In..."),
}

_MODE_SWITCH_LABELS = {
    AuthMode.SIGN_UP: "Already have an account? Sign in",
    AuthMode.SIGN_IN: "Need an account? Sign up",
}

_PASSWORD_PLACEHOLDERS = {
    AuthMode.SIGN_UP: "Create a password (min. 6 characters)",
    AuthMode.SIGN_IN: "Enter your password",
}


def form_heading(mode: AuthMode) -> tuple[str, str]:
    """(heading, subheading) for the account form."""
    return _FORM_HEADINGS[mode]


def submit_label(mode: AuthMode, submitting: bool = False) -> str:
    idle, busy = _SUBMIT_LABELS[mode]
    return busy if submitting else idle


def mode_switch_label(mode: AuthMode) -> str:
    return _MODE_SWITCH_LABELS[mode]


def password_placeholder(mode: AuthMode) -> str:
    return _PASSWORD_PLACEHOLDERS[mode]


def fallback_error(mode: AuthMode) -> str:
    if mode == AuthMode.SIGN_UP:
        return SIGN_UP_FALLBACK_ERROR
    return SIGN_IN_FALLBACK_ERROR
