"""
Onboarding API Endpoints.

Thin HTTP layer over OnboardingSession. Sessions live in process memory,
are lost on restart, and are dropped once idle past
`onboarding_session_idle_minutes`.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from .catalog import DEFAULT_CATALOG
from .controller import SubmitStatus
from .gateway import IdentityGateway, SupabaseIdentityGateway
from .session import OnboardingSession

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/onboarding", tags=["onboarding"])

# In-memory session store (keyed by session id)
sessions: dict[str, OnboardingSession] = {}


# =============================================================================
# Dependencies
# =============================================================================

_gateway: IdentityGateway | None = None


def get_gateway() -> IdentityGateway:
    """Shared Supabase gateway. Overridden in tests."""
    global _gateway
    if _gateway is None:
        _gateway = SupabaseIdentityGateway()
    return _gateway


def prune_expired_sessions() -> int:
    """Drop idle sessions. Returns how many were removed."""
    from mindful.config import settings

    idle_minutes = settings.onboarding_session_idle_minutes
    expired = [sid for sid, s in sessions.items() if s.is_expired(idle_minutes)]
    for sid in expired:
        del sessions[sid]
    if expired:
        logger.info(f"Dropped {len(expired)} idle onboarding session(s)")
    return len(expired)


def get_session(session_id: str) -> OnboardingSession:
    prune_expired_sessions()
    session = sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
    session.touch()
    return session


# =============================================================================
# Request/Response Models
# =============================================================================


class SubmitRequest(BaseModel):
    """Account form. `name` is only read in sign-up mode."""
    name: str | None = None
    email: str = ""
    password: str = ""


class SubmitResponse(BaseModel):
    status: str
    account_id: str | None = None
    view: dict


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/symptoms")
async def list_symptoms() -> list[dict]:
    """Selectable symptoms in display order."""
    return DEFAULT_CATALOG.to_options()


@router.post("/sessions", status_code=201)
async def create_session(gateway: IdentityGateway = Depends(get_gateway)) -> dict:
    prune_expired_sessions()
    session = OnboardingSession(gateway)
    sessions[session.id] = session
    logger.info(f"Onboarding session started: {session.id}")
    return session.view()


@router.get("/sessions/{session_id}")
async def get_session_view(session: OnboardingSession = Depends(get_session)) -> dict:
    return session.view()


@router.delete("/sessions/{session_id}", status_code=204)
async def discard_session(session: OnboardingSession = Depends(get_session)) -> None:
    sessions.pop(session.id, None)


@router.post("/sessions/{session_id}/symptoms/{symptom_id}/toggle")
async def toggle_symptom(
    symptom_id: str,
    session: OnboardingSession = Depends(get_session),
) -> dict:
    if symptom_id not in session.catalog:
        raise HTTPException(status_code=404, detail=f"Unknown symptom: {symptom_id}")
    session.toggle_symptom(symptom_id)
    return session.view()


@router.post("/sessions/{session_id}/advance")
async def advance(session: OnboardingSession = Depends(get_session)) -> dict:
    # Disallowed moves are no-ops; the view's can_advance says why nothing changed
    session.advance()
    return session.view()


@router.post("/sessions/{session_id}/back")
async def back(session: OnboardingSession = Depends(get_session)) -> dict:
    session.back()
    return session.view()


@router.post("/sessions/{session_id}/mode")
async def toggle_mode(session: OnboardingSession = Depends(get_session)) -> dict:
    if not session.toggle_mode():
        raise HTTPException(
            status_code=409,
            detail=f"Mode switch is not available on step {session.step.value}",
        )
    return session.view()


@router.post("/sessions/{session_id}/submit", response_model=SubmitResponse)
async def submit(
    request: SubmitRequest,
    session: OnboardingSession = Depends(get_session),
) -> SubmitResponse:
    result = await session.submit(request.model_dump(exclude_none=True))

    if result.status == SubmitStatus.NOT_READY:
        raise HTTPException(
            status_code=409,
            detail=f"Account form is not available on step {session.step.value}",
        )

    return SubmitResponse(
        status=result.status.value,
        account_id=result.account_id,
        view=session.view(),
    )
