"""
APIRouter for the onboarding wizard.

Endpoints:
- POST  /onboarding/{session_id}/start
- GET   /onboarding/{session_id}
- POST  /onboarding/{session_id}/next
- POST  /onboarding/{session_id}/prev
- PATCH /onboarding/{session_id}/fields
- GET   /onboarding/{session_id}/summary
- POST  /onboarding/{session_id}/submit
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status

from zyren.api.main import get_state_manager
from zyren.flows.onboarding import OnboardingWizard
from zyren.session.state_manager import StateManager

api = APIRouter()


def _wizard_or_404(state_manager: StateManager, session_id: str) -> OnboardingWizard:
    wizard = state_manager.get_wizard(session_id)
    if wizard is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No onboarding in progress")
    return wizard


@api.post("/{session_id}/start")
async def start_onboarding(session_id: str, state_manager: StateManager = Depends(get_state_manager)):
    wizard = state_manager.start_onboarding(session_id)
    return wizard.snapshot()


@api.get("/{session_id}")
async def get_onboarding(session_id: str, state_manager: StateManager = Depends(get_state_manager)):
    return _wizard_or_404(state_manager, session_id).snapshot()


@api.post("/{session_id}/next")
async def next_step(session_id: str, state_manager: StateManager = Depends(get_state_manager)):
    wizard = _wizard_or_404(state_manager, session_id)
    await wizard.next()
    return wizard.snapshot()


@api.post("/{session_id}/prev")
async def prev_step(session_id: str, state_manager: StateManager = Depends(get_state_manager)):
    wizard = _wizard_or_404(state_manager, session_id)
    await wizard.prev()
    return wizard.snapshot()


@api.patch("/{session_id}/fields")
async def update_fields(
    session_id: str,
    body: Dict[str, Any],
    state_manager: StateManager = Depends(get_state_manager),
):
    wizard = _wizard_or_404(state_manager, session_id)
    wizard.apply_changes(body)
    return wizard.snapshot()


@api.get("/{session_id}/summary")
async def get_summary(session_id: str, state_manager: StateManager = Depends(get_state_manager)):
    return _wizard_or_404(state_manager, session_id).summary()


@api.post("/{session_id}/submit")
async def submit(session_id: str, state_manager: StateManager = Depends(get_state_manager)):
    wizard = _wizard_or_404(state_manager, session_id)
    outcome = await state_manager.submit_onboarding(session_id)
    return {
        "success": outcome.success,
        "message": outcome.message,
        "record_id": outcome.record_id,
        "state": wizard.snapshot(),
    }
