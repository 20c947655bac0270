from typing import Any, Dict

from fastapi import APIRouter, Depends

from zyren.api.main import get_dashboard_service, get_state_manager
from zyren.dashboard import DashboardService
from zyren.session.state_manager import StateManager

api = APIRouter()


@api.get("/dashboard")
async def get_dashboard(dashboard: DashboardService = Depends(get_dashboard_service)):
    snapshot = await dashboard.load()
    return snapshot.to_dict()


@api.get("/settings/{session_id}")
async def get_settings(session_id: str, state_manager: StateManager = Depends(get_state_manager)):
    settings = state_manager.get_settings(session_id)
    return {"settings": settings.__dict__, "has_changes": state_manager.has_unsaved_settings(session_id)}


@api.patch("/settings/{session_id}")
async def update_settings(
    session_id: str,
    body: Dict[str, Any],
    state_manager: StateManager = Depends(get_state_manager),
):
    settings = state_manager.update_settings(session_id, body)
    return {"settings": settings.__dict__, "has_changes": state_manager.has_unsaved_settings(session_id)}


@api.post("/settings/{session_id}/save")
async def save_settings(session_id: str, state_manager: StateManager = Depends(get_state_manager)):
    settings = state_manager.save_settings(session_id)
    return {"settings": settings.__dict__, "has_changes": False}
