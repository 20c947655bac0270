"""
APIRouter for policy management and the cost simulator.

The simulator endpoints never change a policy; only the explicit toggles do.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from zyren.api.main import get_db, get_state_manager
from zyren.database.memory import MemoryDB, policy_to_dict
from zyren.session.state_manager import StateManager

api = APIRouter()


class ToggleRequest(BaseModel):
    enabled: bool


class SelectPolicyRequest(BaseModel):
    session_id: str
    policy_id: str


class CandidateValueRequest(BaseModel):
    session_id: str
    value: float = Field(allow_inf_nan=False)


class SessionRequest(BaseModel):
    session_id: str


def _policy_or_404(db: MemoryDB, policy_id: str):
    policy = db.get_policy(policy_id)
    if policy is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Policy {policy_id} not found")
    return policy


@api.get("")
async def list_policies(active_only: bool = True, db: MemoryDB = Depends(get_db)):
    policies = db.active_policies() if active_only else db.list_policies()
    return {"policies": [policy_to_dict(p) for p in policies]}


@api.get("/available")
async def list_available(db: MemoryDB = Depends(get_db)):
    return {
        "policies": [
            {**asdict(p), "type": p.type.value}
            for p in db.available_policies()
        ]
    }


@api.post("/simulator/select")
async def select_policy(
    body: SelectPolicyRequest,
    db: MemoryDB = Depends(get_db),
    state_manager: StateManager = Depends(get_state_manager),
):
    policy = _policy_or_404(db, body.policy_id)
    simulator = state_manager.get_simulator(body.session_id)
    simulator.select(policy)
    return simulator.snapshot()


@api.post("/simulator/value")
async def set_candidate_value(body: CandidateValueRequest, state_manager: StateManager = Depends(get_state_manager)):
    simulator = state_manager.get_simulator(body.session_id)
    simulator.set_candidate_value(body.value)
    return simulator.snapshot()


@api.post("/simulator/deselect")
async def deselect_policy(body: SessionRequest, state_manager: StateManager = Depends(get_state_manager)):
    simulator = state_manager.get_simulator(body.session_id)
    simulator.deselect()
    return simulator.snapshot()


@api.get("/{policy_id}")
async def get_policy(policy_id: str, db: MemoryDB = Depends(get_db)):
    return policy_to_dict(_policy_or_404(db, policy_id))


@api.put("/{policy_id}/auto-activate")
async def toggle_auto_activate(policy_id: str, body: ToggleRequest, db: MemoryDB = Depends(get_db)):
    policy = db.set_auto_active(policy_id, body.enabled)
    if policy is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Policy {policy_id} not found")
    return policy_to_dict(policy)


@api.put("/{policy_id}/adaptive-premium")
async def toggle_adaptive_premium(policy_id: str, body: ToggleRequest, db: MemoryDB = Depends(get_db)):
    policy: Optional[object] = db.set_adaptive_premium(policy_id, body.enabled)
    if policy is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Policy {policy_id} not found")
    return policy_to_dict(policy)
