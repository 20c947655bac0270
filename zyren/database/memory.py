"""
Lightweight in-memory data store for local development.

Holds the policy catalogue (seeded with the app's demo policies), completed
onboarding configurations and saved user settings. It implements the
``OnboardingStore`` persistence boundary used by the onboarding wizard and is
NOT intended for production use.
"""

from __future__ import annotations

import copy
import uuid
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from zyren.integrations.contracts.interfaces import (
    ActivationEvent,
    OnboardingRecord,
    OnboardingStore,
    Policy,
    PolicyStatus,
    PolicyType,
)


@dataclass
class PotentialPolicy:
    id: str
    name: str
    type: PolicyType
    credit_cost: float
    description: Optional[str] = None


def _seed_policies() -> List[Policy]:
    return [
        Policy(
            id="health1", name="Salud Esencial", type=PolicyType.HEALTH, status=PolicyStatus.ACTIVE,
            is_auto_active=True, is_adaptive_premium=True, credit_cost=50, coverage_amount=10000,
            next_payment_date="2025-06-01",
            activation_history=[ActivationEvent(reason="Initial activation", date="2023-10-01")],
            description="Comprehensive health coverage for peace of mind.",
        ),
        Policy(
            id="accident1", name="Accidentes Personales Plus", type=PolicyType.ACCIDENT,
            status=PolicyStatus.AUTO_PENDING, is_auto_active=True, is_adaptive_premium=False,
            credit_cost=25, coverage_amount=5000, next_payment_date="2025-06-15",
            description="Protection against unexpected accidents and injuries.",
        ),
        Policy(
            id="pension1", name="Pensión Voluntaria Futuro", type=PolicyType.PENSION, status=PolicyStatus.MANUAL,
            is_auto_active=False, is_adaptive_premium=True, credit_cost=100, coverage_amount=0, goal_amount=50000,
            activation_history=[ActivationEvent(reason="Manual contribution", date="2023-11-15")],
            description="Build your retirement savings flexibly.",
        ),
        Policy(
            id="edu1", name="Seguro Educativo Crecer", type=PolicyType.EDUCATION, status=PolicyStatus.ACTIVE,
            is_auto_active=True, is_adaptive_premium=True, credit_cost=70, coverage_amount=0, goal_amount=20000,
            next_payment_date="2025-07-01",
            activation_history=[ActivationEvent(reason="Initial activation", date="2024-01-10")],
            description="Secure the future education of your loved ones.",
        ),
    ]


def _seed_potential_policies() -> List[PotentialPolicy]:
    return [
        PotentialPolicy(
            id="potential-renta", name="Rentas Voluntarias Tranquilidad", type=PolicyType.RENTA,
            credit_cost=60, description="Flexible long-term savings for retirement or other goals.",
        ),
    ]


class MemoryDB(OnboardingStore):
    """
    In-memory stand-in for the policy and onboarding backend.

    Policies handed out are copies, so callers (the simulator in particular)
    can never mutate the catalogue by accident.
    """

    def __init__(self, seed: bool = True) -> None:
        self._policies: Dict[str, Policy] = {}
        self._potential: List[PotentialPolicy] = []
        self._onboarding: Dict[str, OnboardingRecord] = {}
        self._settings: Dict[str, Dict[str, Any]] = {}
        if seed:
            for policy in _seed_policies():
                self._policies[policy.id] = policy
            self._potential = _seed_potential_policies()

    # ------------------------------------------------------------------ #
    # Policies
    # ------------------------------------------------------------------ #
    def add_policy(self, policy: Policy) -> Policy:
        self._policies[policy.id] = copy.deepcopy(policy)
        return copy.deepcopy(policy)

    def list_policies(self) -> List[Policy]:
        return [copy.deepcopy(p) for p in self._policies.values()]

    def get_policy(self, policy_id: str) -> Optional[Policy]:
        policy = self._policies.get(policy_id)
        return copy.deepcopy(policy) if policy else None

    def active_policies(self) -> List[Policy]:
        return [copy.deepcopy(p) for p in self._policies.values() if p.status != PolicyStatus.INACTIVE]

    def available_policies(self) -> List[PotentialPolicy]:
        """Potential policies of a type the user does not already hold."""
        held = {p.type for p in self._policies.values() if p.status != PolicyStatus.INACTIVE}
        return [pp for pp in self._potential if pp.type not in held]

    def set_auto_active(self, policy_id: str, enabled: bool) -> Optional[Policy]:
        policy = self._policies.get(policy_id)
        if policy is None:
            return None
        policy.is_auto_active = bool(enabled)
        return copy.deepcopy(policy)

    def set_adaptive_premium(self, policy_id: str, enabled: bool) -> Optional[Policy]:
        policy = self._policies.get(policy_id)
        if policy is None:
            return None
        policy.is_adaptive_premium = bool(enabled)
        return copy.deepcopy(policy)

    # ------------------------------------------------------------------ #
    # Onboarding
    # ------------------------------------------------------------------ #
    def save_onboarding(self, user_id: str, configuration: Dict[str, Any]) -> OnboardingRecord:
        record = OnboardingRecord(
            record_id=str(uuid.uuid4()),
            user_id=user_id,
            configuration=copy.deepcopy(configuration),
        )
        self._onboarding[user_id] = record
        return record

    def get_onboarding(self, user_id: str) -> Optional[OnboardingRecord]:
        return self._onboarding.get(user_id)

    # ------------------------------------------------------------------ #
    # Settings
    # ------------------------------------------------------------------ #
    def save_settings(self, user_id: str, settings: Dict[str, Any]) -> None:
        self._settings[user_id] = dict(settings)

    def get_settings(self, user_id: str) -> Optional[Dict[str, Any]]:
        saved = self._settings.get(user_id)
        return dict(saved) if saved is not None else None


def policy_to_dict(policy: Policy) -> Dict[str, Any]:
    data = asdict(policy)
    data["type"] = policy.type.value
    data["status"] = policy.status.value
    data["tracked_value"] = policy.tracked_value
    return data
