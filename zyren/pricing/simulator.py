"""
Policy cost simulator.

Lets a user explore what an existing policy would cost at a different
coverage or goal amount. The policy itself is never modified; committing a
new amount is a separate, external action.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from zyren.exceptions import SimulatorError
from zyren.integrations.contracts.interfaces import Policy
from zyren.pricing.engine import DEFAULT_PRICING, Number, compute_simulated_cost
from zyren.utils.config_loader import PricingConfig

logger = logging.getLogger(__name__)


@dataclass
class SimulatorState:
    selected_policy: Optional[Policy] = None
    candidate_value: Optional[Number] = None
    simulated_cost: Optional[Number] = None
    slider_range: Optional[Tuple[float, float]] = None


class PolicySimulator:
    def __init__(self, config: PricingConfig = DEFAULT_PRICING) -> None:
        self.config = config
        self.state = SimulatorState()

    @property
    def selected_policy(self) -> Optional[Policy]:
        return self.state.selected_policy

    @property
    def candidate_value(self) -> Optional[Number]:
        return self.state.candidate_value

    @property
    def simulated_cost(self) -> Optional[Number]:
        return self.state.simulated_cost

    @property
    def slider_range(self) -> Optional[Tuple[float, float]]:
        return self.state.slider_range

    @property
    def displayed_cost(self) -> Optional[Number]:
        """Simulated cost once the slider moved, else the policy's current cost."""
        if self.state.selected_policy is None:
            return None
        if self.state.simulated_cost is not None:
            return self.state.simulated_cost
        return self.state.selected_policy.credit_cost

    def select(self, policy: Policy) -> SimulatorState:
        tracked = policy.tracked_value
        self.state = SimulatorState(
            selected_policy=policy,
            candidate_value=tracked,
            simulated_cost=None,
            slider_range=(
                tracked / 2 or self.config.slider_min_fallback,
                tracked * 2 or self.config.slider_max_fallback,
            ),
        )
        logger.info("[Simulator] select policy=%s tracked=%s range=%s", policy.id, tracked, self.state.slider_range)
        return self.state

    def set_candidate_value(self, value: Number) -> Number:
        policy = self.state.selected_policy
        if policy is None:
            raise SimulatorError("No policy selected for simulation")

        low, high = self.state.slider_range
        clamped = min(max(value, low), high)
        if clamped != value:
            logger.debug("[Simulator] candidate %s outside [%s, %s]; clamped to %s", value, low, high, clamped)

        self.state.candidate_value = clamped
        self.state.simulated_cost = compute_simulated_cost(policy, clamped, self.config)
        logger.info("[Simulator] policy=%s candidate=%s cost=%s", policy.id, clamped, self.state.simulated_cost)
        return self.state.simulated_cost

    def deselect(self) -> None:
        self.state = SimulatorState()

    def snapshot(self) -> Dict[str, Any]:
        policy = self.state.selected_policy
        return {
            "policy_id": policy.id if policy else None,
            "tracks_goal": policy.tracks_goal if policy else None,
            "tracked_value": policy.tracked_value if policy else None,
            "candidate_value": self.state.candidate_value,
            "slider_min": self.state.slider_range[0] if self.state.slider_range else None,
            "slider_max": self.state.slider_range[1] if self.state.slider_range else None,
            "simulated_cost": self.state.simulated_cost,
            "displayed_cost": self.displayed_cost,
        }
