"""Registry of per-policy-type simulation strategies.

A strategy maps ``(base_cost, tracked_value, candidate_value)`` to an
unrounded cost. Savings-like products (pension, renta, education) are priced
as contributions and move linearly with the target; protection products
(health, accident) scale proportionally with the insured amount.
"""

from __future__ import annotations

from typing import Callable, Dict

from zyren.integrations.contracts.interfaces import PolicyType
from zyren.utils.config_loader import PricingConfig

PricingStrategy = Callable[[float, float, float, PricingConfig], float]


def linear_contribution_cost(base_cost: float, tracked_value: float, candidate_value: float, config: PricingConfig) -> float:
    return base_cost + (candidate_value - tracked_value) * config.savings_sensitivity


def proportional_coverage_cost(base_cost: float, tracked_value: float, candidate_value: float, config: PricingConfig) -> float:
    return base_cost * (candidate_value / tracked_value)


_REGISTRY: Dict[PolicyType, PricingStrategy] = {
    PolicyType.HEALTH: proportional_coverage_cost,
    PolicyType.ACCIDENT: proportional_coverage_cost,
    PolicyType.PENSION: linear_contribution_cost,
    PolicyType.RENTA: linear_contribution_cost,
    PolicyType.EDUCATION: linear_contribution_cost,
}


def get_pricing_strategy(policy_type: PolicyType) -> PricingStrategy:
    """Return the strategy for a policy type with proportional fallback."""
    return _REGISTRY.get(policy_type, proportional_coverage_cost)


def register_pricing_strategy(policy_type: PolicyType, strategy: PricingStrategy) -> None:
    _REGISTRY[policy_type] = strategy
