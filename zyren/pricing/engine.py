"""
Pricing engine - onboarding premium and per-policy simulated cost.

Both functions are pure: they read a configuration snapshot and return an
amount in credits, with no I/O and no state of their own.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Dict, Union

from zyren.exceptions import PricingError
from zyren.integrations.contracts.interfaces import Policy
from zyren.pricing.strategies import get_pricing_strategy
from zyren.utils.config_loader import PricingConfig

logger = logging.getLogger(__name__)

DEFAULT_PRICING = PricingConfig()

Number = Union[int, float]


class DataPriority(str, Enum):
    WEARABLE = "wearable"
    MOBILE_CONTEXT = "mobile_context"


@dataclass(frozen=True)
class PricingFactors:
    safe_driving_discount: bool = False
    data_priority: DataPriority = DataPriority.WEARABLE
    selected_coverage_count: int = 0
    auto_activate_all: bool = False


def describe_onboarding_premium(factors: PricingFactors, config: PricingConfig = DEFAULT_PRICING) -> Dict[str, int]:
    """Break the onboarding premium down into its additive terms."""
    if factors.selected_coverage_count < 0:
        raise PricingError(f"selected_coverage_count must be >= 0; got {factors.selected_coverage_count}")

    breakdown = {
        "base": config.base_cost,
        "safe_driving_discount": -config.safe_driving_discount if factors.safe_driving_discount else 0,
        "data_priority_surcharge": config.wearable_surcharge if factors.data_priority == DataPriority.WEARABLE else 0,
        "coverage_charge": config.per_coverage_cost * factors.selected_coverage_count,
        "automation_surcharge": config.auto_activate_surcharge if factors.auto_activate_all else 0,
    }
    subtotal = sum(breakdown.values())
    breakdown["subtotal"] = subtotal
    breakdown["floor_applied"] = int(subtotal < config.premium_floor)
    breakdown["total"] = max(subtotal, config.premium_floor)
    return breakdown


def compute_onboarding_premium(factors: PricingFactors, config: PricingConfig = DEFAULT_PRICING) -> int:
    """Aggregate premium, in credits, for the choices made during onboarding."""
    return describe_onboarding_premium(factors, config)["total"]


def compute_simulated_cost(policy: Policy, candidate_value: Number, config: PricingConfig = DEFAULT_PRICING) -> Number:
    """Cost of ``policy`` if its coverage or goal were moved to ``candidate_value``.

    A policy without a tracked value (zero coverage and no goal) has nothing
    to scale against, so its current credit cost is returned untouched.
    """
    tracked_value = policy.tracked_value
    base_cost = policy.credit_cost
    if tracked_value == 0:
        return base_cost

    strategy = get_pricing_strategy(policy.type)
    raw_cost = strategy(base_cost, tracked_value, candidate_value, config)
    cost = max(config.simulated_cost_floor, round_credits(raw_cost))
    logger.debug(
        "[Pricing] simulate policy=%s type=%s tracked=%s candidate=%s raw=%s cost=%s",
        policy.id, policy.type.value, tracked_value, candidate_value, raw_cost, cost,
    )
    return cost


def round_credits(value: Number) -> int:
    """Round half away from zero, the way the app displays credits."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
