"""
Pricing core: onboarding premium, per-policy simulation and the simulator.
"""
from .engine import (
    DataPriority,
    PricingFactors,
    compute_onboarding_premium,
    compute_simulated_cost,
    describe_onboarding_premium,
)
from .simulator import PolicySimulator, SimulatorState

__all__ = [
    'DataPriority',
    'PolicySimulator',
    'PricingFactors',
    'SimulatorState',
    'compute_onboarding_premium',
    'compute_simulated_cost',
    'describe_onboarding_premium',
]
