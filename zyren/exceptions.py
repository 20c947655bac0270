"""Exception types raised by the pricing core.

Every error the core raises on purpose derives from ``ZyrenError`` so the API
layer can map the whole family to client errors in one place.
"""

from __future__ import annotations


class ZyrenError(Exception):
    """Base class for pricing, simulator and wizard errors."""


class PricingError(ZyrenError, ValueError):
    """Raised for inputs the pricing formulas are not defined for."""


class SimulatorError(ZyrenError):
    """Raised when the simulator is driven without a selected policy."""


class WizardError(ZyrenError):
    """Base class for onboarding wizard errors."""


class WizardClosedError(WizardError):
    """The wizard already completed and its state was handed off."""


class SubmitNotAllowedError(WizardError):
    def __init__(self, message: str, *, step: int, confirmation_state: str) -> None:
        super().__init__(message)
        self.step = step
        self.confirmation_state = confirmation_state
