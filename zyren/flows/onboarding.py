"""
Onboarding flow - Linear eight-step wizard that collects pricing preferences,
keeps a live premium estimate, checks the wearable once, and signs the final
configuration with a facial recognition check.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from zyren.exceptions import SubmitNotAllowedError, WizardClosedError
from zyren.flows.validation import add_error, parse_bool, raise_if_errors, validate_in
from zyren.integrations.contracts.interfaces import (
    BiometricClient,
    FacialRecognitionResult,
    OnboardingRecord,
    OnboardingStore,
    PolicyType,
    WearableBattery,
    WearableClient,
    WearableConnectionStatus,
)
from zyren.pricing.engine import (
    DataPriority,
    PricingFactors,
    compute_onboarding_premium,
    describe_onboarding_premium,
)
from zyren.utils.config_loader import PricingConfig, WizardConfig

logger = logging.getLogger(__name__)

# Base coverages offered on the "base insurances" step
INSURANCE_OPTIONS = [
    {"id": PolicyType.HEALTH, "name": "Salud", "description": "Basic health coverage."},
    {"id": PolicyType.ACCIDENT, "name": "Accidentes Personales", "description": "Coverage for accidents."},
    {"id": PolicyType.PENSION, "name": "Pensión Voluntaria", "description": "Supplemental retirement savings."},
    {"id": PolicyType.RENTA, "name": "Rentas Voluntarias", "description": "Income stream during retirement."},
    {"id": PolicyType.EDUCATION, "name": "Seguro Educativo", "description": "Savings for future education costs."},
]


class ConfirmationState(str, Enum):
    IDLE = "idle"
    SIGNING = "signing"
    SUCCESS = "success"
    ERROR = "error"


def _default_base_insurances() -> Dict[PolicyType, bool]:
    return {
        PolicyType.HEALTH: True,
        PolicyType.ACCIDENT: True,
        PolicyType.PENSION: False,
        PolicyType.RENTA: False,
        PolicyType.EDUCATION: False,
    }


@dataclass
class WizardState:
    current_step: int = 1
    safe_driving_discount: bool = False
    data_priority: DataPriority = DataPriority.WEARABLE
    base_insurances: Dict[PolicyType, bool] = field(default_factory=_default_base_insurances)
    auto_activate_all: bool = True
    wearable_status: Optional[WearableConnectionStatus] = None
    wearable_battery: Optional[WearableBattery] = None
    simulated_premium: int = 0
    final_confirmation_state: ConfirmationState = ConfirmationState.IDLE
    confirmation_message: Optional[str] = None

    def to_factors(self) -> PricingFactors:
        return PricingFactors(
            safe_driving_discount=self.safe_driving_discount,
            data_priority=self.data_priority,
            selected_coverage_count=sum(1 for enabled in self.base_insurances.values() if enabled),
            auto_activate_all=self.auto_activate_all,
        )

    def selections(self) -> Dict[str, Any]:
        """The user's choices, without derived or transient fields."""
        return {
            "safe_driving_discount": self.safe_driving_discount,
            "data_priority": self.data_priority.value,
            "base_insurances": {key.value: enabled for key, enabled in self.base_insurances.items()},
            "auto_activate_all": self.auto_activate_all,
        }


@dataclass
class SubmissionOutcome:
    success: bool
    message: Optional[str] = None
    record_id: Optional[str] = None


class OnboardingWizard:
    STEPS = [
        "welcome",                  # Step 1
        "permissions",              # Step 2
        "learning",                 # Step 3
        "preferences",              # Step 4: safe driving discount, data priority
        "wearable_configuration",   # Step 5: wearable status check
        "base_insurances",          # Step 6: coverages, auto-activation
        "summary",                  # Step 7: estimated credit cost
        "final_confirmation",       # Step 8: facial recognition signature
    ]

    def __init__(
        self,
        wearable: WearableClient,
        biometrics: BiometricClient,
        store: OnboardingStore,
        user_id: str,
        wizard_config: Optional[WizardConfig] = None,
        pricing_config: Optional[PricingConfig] = None,
    ) -> None:
        self.wearable = wearable
        self.biometrics = biometrics
        self.store = store
        self.user_id = user_id
        self.wizard_config = wizard_config or WizardConfig()
        self.pricing_config = pricing_config or PricingConfig()

        self.state = WizardState()
        self.loading_wearable = False
        self.closed = False
        self.record: Optional[OnboardingRecord] = None
        self._wearable_requested = False
        self._wearable_task: Optional[asyncio.Task] = None
        self._cooldown_task: Optional[asyncio.Task] = None
        self._recompute()

    @property
    def total_steps(self) -> int:
        return self.wizard_config.total_steps

    @property
    def step_name(self) -> str:
        index = self.state.current_step - 1
        return self.STEPS[index] if index < len(self.STEPS) else f"step_{self.state.current_step}"

    # ------------------------------------------------------------------ #
    # Navigation
    # ------------------------------------------------------------------ #
    async def next(self) -> int:
        self._ensure_open()
        self.state.current_step = min(self.state.current_step + 1, self.total_steps)
        self._on_enter_step()
        return self.state.current_step

    async def prev(self) -> int:
        self._ensure_open()
        self.state.current_step = max(self.state.current_step - 1, 1)
        self._on_enter_step()
        return self.state.current_step

    def _on_enter_step(self) -> None:
        logger.info("[Onboarding] user_id=%s step=%s (%s)", self.user_id, self.state.current_step, self.step_name)
        if self.state.current_step == self.wizard_config.wearable_step and not self._wearable_requested:
            self._wearable_requested = True
            self.loading_wearable = True
            self._wearable_task = asyncio.get_running_loop().create_task(self._fetch_wearable())

    async def _fetch_wearable(self) -> None:
        timeout = self.wizard_config.wearable_timeout
        try:
            status = await asyncio.wait_for(self.wearable.get_connection_status(), timeout)
            self.state.wearable_status = status
            if status == WearableConnectionStatus.CONNECTED:
                self.state.wearable_battery = await asyncio.wait_for(self.wearable.get_battery_status(), timeout)
            logger.info("[Onboarding] wearable status=%s battery=%s", status.value, self.state.wearable_battery)
        except asyncio.CancelledError:
            if self.state.wearable_status is None:
                self.state.wearable_status = WearableConnectionStatus.DISCONNECTED
            raise
        except Exception as exc:
            logger.warning("[Onboarding] wearable fetch failed, treating as disconnected: %s", exc)
            self.state.wearable_status = WearableConnectionStatus.DISCONNECTED
            self.state.wearable_battery = None
        finally:
            self.loading_wearable = False

    async def wait_for_wearable(self) -> None:
        """Wait for the step-5 wearable check, if one was started."""
        if self._wearable_task is not None:
            await asyncio.gather(self._wearable_task, return_exceptions=True)

    # ------------------------------------------------------------------ #
    # Field changes
    # ------------------------------------------------------------------ #
    def set_safe_driving_discount(self, enabled: bool) -> int:
        self._ensure_open()
        self.state.safe_driving_discount = bool(enabled)
        return self._recompute()

    def set_data_priority(self, priority) -> int:
        self._ensure_open()
        self.state.data_priority = DataPriority(priority)
        return self._recompute()

    def set_insurance(self, key, enabled: bool) -> int:
        self._ensure_open()
        self.state.base_insurances[PolicyType(key)] = bool(enabled)
        return self._recompute()

    def set_auto_activate_all(self, enabled: bool) -> int:
        self._ensure_open()
        self.state.auto_activate_all = bool(enabled)
        return self._recompute()

    def apply_changes(self, payload: Dict[str, Any]) -> int:
        """Validate and apply a batch of field changes from a form submission."""
        self._ensure_open()
        errors: Dict[str, str] = {}
        updates: Dict[str, Any] = {}

        for key, value in (payload or {}).items():
            if key in ("safe_driving_discount", "auto_activate_all"):
                updates[key] = parse_bool(value, key, errors)
            elif key == "data_priority":
                updates[key] = validate_in(value, [p.value for p in DataPriority], errors, key, label="Data priority")
            elif key == "base_insurances":
                if not isinstance(value, dict):
                    add_error(errors, key, "base_insurances must be an object of insurance -> true/false")
                    continue
                insurances = {}
                for ins_key, enabled in value.items():
                    field_name = f"base_insurances.{ins_key}"
                    validate_in(ins_key, [p.value for p in PolicyType], errors, field_name, label="Insurance")
                    insurances[ins_key] = parse_bool(enabled, field_name, errors)
                updates[key] = insurances
            else:
                add_error(errors, key, "Unknown onboarding field")

        raise_if_errors(errors)

        if "safe_driving_discount" in updates:
            self.state.safe_driving_discount = updates["safe_driving_discount"]
        if "data_priority" in updates:
            self.state.data_priority = DataPriority(updates["data_priority"])
        for ins_key, enabled in updates.get("base_insurances", {}).items():
            self.state.base_insurances[PolicyType(ins_key)] = enabled
        if "auto_activate_all" in updates:
            self.state.auto_activate_all = updates["auto_activate_all"]
        return self._recompute()

    def _recompute(self) -> int:
        self.state.simulated_premium = compute_onboarding_premium(self.state.to_factors(), self.pricing_config)
        logger.debug("[Onboarding] premium=%s factors=%s", self.state.simulated_premium, self.state.to_factors())
        return self.state.simulated_premium

    # ------------------------------------------------------------------ #
    # Final confirmation
    # ------------------------------------------------------------------ #
    async def submit(self) -> SubmissionOutcome:
        self._ensure_open()
        if self.state.current_step != self.total_steps:
            raise SubmitNotAllowedError(
                f"Submission is only available on step {self.total_steps}",
                step=self.state.current_step,
                confirmation_state=self.state.final_confirmation_state.value,
            )
        if self.state.final_confirmation_state != ConfirmationState.IDLE:
            raise SubmitNotAllowedError(
                f"Confirmation is {self.state.final_confirmation_state.value}; wait before retrying",
                step=self.state.current_step,
                confirmation_state=self.state.final_confirmation_state.value,
            )

        self.state.final_confirmation_state = ConfirmationState.SIGNING
        self.state.confirmation_message = None
        logger.info("[Onboarding] user_id=%s signing final configuration", self.user_id)

        try:
            result = await asyncio.wait_for(self.biometrics.recognize_face(), self.wizard_config.biometric_timeout)
        except asyncio.CancelledError:
            self.state.final_confirmation_state = ConfirmationState.IDLE
            raise
        except asyncio.TimeoutError:
            result = FacialRecognitionResult(success=False, message="Facial confirmation timed out.")
        except Exception as exc:
            logger.error("[Onboarding] facial recognition error: %s", exc, exc_info=True)
            result = FacialRecognitionResult(success=False, message=str(exc) or None)

        if not result.success:
            return self._fail(result.message or "Could not confirm your identity.")

        try:
            self.record = self.store.save_onboarding(self.user_id, self.state.selections())
        except Exception as exc:
            logger.error("[Onboarding] saving configuration failed: %s", exc, exc_info=True)
            return self._fail("Could not save your configuration. Please try again.")

        self.state.final_confirmation_state = ConfirmationState.SUCCESS
        self.state.confirmation_message = result.message
        self.closed = True
        logger.info("[Onboarding] user_id=%s onboarding complete record_id=%s", self.user_id, self.record.record_id)
        return SubmissionOutcome(success=True, message=result.message, record_id=self.record.record_id)

    def _fail(self, message: str) -> SubmissionOutcome:
        self.state.final_confirmation_state = ConfirmationState.ERROR
        self.state.confirmation_message = message
        logger.info("[Onboarding] confirmation failed: %s (retry in %ss)", message, self.wizard_config.error_cooldown)
        self._cooldown_task = asyncio.get_running_loop().create_task(self._reset_after_cooldown())
        return SubmissionOutcome(success=False, message=message)

    async def _reset_after_cooldown(self) -> None:
        await asyncio.sleep(self.wizard_config.error_cooldown)
        if self.state.final_confirmation_state == ConfirmationState.ERROR:
            self.state.final_confirmation_state = ConfirmationState.IDLE

    async def wait_for_cooldown(self) -> None:
        if self._cooldown_task is not None:
            await asyncio.gather(self._cooldown_task, return_exceptions=True)

    # ------------------------------------------------------------------ #
    # Lifecycle / views
    # ------------------------------------------------------------------ #
    def cancel(self) -> None:
        """Cancel in-flight background work when the wizard is discarded."""
        for task in (self._wearable_task, self._cooldown_task):
            if task is not None and not task.done():
                task.cancel()
        # A fetch cancelled before it started never reaches its own cleanup.
        self.loading_wearable = False

    def _ensure_open(self) -> None:
        if self.closed:
            raise WizardClosedError("Onboarding already completed")

    def summary(self) -> Dict[str, Any]:
        selected = [
            {"id": opt["id"].value, "name": opt["name"], "description": opt["description"]}
            for opt in INSURANCE_OPTIONS
            if self.state.base_insurances.get(opt["id"])
        ]
        return {
            "selected_insurances": selected,
            "safe_driving_discount": self.state.safe_driving_discount,
            "data_priority": self.state.data_priority.value,
            "auto_activate_all": self.state.auto_activate_all,
            "simulated_premium": self.state.simulated_premium,
            "breakdown": describe_onboarding_premium(self.state.to_factors(), self.pricing_config),
        }

    def snapshot(self) -> Dict[str, Any]:
        battery = self.state.wearable_battery
        return {
            "current_step": self.state.current_step,
            "step_name": self.step_name,
            "total_steps": self.total_steps,
            **self.state.selections(),
            "simulated_premium": self.state.simulated_premium,
            "wearable_status": self.state.wearable_status.value if self.state.wearable_status else None,
            "wearable_battery": (
                {"percentage": battery.percentage, "is_charging": battery.is_charging} if battery else None
            ),
            "loading_wearable": self.loading_wearable,
            "final_confirmation_state": self.state.final_confirmation_state.value,
            "confirmation_message": self.state.confirmation_message,
            "completed": self.closed,
        }
