"""Tests for the onboarding wizard: navigation, live premium, wearable check, confirmation."""

import asyncio

import pytest

from zyren.exceptions import SubmitNotAllowedError, WizardClosedError
from zyren.flows.onboarding import ConfirmationState, OnboardingWizard
from zyren.flows.validation import FormValidationError
from zyren.integrations.clients.mocks import MockBiometricClient, MockWearableClient
from zyren.integrations.contracts.interfaces import (
    FacialRecognitionResult,
    PolicyType,
    WearableConnectionStatus,
)
from zyren.pricing.engine import DataPriority


async def _go_to_step(wizard, step):
    while wizard.state.current_step < step:
        await wizard.next()


class FailingStore:
    def __init__(self):
        self.calls = 0

    def save_onboarding(self, user_id, configuration):
        self.calls += 1
        raise RuntimeError("database unavailable")


def test_initial_state_uses_defaults(wizard):
    assert wizard.state.current_step == 1
    assert wizard.state.safe_driving_discount is False
    assert wizard.state.data_priority == DataPriority.WEARABLE
    assert wizard.state.base_insurances[PolicyType.HEALTH] is True
    assert wizard.state.base_insurances[PolicyType.ACCIDENT] is True
    assert wizard.state.auto_activate_all is True
    assert wizard.state.simulated_premium == 81
    assert wizard.state.final_confirmation_state == ConfirmationState.IDLE


@pytest.mark.asyncio
async def test_navigation_stays_within_bounds(wizard):
    for _ in range(3):
        await wizard.prev()
    assert wizard.state.current_step == 1

    for _ in range(20):
        await wizard.next()
        assert 1 <= wizard.state.current_step <= 8
    assert wizard.state.current_step == 8
    assert wizard.step_name == "final_confirmation"

    for _ in range(20):
        await wizard.prev()
        assert 1 <= wizard.state.current_step <= 8
    assert wizard.state.current_step == 1
    await wizard.wait_for_wearable()


@pytest.mark.asyncio
async def test_wearable_fetched_on_step_five(wizard, wearable_client):
    await _go_to_step(wizard, 4)
    assert wearable_client.status_calls == 0

    await wizard.next()
    assert wizard.state.current_step == 5
    await wizard.wait_for_wearable()

    assert wizard.state.wearable_status == WearableConnectionStatus.CONNECTED
    assert wizard.state.wearable_battery.percentage == 80
    assert wizard.state.wearable_battery.is_charging is False
    assert wizard.loading_wearable is False


@pytest.mark.asyncio
async def test_wearable_fetched_at_most_once(wizard, wearable_client):
    await _go_to_step(wizard, 5)
    await wizard.wait_for_wearable()
    for _ in range(3):
        await wizard.prev()
        await wizard.next()
        await wizard.next()
        await wizard.prev()
    await wizard.wait_for_wearable()
    assert wearable_client.status_calls == 1
    assert wearable_client.battery_calls == 1


@pytest.mark.asyncio
async def test_disconnected_wearable_skips_battery(biometric_client, db, wizard_config):
    wearable = MockWearableClient(status=WearableConnectionStatus.DISCONNECTED)
    wizard = OnboardingWizard(wearable, biometric_client, db, "user-1", wizard_config=wizard_config)
    await _go_to_step(wizard, 5)
    await wizard.wait_for_wearable()
    assert wizard.state.wearable_status == WearableConnectionStatus.DISCONNECTED
    assert wizard.state.wearable_battery is None
    assert wearable.battery_calls == 0


@pytest.mark.asyncio
async def test_wearable_error_is_treated_as_disconnected(biometric_client, db, wizard_config):
    wearable = MockWearableClient(error=ConnectionError("bluetooth off"))
    wizard = OnboardingWizard(wearable, biometric_client, db, "user-1", wizard_config=wizard_config)
    await _go_to_step(wizard, 5)
    await wizard.wait_for_wearable()
    assert wizard.state.wearable_status == WearableConnectionStatus.DISCONNECTED
    assert wizard.state.wearable_battery is None
    assert wizard.loading_wearable is False


@pytest.mark.asyncio
async def test_wearable_timeout_is_treated_as_disconnected(biometric_client, db, wizard_config):
    wearable = MockWearableClient(delay=0.5)
    config = wizard_config.model_copy(update={"wearable_timeout": 0.05})
    wizard = OnboardingWizard(wearable, biometric_client, db, "user-1", wizard_config=config)
    await _go_to_step(wizard, 5)
    await wizard.wait_for_wearable()
    assert wizard.state.wearable_status == WearableConnectionStatus.DISCONNECTED


@pytest.mark.asyncio
async def test_slow_wearable_does_not_block_navigation(biometric_client, db, wizard_config):
    wearable = MockWearableClient(delay=0.2)
    wizard = OnboardingWizard(wearable, biometric_client, db, "user-1", wizard_config=wizard_config)
    await _go_to_step(wizard, 5)
    assert wizard.loading_wearable is True
    await wizard.next()
    assert wizard.state.current_step == 6
    await wizard.wait_for_wearable()
    assert wizard.loading_wearable is False
    assert wizard.state.wearable_status == WearableConnectionStatus.CONNECTED


def test_field_setters_recompute_premium(wizard):
    assert wizard.set_safe_driving_discount(True) == 76
    assert wizard.set_data_priority("mobile_context") == 66
    assert wizard.set_insurance("pension", True) == 74
    assert wizard.set_auto_activate_all(False) == 69
    assert wizard.state.simulated_premium == 69


def test_apply_changes_validates_and_recomputes(wizard):
    premium = wizard.apply_changes({
        "safe_driving_discount": "yes",
        "data_priority": "mobile_context",
        "base_insurances": {"education": True, "accident": "false"},
    })
    assert premium == 50 - 5 + 16 + 5
    assert wizard.state.base_insurances[PolicyType.EDUCATION] is True
    assert wizard.state.base_insurances[PolicyType.ACCIDENT] is False


def test_apply_changes_rejects_bad_payload_without_partial_update(wizard):
    with pytest.raises(FormValidationError) as exc_info:
        wizard.apply_changes({
            "safe_driving_discount": True,
            "data_priority": "satellite",
            "base_insurances": {"travel": True},
            "favourite_colour": "blue",
        })
    errors = exc_info.value.field_errors
    assert "data_priority" in errors
    assert "base_insurances.travel" in errors
    assert "favourite_colour" in errors
    assert wizard.state.safe_driving_discount is False
    assert wizard.state.simulated_premium == 81


def test_summary_lists_selected_insurances_and_breakdown(wizard):
    wizard.set_insurance("renta", True)
    summary = wizard.summary()
    assert [item["id"] for item in summary["selected_insurances"]] == ["health", "accident", "renta"]
    assert summary["simulated_premium"] == 89
    assert summary["breakdown"]["coverage_charge"] == 24


@pytest.mark.asyncio
async def test_submit_before_final_step_is_rejected(wizard, biometric_client):
    await _go_to_step(wizard, 7)
    with pytest.raises(SubmitNotAllowedError) as exc_info:
        await wizard.submit()
    assert exc_info.value.step == 7
    assert biometric_client.calls == 0
    await wizard.wait_for_wearable()


@pytest.mark.asyncio
async def test_successful_submit_persists_and_closes(wizard, db):
    wizard.set_safe_driving_discount(True)
    await _go_to_step(wizard, 8)
    await wizard.wait_for_wearable()

    outcome = await wizard.submit()

    assert outcome.success is True
    assert outcome.message == "Facial recognition successful."
    assert wizard.state.final_confirmation_state == ConfirmationState.SUCCESS
    record = db.get_onboarding("user-1")
    assert record.record_id == outcome.record_id
    assert record.configuration == {
        "safe_driving_discount": True,
        "data_priority": "wearable",
        "base_insurances": {
            "health": True, "accident": True, "pension": False, "renta": False, "education": False,
        },
        "auto_activate_all": True,
    }
    assert "simulated_premium" not in record.configuration

    with pytest.raises(WizardClosedError):
        await wizard.next()
    with pytest.raises(WizardClosedError):
        wizard.set_safe_driving_discount(False)


@pytest.mark.asyncio
async def test_failed_then_successful_biometric_keeps_selections(wearable_client, db, wizard_config):
    biometrics = MockBiometricClient([
        FacialRecognitionResult(success=False, message="Face not recognized."),
        FacialRecognitionResult(success=True, message="Facial recognition successful."),
    ])
    wizard = OnboardingWizard(wearable_client, biometrics, db, "user-1", wizard_config=wizard_config)
    wizard.set_insurance("education", True)
    await _go_to_step(wizard, 8)
    await wizard.wait_for_wearable()
    before = wizard.state.selections()
    premium_before = wizard.state.simulated_premium

    outcome = await wizard.submit()
    assert outcome.success is False
    assert outcome.message == "Face not recognized."
    assert wizard.state.final_confirmation_state == ConfirmationState.ERROR
    assert wizard.state.selections() == before
    assert wizard.state.simulated_premium == premium_before
    assert wizard.state.current_step == 8
    assert db.get_onboarding("user-1") is None

    await wizard.wait_for_cooldown()
    assert wizard.state.final_confirmation_state == ConfirmationState.IDLE

    outcome = await wizard.submit()
    assert outcome.success is True
    assert wizard.state.selections() == before
    assert db.get_onboarding("user-1").configuration == before
    assert biometrics.calls == 2


@pytest.mark.asyncio
async def test_submit_rejected_while_in_error_cooldown(wearable_client, db, wizard_config):
    biometrics = MockBiometricClient([FacialRecognitionResult(success=False)])
    config = wizard_config.model_copy(update={"error_cooldown": 0.2})
    wizard = OnboardingWizard(wearable_client, biometrics, db, "user-1", wizard_config=config)
    await _go_to_step(wizard, 8)
    await wizard.wait_for_wearable()

    outcome = await wizard.submit()
    assert outcome.success is False
    assert outcome.message == "Could not confirm your identity."

    with pytest.raises(SubmitNotAllowedError) as exc_info:
        await wizard.submit()
    assert exc_info.value.confirmation_state == "error"
    assert biometrics.calls == 1

    await wizard.wait_for_cooldown()
    assert wizard.state.final_confirmation_state == ConfirmationState.IDLE


@pytest.mark.asyncio
async def test_biometric_exception_becomes_error_state(wearable_client, db, wizard_config):
    biometrics = MockBiometricClient([RuntimeError("camera unavailable")])
    wizard = OnboardingWizard(wearable_client, biometrics, db, "user-1", wizard_config=wizard_config)
    await _go_to_step(wizard, 8)
    await wizard.wait_for_wearable()

    outcome = await wizard.submit()

    assert outcome.success is False
    assert outcome.message == "camera unavailable"
    assert wizard.state.final_confirmation_state == ConfirmationState.ERROR
    await wizard.wait_for_cooldown()


@pytest.mark.asyncio
async def test_biometric_timeout_becomes_error_state(wearable_client, db, wizard_config):
    biometrics = MockBiometricClient(delay=0.5)
    config = wizard_config.model_copy(update={"biometric_timeout": 0.05})
    wizard = OnboardingWizard(wearable_client, biometrics, db, "user-1", wizard_config=config)
    await _go_to_step(wizard, 8)
    await wizard.wait_for_wearable()

    outcome = await wizard.submit()

    assert outcome.success is False
    assert outcome.message == "Facial confirmation timed out."
    await wizard.wait_for_cooldown()
    assert wizard.state.final_confirmation_state == ConfirmationState.IDLE


@pytest.mark.asyncio
async def test_persistence_failure_keeps_wizard_open(wearable_client, biometric_client, wizard_config):
    store = FailingStore()
    wizard = OnboardingWizard(wearable_client, biometric_client, store, "user-1", wizard_config=wizard_config)
    await _go_to_step(wizard, 8)
    await wizard.wait_for_wearable()

    outcome = await wizard.submit()

    assert outcome.success is False
    assert store.calls == 1
    assert wizard.closed is False
    assert wizard.state.final_confirmation_state == ConfirmationState.ERROR
    await wizard.wait_for_cooldown()
    assert wizard.state.final_confirmation_state == ConfirmationState.IDLE


@pytest.mark.asyncio
async def test_cancel_stops_inflight_wearable_fetch(biometric_client, db, wizard_config):
    wearable = MockWearableClient(delay=0.5)
    wizard = OnboardingWizard(wearable, biometric_client, db, "user-1", wizard_config=wizard_config)
    await _go_to_step(wizard, 5)
    await asyncio.sleep(0)
    wizard.cancel()
    await wizard.wait_for_wearable()
    assert wizard.loading_wearable is False
    assert wearable.battery_calls == 0


@pytest.mark.asyncio
async def test_cancelled_submit_returns_to_idle_and_allows_retry(wearable_client, db, wizard_config):
    biometrics = MockBiometricClient(delay=1.0)
    wizard = OnboardingWizard(wearable_client, biometrics, db, "user-1", wizard_config=wizard_config)
    await _go_to_step(wizard, 8)
    await wizard.wait_for_wearable()

    task = asyncio.ensure_future(wizard.submit())
    await asyncio.sleep(0.05)
    assert wizard.state.final_confirmation_state == ConfirmationState.SIGNING
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert wizard.state.final_confirmation_state == ConfirmationState.IDLE
    biometrics.delay = 0
    outcome = await wizard.submit()
    assert outcome.success is True
