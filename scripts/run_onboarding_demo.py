#!/usr/bin/env python3
"""
Run the onboarding wizard and the policy simulator end-to-end and print each
stage to the terminal. Uses the mock integration clients, so no services are
needed.

Usage (from repo root):
  python scripts/run_onboarding_demo.py
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from zyren.database.memory import MemoryDB, policy_to_dict
from zyren.flows.onboarding import OnboardingWizard
from zyren.integrations.clients.mocks import MockBiometricClient, MockWearableClient
from zyren.integrations.contracts.interfaces import FacialRecognitionResult
from zyren.pricing.simulator import PolicySimulator
from zyren.utils.config_loader import load_zyren_config


def setup_logging():
    """Log to terminal at INFO so every stage is visible."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


def print_stage(title: str, data: dict | list | str):
    """Print a stage header and data to the terminal."""
    print("\n" + "=" * 60)
    print(f"  {title}")
    print("=" * 60)
    if isinstance(data, (dict, list)):
        print(json.dumps(data, indent=2, default=str))
    else:
        print(data)
    print()


async def main():
    setup_logging()
    config = load_zyren_config()
    db = MemoryDB()

    # First face scan fails so the retry path is visible
    biometrics = MockBiometricClient([
        FacialRecognitionResult(success=False, message="Face not recognized. Please try again."),
        FacialRecognitionResult(success=True, message="Facial recognition successful."),
    ])
    wizard = OnboardingWizard(
        MockWearableClient(),
        biometrics,
        db,
        user_id="demo-user",
        wizard_config=config.wizard.model_copy(update={"error_cooldown": 0.5}),
        pricing_config=config.pricing,
    )
    print_stage("ONBOARDING STEP 1: Initial state", wizard.snapshot())

    # --- Steps 2-4: preferences ---
    await wizard.next()
    await wizard.next()
    await wizard.next()
    wizard.apply_changes({"safe_driving_discount": True, "data_priority": "wearable"})
    print_stage("ONBOARDING STEP 4: Preferences set", wizard.snapshot())

    # --- Step 5: wearable check runs in the background ---
    await wizard.next()
    await wizard.wait_for_wearable()
    print_stage("ONBOARDING STEP 5: Wearable configuration", wizard.snapshot())

    # --- Step 6: base insurances ---
    await wizard.next()
    wizard.set_insurance("education", True)
    print_stage("ONBOARDING STEP 6: Base insurances", wizard.snapshot())

    # --- Step 7: summary ---
    await wizard.next()
    print_stage("ONBOARDING STEP 7: Summary", wizard.summary())

    # --- Step 8: facial confirmation, fail then retry ---
    await wizard.next()
    outcome = await wizard.submit()
    print_stage("ONBOARDING STEP 8: First confirmation attempt", outcome.__dict__)
    await wizard.wait_for_cooldown()
    outcome = await wizard.submit()
    print_stage("ONBOARDING STEP 8: Retry", outcome.__dict__)

    record = db.get_onboarding("demo-user")
    print_stage("PERSISTED CONFIGURATION", record.configuration if record else "nothing saved")

    # --- Simulator ---
    simulator = PolicySimulator(config.pricing)
    for policy_id, candidate in (("health1", 20000), ("pension1", 60000)):
        policy = db.get_policy(policy_id)
        print_stage(f"SIMULATOR: {policy.name}", policy_to_dict(policy))
        simulator.select(policy)
        simulator.set_candidate_value(candidate)
        print_stage(f"SIMULATOR: {policy_id} at {candidate}", simulator.snapshot())


if __name__ == "__main__":
    asyncio.run(main())
