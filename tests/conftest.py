"""Pytest fixtures for pricing, simulator and onboarding tests."""

import pytest

from zyren.database.memory import MemoryDB
from zyren.database.sessions import SessionCache
from zyren.flows.onboarding import OnboardingWizard
from zyren.integrations.clients.mocks import (
    MockBiometricClient,
    MockLocationClient,
    MockWeatherClient,
    MockWearableClient,
)
from zyren.session.state_manager import StateManager
from zyren.utils.config_loader import WizardConfig, ZyrenConfig


@pytest.fixture
def db():
    """In-memory store seeded with the demo policies."""
    return MemoryDB()


@pytest.fixture
def wearable_client():
    return MockWearableClient()


@pytest.fixture
def biometric_client():
    return MockBiometricClient()


@pytest.fixture
def location_client():
    return MockLocationClient()


@pytest.fixture
def weather_client():
    return MockWeatherClient()


@pytest.fixture
def wizard_config():
    """Wizard timings with no error cooldown so retries run immediately."""
    return WizardConfig(error_cooldown=0, wearable_timeout=1, biometric_timeout=1)


@pytest.fixture
def wizard(wearable_client, biometric_client, db, wizard_config):
    return OnboardingWizard(wearable_client, biometric_client, db, user_id="user-1", wizard_config=wizard_config)


@pytest.fixture
def state_manager(db, wearable_client, biometric_client, wizard_config):
    return StateManager(SessionCache(), db, wearable_client, biometric_client, ZyrenConfig(wizard=wizard_config))
