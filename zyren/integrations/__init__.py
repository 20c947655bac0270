"""
Integrations layer.
This package contains all code used to communicate with external systems such as:
- Wearable devices (connection status, battery, heart rate / stress readings)
- Biometric confirmation (facial recognition used to sign the onboarding)
- GPS and weather services consumed by the dashboard

Key rule:
- The wizard, simulator and dashboard MUST NOT call external APIs directly.
- They call integration clients (under zyren/integrations/clients).
- We use MOCK clients during development and swap to REAL_HTTP clients when APIs are available.

Switching implementations:
- The selection of mock vs real clients happens in ONE place (zyren/api/main.py).
"""

from .contracts.interfaces import (
    ActivationEvent,
    BiometricClient,
    FacialRecognitionResult,
    Location,
    LocationClient,
    OnboardingRecord,
    OnboardingStore,
    Policy,
    PolicyStatus,
    PolicyType,
    Weather,
    WeatherClient,
    WearableBattery,
    WearableClient,
    WearableConnectionStatus,
    WearableData,
)

__all__ = [
    "ActivationEvent", "BiometricClient", "FacialRecognitionResult",
    "Location", "LocationClient", "OnboardingRecord", "OnboardingStore",
    "Policy", "PolicyStatus", "PolicyType", "Weather", "WeatherClient",
    "WearableBattery", "WearableClient", "WearableConnectionStatus", "WearableData",
]
