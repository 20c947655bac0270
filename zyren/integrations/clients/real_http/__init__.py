"""
Real HTTP integration clients.

These clients communicate with the external device and data services via HTTP:
- wearable gateway (connection status, battery, telemetry)
- identity provider (facial recognition)
- GPS and weather lookups for the dashboard

Important:
- Must implement the same interfaces as the mock clients
- Must return data shaped according to zyren/integrations/contracts/*

Switching:
The selection of mock vs real clients happens in zyren/api/main.py only.
"""

from .biometrics import RealBiometricClient
from .location import RealLocationClient, RealWeatherClient
from .wearable import RealWearableClient

__all__ = [
    "RealBiometricClient",
    "RealLocationClient",
    "RealWeatherClient",
    "RealWearableClient",
]
