"""
Mock integration clients.

These clients return fake (but realistic) responses without calling any external API.
They are used when:
- Wearable, biometric, GPS or weather services are not available
- We want to run the onboarding wizard and dashboard end-to-end in tests

Important:
- Mock clients implement the SAME interfaces as real HTTP clients
  (zyren/integrations/contracts/interfaces.py).

Switching to real:
Set integrations.use_real_clients (or ZYREN_USE_REAL_CLIENTS=1) and the
service URLs; zyren/api/main.py then wires clients/real_http/* instead.
"""

from .biometrics import MockBiometricClient
from .location import MockLocationClient, MockWeatherClient
from .wearable import MockWearableClient

__all__ = [
    "MockBiometricClient",
    "MockLocationClient",
    "MockWeatherClient",
    "MockWearableClient",
]
