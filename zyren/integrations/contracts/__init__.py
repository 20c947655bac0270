"""
Contracts (data models).

This folder defines the request/response shapes for external integrations:
- Wearable connection, battery and telemetry readings
- Biometric (facial recognition) confirmation results
- Location and weather lookups used by the dashboard
- The onboarding persistence boundary

Both mock and real HTTP clients return these contracts, so the wizard,
simulator and dashboard never depend on raw upstream payloads.
"""
