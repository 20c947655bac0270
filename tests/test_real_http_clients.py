"""Real HTTP clients against an in-process httpx transport."""

from types import SimpleNamespace

import httpx
import pytest

from zyren.integrations.clients.real_http import (
    RealBiometricClient,
    RealLocationClient,
    RealWeatherClient,
    RealWearableClient,
)
from zyren.integrations.contracts.interfaces import WearableConnectionStatus
from zyren.integrations.policy.response_wrappers import IntegrationResponseError


@pytest.fixture
def upstream(monkeypatch):
    """Route every AsyncClient request to canned (status, json) answers keyed by path."""
    state = SimpleNamespace(routes={}, requests=[])
    real_async_client = httpx.AsyncClient

    def handler(request):
        state.requests.append(request)
        status, body = state.routes.get(request.url.path, (404, {"detail": "not found"}))
        return httpx.Response(status, json=body)

    def factory(*args, **kwargs):
        return real_async_client(*args, transport=httpx.MockTransport(handler), **kwargs)

    monkeypatch.setattr(httpx, "AsyncClient", factory)
    return state


@pytest.mark.asyncio
async def test_wearable_client_normalizes_payloads(upstream):
    upstream.routes["/wearable/status"] = (200, {"connectionStatus": "paired"})
    upstream.routes["/wearable/battery"] = (200, {"level": 55, "charging": True})
    client = RealWearableClient("https://wearable.test", api_key="secret")

    assert await client.get_connection_status() == WearableConnectionStatus.CONNECTED
    battery = await client.get_battery_status()

    assert battery.percentage == 55
    assert battery.is_charging is True
    assert upstream.requests[0].headers["Authorization"] == "Bearer secret"


@pytest.mark.asyncio
async def test_wearable_client_http_error_propagates(upstream):
    upstream.routes["/wearable/status"] = (503, {"detail": "down"})
    client = RealWearableClient("https://wearable.test")
    with pytest.raises(httpx.HTTPStatusError):
        await client.get_connection_status()


@pytest.mark.asyncio
async def test_wearable_client_requires_url(monkeypatch):
    monkeypatch.delenv("WEARABLE_API_URL", raising=False)
    with pytest.raises(ValueError):
        await RealWearableClient().get_connection_status()


@pytest.mark.asyncio
async def test_biometric_client_malformed_payload(upstream):
    upstream.routes["/biometrics/face/verify"] = (200, {"detail": "no decision"})
    client = RealBiometricClient("https://bio.test")
    with pytest.raises(IntegrationResponseError):
        await client.recognize_face()


@pytest.mark.asyncio
async def test_location_and_weather_clients(upstream):
    upstream.routes["/location/current"] = (200, {"lat": 40.4, "lng": -3.7})
    upstream.routes["/weather"] = (200, {"temperature": 88, "conditions": "Hot"})

    location = await RealLocationClient("https://gps.test").get_current_location()
    weather = await RealWeatherClient("https://weather.test").get_weather(location.latitude, location.longitude)

    assert location.latitude == 40.4
    assert weather.temperature_fahrenheit == 88
    weather_request = upstream.requests[-1]
    assert weather_request.url.params["lat"] == "40.4"
    assert weather_request.url.params["lng"] == "-3.7"
