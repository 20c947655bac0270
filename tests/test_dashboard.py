import pytest

from zyren.dashboard import DashboardService, build_recommendations, stress_level_label
from zyren.integrations.clients.mocks import MockLocationClient, MockWeatherClient, MockWearableClient
from zyren.integrations.contracts.interfaces import Weather, WearableConnectionStatus


@pytest.mark.parametrize("level,label", [(0, "low"), (29, "low"), (30, "medium"), (59, "medium"), (60, "high")])
def test_stress_level_label(level, label):
    assert stress_level_label(level) == label


def test_recommendations_without_heat_alert():
    recs = build_recommendations(Weather(temperature_fahrenheit=75, conditions="Sunny"))
    assert [r.id for r in recs] == ["rec_profile_update", "rec_education_explore"]


def test_recommendations_heat_alert_above_threshold():
    recs = build_recommendations(Weather(temperature_fahrenheit=92, conditions="Hot"))
    assert len(recs) == 3
    assert recs[-1].id == "rec_heat_alert"
    assert recs[-1].priority == "low"


def test_recommendations_no_heat_alert_at_threshold():
    recs = build_recommendations(Weather(temperature_fahrenheit=85, conditions="Warm"))
    assert "rec_heat_alert" not in [r.id for r in recs]


def test_recommendations_without_weather():
    assert len(build_recommendations(None)) == 2


@pytest.mark.asyncio
async def test_dashboard_loads_all_sections():
    weather = MockWeatherClient()
    service = DashboardService(MockLocationClient(), weather, MockWearableClient())

    snapshot = await service.load()

    assert weather.requested == [(34.0522, -118.2437)]
    assert snapshot.wearable_status == WearableConnectionStatus.CONNECTED
    data = snapshot.to_dict()
    assert data["weather"]["conditions"] == "Sunny"
    assert data["wearable"]["battery"] == {"percentage": 80, "is_charging": False}
    assert data["wearable"]["data"] == {"heart_rate": 72, "stress_level": 20}
    assert data["wearable"]["stress_label"] == "low"


@pytest.mark.asyncio
async def test_dashboard_degrades_when_location_fails():
    weather = MockWeatherClient()
    service = DashboardService(MockLocationClient(error=PermissionError("denied")), weather, MockWearableClient())

    data = (await service.load()).to_dict()

    assert data["location"] == "unavailable"
    assert data["weather"] == "unavailable"
    assert weather.requested == []
    assert data["wearable"]["status"] == "connected"
    assert len(data["recommendations"]) == 2


@pytest.mark.asyncio
async def test_dashboard_degrades_when_wearable_fails():
    service = DashboardService(
        MockLocationClient(), MockWeatherClient(), MockWearableClient(error=ConnectionError("offline"))
    )

    data = (await service.load()).to_dict()

    assert data["wearable"]["status"] == "unavailable"
    assert data["wearable"]["battery"] is None
    assert data["location"] == {"latitude": 34.0522, "longitude": -118.2437}


@pytest.mark.asyncio
async def test_dashboard_skips_readings_when_disconnected():
    wearable = MockWearableClient(status=WearableConnectionStatus.DISCONNECTED)
    service = DashboardService(MockLocationClient(), MockWeatherClient(), wearable)

    data = (await service.load()).to_dict()

    assert data["wearable"]["status"] == "disconnected"
    assert wearable.battery_calls == 0
    assert wearable.data_calls == 0
