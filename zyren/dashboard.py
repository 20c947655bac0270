"""
Dashboard data: location, weather, wearable readings and recommendations.

Every lookup is optional. A failed call leaves its section marked
"unavailable" and the rest of the dashboard still loads.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from zyren.integrations.contracts.interfaces import (
    Location,
    LocationClient,
    Weather,
    WeatherClient,
    WearableBattery,
    WearableClient,
    WearableConnectionStatus,
    WearableData,
)

logger = logging.getLogger(__name__)

HEAT_ALERT_THRESHOLD_F = 85
MAX_RECOMMENDATIONS = 3
_PRIORITY_ORDER = {"high": 1, "medium": 2, "low": 3}


@dataclass
class Recommendation:
    id: str
    title: str
    reason: str
    benefit: str
    cta_label: str
    priority: str = "low"


@dataclass
class DashboardSnapshot:
    location: Optional[Location] = None
    weather: Optional[Weather] = None
    wearable_status: Optional[WearableConnectionStatus] = None
    wearable_battery: Optional[WearableBattery] = None
    wearable_data: Optional[WearableData] = None
    recommendations: List[Recommendation] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "location": asdict(self.location) if self.location else "unavailable",
            "weather": asdict(self.weather) if self.weather else "unavailable",
            "wearable": {
                "status": self.wearable_status.value if self.wearable_status else "unavailable",
                "battery": asdict(self.wearable_battery) if self.wearable_battery else None,
                "data": asdict(self.wearable_data) if self.wearable_data else None,
                "stress_label": stress_level_label(self.wearable_data.stress_level) if self.wearable_data else None,
            },
            "recommendations": [asdict(r) for r in self.recommendations],
        }


def stress_level_label(level: int) -> str:
    if level < 30:
        return "low"
    if level < 60:
        return "medium"
    return "high"


def build_recommendations(weather: Optional[Weather]) -> List[Recommendation]:
    recommendations = [
        Recommendation(
            id="rec_profile_update",
            title="Keep your profile up to date",
            reason="Recent changes in your life may affect the coverage you need.",
            benefit="More accurate recommendations and credit costs.",
            cta_label="Update profile",
            priority="medium",
        ),
        Recommendation(
            id="rec_education_explore",
            title="Plan for education costs",
            reason="Education savings grow best when started early.",
            benefit="Secure the future education of your loved ones.",
            cta_label="Explore education insurance",
            priority="medium",
        ),
    ]
    if weather is not None and weather.temperature_fahrenheit > HEAT_ALERT_THRESHOLD_F:
        recommendations.append(Recommendation(
            id="rec_heat_alert",
            title="Heat alert",
            reason=f"It is {weather.temperature_fahrenheit:g}°F near you today.",
            benefit="Stay hydrated and check your health coverage is active.",
            cta_label="Review health coverage",
            priority="low",
        ))

    recommendations.sort(key=lambda r: _PRIORITY_ORDER.get(r.priority, 4))
    return recommendations[:MAX_RECOMMENDATIONS]


class DashboardService:
    def __init__(self, location: LocationClient, weather: WeatherClient, wearable: WearableClient):
        self.location_client = location
        self.weather_client = weather
        self.wearable_client = wearable

    async def load(self) -> DashboardSnapshot:
        snapshot = DashboardSnapshot()

        try:
            snapshot.location = await self.location_client.get_current_location()
            snapshot.weather = await self.weather_client.get_weather(
                snapshot.location.latitude, snapshot.location.longitude
            )
        except Exception as exc:
            logger.warning("[Dashboard] location or weather unavailable: %s", exc)

        try:
            snapshot.wearable_status = await self.wearable_client.get_connection_status()
            if snapshot.wearable_status == WearableConnectionStatus.CONNECTED:
                snapshot.wearable_battery, snapshot.wearable_data = await asyncio.gather(
                    self.wearable_client.get_battery_status(),
                    self.wearable_client.get_wearable_data(),
                )
        except Exception as exc:
            logger.warning("[Dashboard] wearable unavailable: %s", exc)

        snapshot.recommendations = build_recommendations(snapshot.weather)
        return snapshot
