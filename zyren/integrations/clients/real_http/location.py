"""
Real GPS and weather HTTP clients used by the dashboard.
"""

from __future__ import annotations

import os
from typing import Optional

import httpx

from zyren.integrations.contracts.interfaces import Location, LocationClient, Weather, WeatherClient
from zyren.integrations.policy.response_wrappers import (
    normalize_location_response,
    normalize_weather_response,
)


class RealLocationClient(LocationClient):
    def __init__(self, base_url: Optional[str] = None, timeout_seconds: float = 15.0) -> None:
        self.base_url = (base_url or os.getenv("LOCATION_API_URL", "")).rstrip("/")
        self.timeout_seconds = timeout_seconds

    async def get_current_location(self) -> Location:
        if not self.base_url:
            raise ValueError("LOCATION_API_URL is not configured.")

        async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
            response = await client.get(f"{self.base_url}/location/current")
            response.raise_for_status()
            data = response.json() if response.content else {}
        return normalize_location_response(data)


class RealWeatherClient(WeatherClient):
    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout_seconds: float = 15.0,
    ) -> None:
        self.base_url = (base_url or os.getenv("WEATHER_API_URL", "")).rstrip("/")
        self.api_key = api_key or os.getenv("ZYREN_SERVICES_API_KEY", "")
        self.timeout_seconds = timeout_seconds

    async def get_weather(self, latitude: float, longitude: float) -> Weather:
        if not self.base_url:
            raise ValueError("WEATHER_API_URL is not configured.")

        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else {}
        params = {"lat": latitude, "lng": longitude}
        async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
            response = await client.get(f"{self.base_url}/weather", params=params, headers=headers)
            response.raise_for_status()
            data = response.json() if response.content else {}
        return normalize_weather_response(data)
