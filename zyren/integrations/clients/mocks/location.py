"""
Mock GPS and weather clients.

Return fixed coordinates (Los Angeles) and fair-weather conditions so the
dashboard renders without device permissions or a weather provider.
"""

from __future__ import annotations

from typing import Optional

from zyren.integrations.contracts.interfaces import Location, LocationClient, Weather, WeatherClient


class MockLocationClient(LocationClient):
    def __init__(self, location: Optional[Location] = None, error: Optional[Exception] = None) -> None:
        self.location = location or Location(latitude=34.0522, longitude=-118.2437)
        self.error = error

    async def get_current_location(self) -> Location:
        if self.error is not None:
            raise self.error
        return self.location


class MockWeatherClient(WeatherClient):
    def __init__(self, weather: Optional[Weather] = None, error: Optional[Exception] = None) -> None:
        self.weather = weather or Weather(temperature_fahrenheit=75, conditions="Sunny")
        self.error = error
        self.requested = []

    async def get_weather(self, latitude: float, longitude: float) -> Weather:
        self.requested.append((latitude, longitude))
        if self.error is not None:
            raise self.error
        return self.weather
