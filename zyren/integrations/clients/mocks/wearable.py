"""
Mock Wearable Client.

Purpose:
- Provides a fake wearable integration used for development/testing
- Does NOT make any network calls
- Returns the static readings the app shows before a real device is paired

Usage:
- Wired in zyren/api/main.py when use_real_clients is off
- Called by OnboardingWizard (step 5) and DashboardService

Behavior guidelines:
- get_connection_status() returns "connected" unless configured otherwise
- get_battery_status() returns 80% and not charging
- Setting ``error`` makes every call raise it, to exercise degraded paths

Swap:
Replace with the real HTTP client in clients/real_http/wearable.py.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from zyren.integrations.contracts.interfaces import (
    WearableBattery,
    WearableClient,
    WearableConnectionStatus,
    WearableData,
)

logger = logging.getLogger(__name__)


class MockWearableClient(WearableClient):
    def __init__(
        self,
        status: WearableConnectionStatus = WearableConnectionStatus.CONNECTED,
        battery: Optional[WearableBattery] = None,
        data: Optional[WearableData] = None,
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ) -> None:
        self.status = status
        self.battery = battery or WearableBattery(percentage=80, is_charging=False)
        self.data = data or WearableData(heart_rate=72, stress_level=20)
        self.error = error
        self.delay = delay
        self.status_calls = 0
        self.battery_calls = 0
        self.data_calls = 0

    async def get_connection_status(self) -> WearableConnectionStatus:
        self.status_calls += 1
        await self._respond()
        logger.debug("[MockWearable] status=%s", self.status.value)
        return self.status

    async def get_battery_status(self) -> WearableBattery:
        self.battery_calls += 1
        await self._respond()
        return self.battery

    async def get_wearable_data(self) -> WearableData:
        self.data_calls += 1
        await self._respond()
        return self.data

    async def _respond(self) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
