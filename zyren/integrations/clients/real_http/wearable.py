"""
Real Wearable HTTP Client.

Purpose:
- Reads connection status, battery and telemetry from the wearable gateway
- Normalizes the gateway payloads into the wearable contracts

Implementation notes:
- Uses httpx for async requests with a bounded timeout
- HTTP and transport errors propagate; the wizard and dashboard degrade to
  "disconnected"/"unavailable" on any failure
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import httpx

from zyren.integrations.contracts.interfaces import (
    WearableBattery,
    WearableClient,
    WearableConnectionStatus,
    WearableData,
)
from zyren.integrations.policy.response_wrappers import (
    normalize_battery_response,
    normalize_connection_status,
    normalize_wearable_data_response,
)

logger = logging.getLogger(__name__)


class RealWearableClient(WearableClient):
    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout_seconds: float = 15.0,
    ) -> None:
        self.base_url = (base_url or os.getenv("WEARABLE_API_URL", "")).rstrip("/")
        self.api_key = api_key or os.getenv("ZYREN_SERVICES_API_KEY", "")
        self.timeout_seconds = timeout_seconds
        if not self.base_url:
            logger.warning("Wearable API URL is not set.")

    async def get_connection_status(self) -> WearableConnectionStatus:
        data = await self._get("/wearable/status")
        return normalize_connection_status(data)

    async def get_battery_status(self) -> WearableBattery:
        data = await self._get("/wearable/battery")
        return normalize_battery_response(data)

    async def get_wearable_data(self) -> WearableData:
        data = await self._get("/wearable/data")
        return normalize_wearable_data_response(data)

    async def _get(self, path: str) -> Dict[str, Any]:
        if not self.base_url:
            raise ValueError("WEARABLE_API_URL is not configured.")

        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else {}
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                response = await client.get(url, headers=headers)
                response.raise_for_status()
                return response.json() if response.content else {}
        except httpx.HTTPStatusError as e:
            logger.error("HTTP error from wearable API: %s %s", e.response.status_code, e.response.text)
            raise
        except httpx.RequestError as e:
            logger.error("Request error connecting to wearable API: %s", e)
            raise
