"""
Real Biometric HTTP Client.

Posts a facial recognition request to the identity provider and normalizes the
answer into FacialRecognitionResult. A non-2xx answer is an error, not a
failed match; the wizard treats both as a retryable confirmation failure.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

import httpx

from zyren.integrations.contracts.interfaces import BiometricClient, FacialRecognitionResult
from zyren.integrations.policy.response_wrappers import normalize_biometric_response

logger = logging.getLogger(__name__)


class RealBiometricClient(BiometricClient):
    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout_seconds: float = 15.0,
    ) -> None:
        self.base_url = (base_url or os.getenv("BIOMETRICS_API_URL", "")).rstrip("/")
        self.api_key = api_key or os.getenv("ZYREN_SERVICES_API_KEY", "")
        self.timeout_seconds = timeout_seconds

    async def recognize_face(self) -> FacialRecognitionResult:
        if not self.base_url:
            raise ValueError("BIOMETRICS_API_URL is not configured.")

        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        url = f"{self.base_url}/biometrics/face/verify"
        logger.info("Submitting facial recognition request to %s", url)
        async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
            response = await client.post(url, json={}, headers=headers)
            response.raise_for_status()
            data = response.json() if response.content else {}

        result = normalize_biometric_response(data)
        logger.info("Received facial recognition response: success=%s", result.success)
        return result
