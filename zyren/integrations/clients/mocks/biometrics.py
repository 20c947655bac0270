"""
Mock Biometric Client.

Purpose:
- Simulates the facial recognition service used to sign the onboarding
- Does NOT make network calls

Behavior guidelines:
- recognize_face() succeeds by default
- A scripted sequence of results (or exceptions) can be supplied so tests can
  drive failure-then-retry scenarios; once exhausted, the last entry repeats
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Sequence, Union

from zyren.integrations.contracts.interfaces import BiometricClient, FacialRecognitionResult

logger = logging.getLogger(__name__)

ScriptedOutcome = Union[FacialRecognitionResult, Exception]


class MockBiometricClient(BiometricClient):
    def __init__(self, outcomes: Optional[Sequence[ScriptedOutcome]] = None, delay: float = 0.0) -> None:
        self._outcomes: List[ScriptedOutcome] = list(outcomes or [
            FacialRecognitionResult(success=True, message="Facial recognition successful."),
        ])
        self.delay = delay
        self.calls = 0

    async def recognize_face(self) -> FacialRecognitionResult:
        index = min(self.calls, len(self._outcomes) - 1)
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)

        outcome = self._outcomes[index]
        if isinstance(outcome, Exception):
            raise outcome
        logger.info("[MockBiometrics] attempt=%s success=%s", self.calls, outcome.success)
        return outcome
