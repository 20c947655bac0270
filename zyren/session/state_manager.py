"""
Session and state management.

Each session owns its configuration objects (onboarding wizard, policy
simulator, user settings); nothing is shared at module level. Persistence of
completed onboarding and saved settings is delegated to the store.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import asdict, dataclass, replace
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from zyren.flows.onboarding import OnboardingWizard, SubmissionOutcome
from zyren.flows.validation import add_error, parse_bool, raise_if_errors
from zyren.integrations.contracts.interfaces import BiometricClient, WearableClient
from zyren.pricing.simulator import PolicySimulator
from zyren.utils.config_loader import ZyrenConfig

logger = logging.getLogger(__name__)


@dataclass
class UserSettings:
    wearable_data_enabled: bool = False
    expert_mode: bool = False
    facial_recognition_enabled: bool = True
    dark_mode: Optional[bool] = None


class SessionNotFoundError(KeyError):
    pass


class StateManager:
    def __init__(
        self,
        session_cache,
        db,
        wearable: WearableClient,
        biometrics: BiometricClient,
        config: Optional[ZyrenConfig] = None,
    ):
        self.cache = session_cache
        self.db = db
        self.wearable = wearable
        self.biometrics = biometrics
        self.config = config or ZyrenConfig()

    def create_session(self, user_id: str) -> str:
        """Create new session"""
        session_id = str(uuid.uuid4())
        saved = self.db.get_settings(user_id)
        settings = UserSettings(**saved) if saved else UserSettings()

        self.cache.set_session(session_id, {
            "session_id": session_id,
            "user_id": user_id,
            "wizard": None,
            "simulator": PolicySimulator(self.config.pricing),
            "settings": settings,
            "saved_settings": replace(settings),
            "created_at": datetime.now(timezone.utc).isoformat(),
        })
        logger.info("[Session] created session_id=%s user_id=%s", session_id, user_id)
        return session_id

    def get_session(self, session_id: str) -> Dict[str, Any]:
        session = self.cache.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def end_session(self, session_id: str) -> None:
        """End session and cancel any background work"""
        session = self.cache.get_session(session_id)
        if session and session.get("wizard") is not None:
            session["wizard"].cancel()
        self.cache.delete_session(session_id)

    # --- Onboarding ---------------------------------------------------------

    def start_onboarding(self, session_id: str) -> OnboardingWizard:
        """Start (or restart) the onboarding wizard with default choices."""
        session = self.get_session(session_id)
        if session.get("wizard") is not None:
            session["wizard"].cancel()
        wizard = OnboardingWizard(
            self.wearable,
            self.biometrics,
            self.db,
            user_id=session["user_id"],
            wizard_config=self.config.wizard,
            pricing_config=self.config.pricing,
        )
        self.cache.update_session(session_id, {"wizard": wizard})
        return wizard

    def get_wizard(self, session_id: str) -> Optional[OnboardingWizard]:
        return self.get_session(session_id).get("wizard")

    async def submit_onboarding(self, session_id: str) -> SubmissionOutcome:
        """Sign the onboarding; the wizard is discarded once it is persisted."""
        wizard = self.get_wizard(session_id)
        if wizard is None:
            raise SessionNotFoundError(f"No onboarding in progress for session {session_id}")
        outcome = await wizard.submit()
        if outcome.success:
            self.discard_onboarding(session_id)
        return outcome

    def discard_onboarding(self, session_id: str) -> None:
        wizard = self.get_wizard(session_id)
        if wizard is not None:
            wizard.cancel()
        self.cache.update_session(session_id, {"wizard": None})

    # --- Simulator ----------------------------------------------------------

    def get_simulator(self, session_id: str) -> PolicySimulator:
        return self.get_session(session_id)["simulator"]

    # --- Settings -----------------------------------------------------------

    def get_settings(self, session_id: str) -> UserSettings:
        return self.get_session(session_id)["settings"]

    def update_settings(self, session_id: str, updates: Dict[str, Any]) -> UserSettings:
        session = self.get_session(session_id)
        errors: Dict[str, str] = {}
        values: Dict[str, Any] = {}
        for key, value in (updates or {}).items():
            if key not in UserSettings.__dataclass_fields__:
                add_error(errors, key, "Unknown setting")
            elif key == "dark_mode" and value is None:
                values[key] = None
            else:
                values[key] = parse_bool(value, key, errors)
        raise_if_errors(errors)

        session["settings"] = replace(session["settings"], **values)
        return session["settings"]

    def has_unsaved_settings(self, session_id: str) -> bool:
        session = self.get_session(session_id)
        return session["settings"] != session["saved_settings"]

    def save_settings(self, session_id: str) -> UserSettings:
        session = self.get_session(session_id)
        self.db.save_settings(session["user_id"], asdict(session["settings"]))
        session["saved_settings"] = replace(session["settings"])
        logger.info("[Session] settings saved user_id=%s", session["user_id"])
        return session["settings"]
