from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class PolicyType(str, Enum):
    HEALTH = "health"
    ACCIDENT = "accident"
    PENSION = "pension"
    RENTA = "renta"
    EDUCATION = "education"


class PolicyStatus(str, Enum):
    ACTIVE = "active"
    MANUAL = "manual"
    AUTO_PENDING = "auto-pending"
    INACTIVE = "inactive"


class WearableConnectionStatus(str, Enum):
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


# ---------------------------------------------------------------------------
# Shared data models
# ---------------------------------------------------------------------------

@dataclass
class ActivationEvent:
    reason: str
    date: str                            # ISO format: YYYY-MM-DD


@dataclass
class Policy:
    id: str
    name: str
    type: PolicyType
    status: PolicyStatus
    credit_cost: float
    coverage_amount: float = 0.0
    goal_amount: Optional[float] = None  # savings products track a goal instead of coverage
    is_auto_active: bool = False
    is_adaptive_premium: bool = False
    activation_history: List[ActivationEvent] = field(default_factory=list)
    next_payment_date: Optional[str] = None
    description: Optional[str] = None

    @property
    def tracked_value(self) -> float:
        """The coverage or goal amount the policy currently targets."""
        if self.goal_amount is not None:
            return self.goal_amount
        return self.coverage_amount or 0

    @property
    def tracks_goal(self) -> bool:
        return self.goal_amount is not None


@dataclass
class WearableBattery:
    percentage: int                      # 0..100
    is_charging: bool


@dataclass
class WearableData:
    heart_rate: int                      # beats per minute
    stress_level: int                    # percentage


@dataclass
class FacialRecognitionResult:
    success: bool
    message: Optional[str] = None


@dataclass
class Location:
    latitude: float
    longitude: float


@dataclass
class Weather:
    temperature_fahrenheit: float
    conditions: str


@dataclass
class OnboardingRecord:
    record_id: str
    user_id: str
    configuration: Dict[str, Any]
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


# ---------------------------------------------------------------------------
# Abstract client interfaces
# ---------------------------------------------------------------------------

class WearableClient(ABC):
    """Every wearable telemetry client must implement this interface."""

    @abstractmethod
    async def get_connection_status(self) -> WearableConnectionStatus:
        """Return whether a wearable is currently paired and reachable."""

    @abstractmethod
    async def get_battery_status(self) -> WearableBattery:
        """Return the battery level of the connected wearable."""

    @abstractmethod
    async def get_wearable_data(self) -> WearableData:
        """Return the latest heart rate and stress readings."""


class BiometricClient(ABC):
    @abstractmethod
    async def recognize_face(self) -> FacialRecognitionResult:
        """Run one facial recognition attempt."""


class LocationClient(ABC):
    @abstractmethod
    async def get_current_location(self) -> Location:
        """Return the device's current coordinates."""


class WeatherClient(ABC):
    @abstractmethod
    async def get_weather(self, latitude: float, longitude: float) -> Weather:
        """Return current conditions at the given coordinates."""


class OnboardingStore(ABC):
    """Persistence boundary that receives the wizard's final configuration."""

    @abstractmethod
    def save_onboarding(self, user_id: str, configuration: Dict[str, Any]) -> OnboardingRecord:
        """Persist a completed onboarding configuration."""
