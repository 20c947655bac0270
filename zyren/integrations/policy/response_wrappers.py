from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError

from zyren.integrations.contracts.interfaces import (
    FacialRecognitionResult,
    Location,
    Weather,
    WearableBattery,
    WearableConnectionStatus,
    WearableData,
)


class IntegrationResponseError(ValueError):
    def __init__(self, message: str, *, payload: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.payload = payload or {}


class WearableBatteryResponseModel(BaseModel):
    percentage: int = Field(ge=0, le=100)
    is_charging: bool = False
    raw: Dict[str, Any] = Field(default_factory=dict)


class WearableDataResponseModel(BaseModel):
    heart_rate: int = Field(ge=0)
    stress_level: int = Field(ge=0, le=100)
    raw: Dict[str, Any] = Field(default_factory=dict)


class BiometricResponseModel(BaseModel):
    success: bool
    message: Optional[str] = None
    raw: Dict[str, Any] = Field(default_factory=dict)


class LocationResponseModel(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    raw: Dict[str, Any] = Field(default_factory=dict)


class WeatherResponseModel(BaseModel):
    temperature_fahrenheit: float
    conditions: str
    raw: Dict[str, Any] = Field(default_factory=dict)


def normalize_connection_status(raw: Dict[str, Any]) -> WearableConnectionStatus:
    value = str(_first_non_empty(raw, "status", "connection_status", "connectionStatus", "state")).strip().lower()
    mapping = {
        "connected": WearableConnectionStatus.CONNECTED,
        "paired": WearableConnectionStatus.CONNECTED,
        "online": WearableConnectionStatus.CONNECTED,
        "disconnected": WearableConnectionStatus.DISCONNECTED,
        "unpaired": WearableConnectionStatus.DISCONNECTED,
        "offline": WearableConnectionStatus.DISCONNECTED,
    }
    if value not in mapping:
        raise IntegrationResponseError(f"Unsupported wearable status '{value}'.", payload=raw)
    return mapping[value]


def normalize_battery_response(raw: Dict[str, Any]) -> WearableBattery:
    model = _build_model(
        WearableBatteryResponseModel,
        {
            "percentage": _first_non_empty(raw, "percentage", "battery", "level"),
            "is_charging": _coerce_bool(_first_non_empty(raw, "is_charging", "isCharging", "charging", default=False)),
            "raw": raw,
        },
        raw,
    )
    return WearableBattery(percentage=model.percentage, is_charging=model.is_charging)


def normalize_wearable_data_response(raw: Dict[str, Any]) -> WearableData:
    model = _build_model(
        WearableDataResponseModel,
        {
            "heart_rate": _first_non_empty(raw, "heart_rate", "heartRate", "bpm"),
            "stress_level": _first_non_empty(raw, "stress_level", "stressLevel", "stress"),
            "raw": raw,
        },
        raw,
    )
    return WearableData(heart_rate=model.heart_rate, stress_level=model.stress_level)


def normalize_biometric_response(raw: Dict[str, Any]) -> FacialRecognitionResult:
    success = _coerce_bool(_first_non_empty(raw, "success", "matched", "verified"))
    model = _build_model(
        BiometricResponseModel,
        {
            "success": success,
            "message": _first_non_empty(raw, "message", "detail", default="") or None,
            "raw": raw,
        },
        raw,
    )
    return FacialRecognitionResult(success=model.success, message=model.message)


def normalize_location_response(raw: Dict[str, Any]) -> Location:
    model = _build_model(
        LocationResponseModel,
        {
            "latitude": _first_non_empty(raw, "latitude", "lat"),
            "longitude": _first_non_empty(raw, "longitude", "lng", "lon"),
            "raw": raw,
        },
        raw,
    )
    return Location(latitude=model.latitude, longitude=model.longitude)


def normalize_weather_response(raw: Dict[str, Any]) -> Weather:
    model = _build_model(
        WeatherResponseModel,
        {
            "temperature_fahrenheit": _first_non_empty(
                raw, "temperature_fahrenheit", "temperatureFarenheit", "temperatureFahrenheit", "temperature"
            ),
            "conditions": str(_first_non_empty(raw, "conditions", "summary", "description")),
            "raw": raw,
        },
        raw,
    )
    return Weather(temperature_fahrenheit=model.temperature_fahrenheit, conditions=model.conditions)


def _first_non_empty(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    if default is not None:
        return default
    raise IntegrationResponseError(f"Missing required field. Checked keys: {', '.join(keys)}", payload=data)


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    s = str(value).strip().lower()
    if s in ("true", "1", "yes", "y", "on"):
        return True
    if s in ("false", "0", "no", "n", "off"):
        return False
    raise IntegrationResponseError(f"Invalid boolean value: {value!r}")


def _build_model(model_type, payload: Dict[str, Any], raw: Dict[str, Any]):
    try:
        return model_type(**payload)
    except ValidationError as exc:
        raise IntegrationResponseError(f"Response validation failed: {exc}", payload=raw) from exc
