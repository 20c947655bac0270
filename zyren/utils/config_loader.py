"""
Configuration loader for the pricing core
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

logger = logging.getLogger(__name__)


class PricingConfig(BaseModel):
    """Onboarding premium terms and per-policy simulation rates"""

    base_cost: int = 50
    safe_driving_discount: int = Field(default=5, ge=0)
    wearable_surcharge: int = Field(default=10, ge=0)
    per_coverage_cost: int = Field(default=8, ge=0)
    auto_activate_surcharge: int = Field(default=5, ge=0)
    premium_floor: int = Field(default=20, ge=0)
    savings_sensitivity: float = Field(default=0.005, ge=0.0)
    simulated_cost_floor: int = Field(default=5, ge=0)
    slider_min_fallback: float = Field(default=1000, gt=0)
    slider_max_fallback: float = Field(default=50000, gt=0)


class WizardConfig(BaseModel):
    """Onboarding wizard timings"""

    total_steps: int = Field(default=8, ge=1)
    wearable_step: int = Field(default=5, ge=1)
    wearable_timeout: float = Field(default=10.0, gt=0)
    biometric_timeout: float = Field(default=30.0, gt=0)
    error_cooldown: float = Field(default=3.0, ge=0)

    @model_validator(mode="after")
    def _wearable_step_within_wizard(self) -> "WizardConfig":
        if self.wearable_step > self.total_steps:
            raise ValueError(
                f"wearable_step ({self.wearable_step}) must not exceed total_steps ({self.total_steps})"
            )
        return self


class IntegrationsConfig(BaseModel):
    """External service endpoints. Mock clients are used unless use_real_clients is set."""

    use_real_clients: bool = False
    wearable_base_url: str = ""
    biometrics_base_url: str = ""
    location_base_url: str = ""
    weather_base_url: str = ""
    api_key_env: str = "ZYREN_SERVICES_API_KEY"
    request_timeout: float = Field(default=15.0, gt=0)


class ZyrenConfig(BaseModel):
    pricing: PricingConfig = Field(default_factory=PricingConfig)
    wizard: WizardConfig = Field(default_factory=WizardConfig)
    integrations: IntegrationsConfig = Field(default_factory=IntegrationsConfig)


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "zyren_config.yml"


def load_zyren_config(config_path: Optional[Path] = None) -> ZyrenConfig:
    """
    Load and validate the pricing core configuration from a YAML file

    Args:
        config_path: Path to config file. Defaults to $ZYREN_CONFIG_PATH, then
            config/zyren_config.yml. A missing default file yields the built-in
            defaults; a missing explicit file is an error.

    Returns:
        Validated ZyrenConfig object

    Raises:
        FileNotFoundError: If an explicitly requested config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    explicit = config_path is not None or bool(os.getenv("ZYREN_CONFIG_PATH"))
    if config_path is None:
        env_path = os.getenv("ZYREN_CONFIG_PATH")
        config_path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH

    if not config_path.exists():
        if explicit:
            raise FileNotFoundError(f"Config file not found: {config_path}")
        logger.info("No config file at %s; using built-in defaults", config_path)
        return ZyrenConfig()

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    try:
        config = ZyrenConfig(**data)
    except ValidationError as e:
        logger.error("Config validation failed: %s", e)
        raise

    if os.getenv("ZYREN_USE_REAL_CLIENTS", "").lower() in ("1", "true", "yes"):
        config.integrations.use_real_clients = True

    logger.info("Successfully loaded config from %s", config_path)
    return config
