"""
Utility modules for the pricing core
"""
from .config_loader import (
    IntegrationsConfig,
    PricingConfig,
    WizardConfig,
    ZyrenConfig,
    load_zyren_config,
)

__all__ = [
    'IntegrationsConfig',
    'PricingConfig',
    'WizardConfig',
    'ZyrenConfig',
    'load_zyren_config',
]
