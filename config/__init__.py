# config/__init__.py
"""Configuration module for the agro credit simulator."""

from .profiles import (
    CROPS, ZONES, PRICE_PROFILES, ZONAL_PROFILES, CropProfile, PriceProfile,
    get_crop_profile, get_price_profile, profiles_for_zone
)
from .parameters import (
    PARAM_GROUPS, PARAM_SPECS, CreditBase, CropRiskParams, SimulationParameters, apply_overrides
)
from .presets import PARAMETER_PRESETS, create_preset_parameters

__all__ = [
    'CROPS',
    'ZONES',
    'PRICE_PROFILES',
    'ZONAL_PROFILES',
    'CropProfile',
    'PriceProfile',
    'get_crop_profile',
    'get_price_profile',
    'profiles_for_zone',
    'PARAM_GROUPS',
    'PARAM_SPECS',
    'CreditBase',
    'CropRiskParams',
    'SimulationParameters',
    'apply_overrides',
    'PARAMETER_PRESETS',
    'create_preset_parameters'
]
