#!/usr/bin/env python3
"""
Input validation for simulation runs.
Everything is checked before sampling starts so a run never fails half way.
"""

import logging
import math
import warnings
from typing import Dict, List, Optional

from config.parameters import SimulationParameters
from config.profiles import CROPS, ZONES, CropProfile, PriceProfile, get_crop_profile, get_price_profile
from simulation.scenarios import PortfolioInput
from utils.errors import ConfigurationError, DegenerateInputWarning

logger = logging.getLogger(__name__)


def normalize_hectares(value) -> float:
    """
    Coerce a hectare entry to a non-negative float.

    Empty or unparsable entries count as 0 hectares.
    """
    if value is None or value == "":
        return 0.0
    try:
        ha = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(ha):
        return 0.0
    return max(0.0, ha)


def validate_portfolio(portfolio: PortfolioInput) -> List[str]:
    errors = []
    if portfolio.zone not in ZONES:
        errors.append(f"Unknown zone {portfolio.zone!r}; expected one of {list(ZONES)}")
    for crop in CROPS:
        ha = portfolio.hectares(crop)
        if not math.isfinite(ha):
            errors.append(f"Hectares of {crop} must be a finite number")
        elif ha < 0:
            errors.append(f"Hectares of {crop} cannot be negative")
    return errors


def preflight_validate(portfolio: PortfolioInput, params: SimulationParameters,
                       profiles: Optional[List[CropProfile]] = None,
                       prices: Optional[Dict[str, PriceProfile]] = None) -> bool:
    """
    Validate portfolio, parameters and reference data before a run.

    Args:
        portfolio: Portfolio to simulate
        params: Simulation parameters
        profiles: Optional replacement zonal table
        prices: Optional replacement price table

    Returns:
        bool: True when the portfolio is degenerate (no hectares at all)

    Raises:
        ConfigurationError: listing every problem found
    """
    errs = validate_portfolio(portfolio) + params.validate()

    if portfolio.zone in ZONES:
        for crop in CROPS:
            try:
                errs.extend(get_crop_profile(portfolio.zone, crop, profiles).validate())
                errs.extend(get_price_profile(crop, prices).validate())
            except ConfigurationError as e:
                errs.extend(e.errors)

    if errs:
        logger.error("Preflight validation failed: %s", "; ".join(errs))
        raise ConfigurationError(errs)

    degenerate = portfolio.total_hectares == 0
    if degenerate:
        warnings.warn("Portfolio has no hectares; every credit level trivially repays",
                      DegenerateInputWarning, stacklevel=3)
    return degenerate
