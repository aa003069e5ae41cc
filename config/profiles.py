#!/usr/bin/env python3
"""
Static reference data for the agro credit simulator.
Zonal crop cost/yield profiles and global price profiles, plus lookups.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from utils.errors import ConfigurationError

ZONES = ("Núcleo", "NEA")
CROPS = ("soy", "corn")

# 1 quintal = 100 kg
QUINTALS_PER_TON = 10.0


@dataclass(frozen=True)
class CropProfile:
    """Yield and per-hectare cost distribution for one crop in one zone"""
    zone: str
    crop: str
    yield_mean_qq: float
    yield_sd_qq: float
    cost_total_mean: float
    cost_total_sd: float
    cost_inputs_mean: float
    cost_inputs_sd: float
    cost_labors_mean: float
    cost_labors_sd: float
    cost_rent_mean: float
    cost_rent_sd: float

    def working_capital_per_ha(self, has_rent: bool) -> float:
        """Mean cash outlay per hectare: inputs + labors (+ rent when it applies)."""
        rent = self.cost_rent_mean if has_rent else 0.0
        return self.cost_inputs_mean + self.cost_labors_mean + rent

    def validate(self) -> List[str]:
        errors = []
        for name in ("yield_sd_qq", "cost_total_sd", "cost_inputs_sd", "cost_labors_sd", "cost_rent_sd"):
            if getattr(self, name) < 0:
                errors.append(f"{self.zone}/{self.crop}: {name} cannot be negative")
        return errors


@dataclass(frozen=True)
class PriceProfile:
    """Harvest price distribution for one crop (USD/t)"""
    crop: str
    price_mean: float
    price_sd: float

    def validate(self) -> List[str]:
        if self.price_sd < 0:
            return [f"{self.crop}: price_sd cannot be negative"]
        return []


ZONAL_PROFILES = [
    CropProfile("Núcleo", "soy",  yield_mean_qq=40.0, yield_sd_qq=5.0,
                cost_total_mean=1027.6, cost_total_sd=120.0, cost_inputs_mean=234.3, cost_inputs_sd=50.0,
                cost_labors_mean=53.9, cost_labors_sd=15.0, cost_rent_mean=520.1, cost_rent_sd=70.0),
    CropProfile("Núcleo", "corn", yield_mean_qq=10.0, yield_sd_qq=6.0,
                cost_total_mean=1491.0, cost_total_sd=150.0, cost_inputs_mean=470.9, cost_inputs_sd=94.0,
                cost_labors_mean=53.9, cost_labors_sd=15.0, cost_rent_mean=520.1, cost_rent_sd=70.0),
    CropProfile("NEA",    "soy",  yield_mean_qq=26.0, yield_sd_qq=3.0,
                cost_total_mean=584.8, cost_total_sd=58.0, cost_inputs_mean=277.1, cost_inputs_sd=30.0,
                cost_labors_mean=85.1, cost_labors_sd=10.0, cost_rent_mean=133.7, cost_rent_sd=30.0),
    CropProfile("NEA",    "corn", yield_mean_qq=59.0, yield_sd_qq=2.5,
                cost_total_mean=1071.3, cost_total_sd=100.0, cost_inputs_mean=442.1, cost_inputs_sd=44.0,
                cost_labors_mean=76.1, cost_labors_sd=9.0, cost_rent_mean=133.7, cost_rent_sd=30.0),
]

PRICE_PROFILES = {
    "soy":  PriceProfile("soy", price_mean=320.0, price_sd=15.0),
    "corn": PriceProfile("corn", price_mean=172.5, price_sd=8.5),
}


def get_crop_profile(zone: str, crop: str, profiles: List[CropProfile] = None) -> CropProfile:
    """
    Look up the zonal profile for a crop.

    Args:
        zone: Agro-climatic zone name
        crop: Crop key ("soy" or "corn")
        profiles: Optional replacement table (defaults to ZONAL_PROFILES)

    Returns:
        The single matching CropProfile

    Raises:
        ConfigurationError: if there is not exactly one profile for (zone, crop)
    """
    table = ZONAL_PROFILES if profiles is None else profiles
    matches = [p for p in table if p.zone == zone and p.crop == crop]
    if len(matches) != 1:
        raise ConfigurationError([f"expected one profile for zone={zone!r} crop={crop!r}, found {len(matches)}"])
    return matches[0]


def get_price_profile(crop: str, prices: Dict[str, PriceProfile] = None) -> PriceProfile:
    """Look up the price profile for a crop, failing fast when it is missing."""
    table = PRICE_PROFILES if prices is None else prices
    try:
        return table[crop]
    except KeyError:
        raise ConfigurationError([f"no price profile for crop={crop!r}"]) from None


def profiles_for_zone(zone: str, profiles: List[CropProfile] = None) -> Tuple[CropProfile, CropProfile]:
    """Return the (soy, corn) profiles of a zone."""
    return get_crop_profile(zone, "soy", profiles), get_crop_profile(zone, "corn", profiles)
