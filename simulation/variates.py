#!/usr/bin/env python3
"""
Random variate generation for crop yield, price and cost components.

Yield and price share a correlated standard-normal pair. Yield uses a
two-piece normal (wider below the mean) and is then exposed to downside
shocks: a total loss, or failing that a partial loss that keeps only a
fraction of the harvest. Costs are independent clamped normals.

All sampling goes through an explicit numpy Generator so a run is
reproducible from its seed.
"""

import logging
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from config.parameters import CropRiskParams
from config.profiles import QUINTALS_PER_TON, CropProfile, PriceProfile

logger = logging.getLogger(__name__)

SHOCK_NONE = 0
SHOCK_PARTIAL = 1
SHOCK_TOTAL = 2


@dataclass
class CropDraws:
    """Per-draw columns for one crop; every array has length N"""
    crop: str
    yield_ton: np.ndarray
    price: np.ndarray
    inputs: np.ndarray
    labors: np.ndarray
    rent: np.ndarray
    z_yield: np.ndarray
    z_price: np.ndarray
    shock: np.ndarray

    @property
    def n(self) -> int:
        return len(self.yield_ton)

    @property
    def revenue_per_ha(self) -> np.ndarray:
        return self.yield_ton * self.price

    @property
    def rest_per_ha(self) -> np.ndarray:
        return self.labors + self.rent


def standard_normals(rng: np.random.Generator, n: int) -> np.ndarray:
    """
    Box–Muller standard normals from two uniform(0,1) streams.

    Uniforms that come out exactly 0 are redrawn before taking the log.
    """
    u = rng.random(n)
    zero = u == 0.0
    while zero.any():
        u[zero] = rng.random(int(zero.sum()))
        zero = u == 0.0
    v = rng.random(n)
    return np.sqrt(-2.0 * np.log(u)) * np.cos(2.0 * np.pi * v)


def correlated_normals(rng: np.random.Generator, n: int, rho: float) -> Tuple[np.ndarray, np.ndarray]:
    """
    Pair of standard normals with correlation rho.

    Returns:
        (z_yield, z_price) where z_price = rho*a + sqrt(1-rho^2)*b
    """
    a = standard_normals(rng, n)
    b = standard_normals(rng, n)
    return a, rho * a + np.sqrt(1.0 - rho * rho) * b


def clamped_normal(mean: float, sd: float, z: np.ndarray) -> np.ndarray:
    """mean + sd*z, floored at 0."""
    return np.maximum(0.0, mean + sd * z)


def two_piece_yield(mean: float, sd_down: float, sd_up: float, z: np.ndarray) -> np.ndarray:
    """
    Two-piece normal driven by an existing standard normal.

    Uses sd_down where z < 0 and sd_up otherwise, so the same z keeps its
    correlation with price.
    """
    sd = np.where(z < 0, sd_down, sd_up)
    return np.maximum(0.0, mean + sd * z)


def apply_downside_shocks(rng: np.random.Generator, yields: np.ndarray, total_loss_prob: float,
                          partial_loss_prob: float, partial_loss_factor: float) -> Tuple[np.ndarray, np.ndarray]:
    """
    Inject total and partial harvest losses.

    One uniform per draw: below total_loss_prob the yield is zeroed, else below
    total_loss_prob + partial_loss_prob it is multiplied by partial_loss_factor.
    The two outcomes cannot both hit the same draw.

    Args:
        rng: Generator for the shock uniforms
        yields: Base yields (not modified)
        total_loss_prob: Probability of losing the whole harvest
        partial_loss_prob: Probability of a partial loss
        partial_loss_factor: Share of yield kept after a partial loss

    Returns:
        Tuple of (shocked yields, shock code per draw)
    """
    u = rng.random(len(yields))
    total = u < total_loss_prob
    partial = ~total & (u < total_loss_prob + partial_loss_prob)

    shocked = np.where(total, 0.0, np.where(partial, yields * partial_loss_factor, yields))
    codes = np.full(len(yields), SHOCK_NONE, dtype=np.int8)
    codes[partial] = SHOCK_PARTIAL
    codes[total] = SHOCK_TOTAL
    return shocked, codes


def generate_crop_draws(rng: np.random.Generator, profile: CropProfile, price: PriceProfile,
                        risk: CropRiskParams, n: int, has_rent: bool) -> CropDraws:
    """
    Sample N yields, prices and cost components for one crop.

    Args:
        rng: Generator owned by the current run
        profile: Zonal yield and cost profile
        price: Price profile for the crop
        risk: Correlation, skew and shock dials for the crop
        n: Number of draws
        has_rent: Whether land rent is paid; rent is 0 otherwise

    Returns:
        CropDraws with yield in t/ha, price in USD/t and costs in USD/ha
    """
    z_yield, z_price = correlated_normals(rng, n, risk.rho)

    base_yield_qq = two_piece_yield(
        profile.yield_mean_qq,
        profile.yield_sd_qq * risk.yield_sd_down_factor,
        profile.yield_sd_qq * risk.yield_sd_up_factor,
        z_yield,
    )
    yield_qq, shock = apply_downside_shocks(
        rng, base_yield_qq, risk.total_loss_prob, risk.partial_loss_prob, risk.partial_loss_factor
    )

    price_usd = clamped_normal(price.price_mean, price.price_sd, z_price)
    inputs = clamped_normal(profile.cost_inputs_mean, profile.cost_inputs_sd, standard_normals(rng, n))
    labors = clamped_normal(profile.cost_labors_mean, profile.cost_labors_sd, standard_normals(rng, n))
    if has_rent:
        rent = clamped_normal(profile.cost_rent_mean, profile.cost_rent_sd, standard_normals(rng, n))
    else:
        rent = np.zeros(n)

    logger.debug("%s/%s: %d draws, %d partial and %d total losses", profile.zone, profile.crop, n,
                 int((shock == SHOCK_PARTIAL).sum()), int((shock == SHOCK_TOTAL).sum()))

    return CropDraws(
        crop=profile.crop,
        yield_ton=yield_qq / QUINTALS_PER_TON,
        price=price_usd,
        inputs=inputs,
        labors=labors,
        rent=rent,
        z_yield=z_yield,
        z_price=z_price,
        shock=shock,
    )
