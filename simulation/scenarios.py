#!/usr/bin/env python3
"""
Portfolio aggregation of per-crop draws into revenue, cost and margin.
Also computes the deterministic needs (from profile means) used as credit bases.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np

from config.parameters import CreditBase, SimulationParameters
from config.profiles import PRICE_PROFILES, CropProfile, PriceProfile, get_price_profile, profiles_for_zone
from simulation.variates import CropDraws, generate_crop_draws

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PortfolioInput:
    """What the farmer plans to plant"""
    zone: str
    ha_soy: float
    ha_corn: float
    has_rent: bool = True

    @property
    def total_hectares(self) -> float:
        return self.ha_soy + self.ha_corn

    def hectares(self, crop: str) -> float:
        return {"soy": self.ha_soy, "corn": self.ha_corn}[crop]


@dataclass(frozen=True)
class PortfolioNeeds:
    """Deterministic cash needs computed from mean costs"""
    need_inputs: float
    need_working_capital: float
    cost_total: float

    def credit_base(self, base: CreditBase) -> float:
        if base == CreditBase.WORKING_CAPITAL:
            return self.need_working_capital
        return self.need_inputs


@dataclass
class PortfolioDraws:
    """Whole-portfolio columns; each array has length N"""
    total_revenue: np.ndarray
    total_inputs: np.ndarray
    total_rest: np.ndarray
    total_cost: np.ndarray
    total_margin: np.ndarray

    @property
    def n(self) -> int:
        return len(self.total_revenue)


def compute_needs(soy: CropProfile, corn: CropProfile, portfolio: PortfolioInput) -> PortfolioNeeds:
    """
    Hectare-weighted needs from the profile means.

    Args:
        soy: Soy profile of the portfolio's zone
        corn: Corn profile of the portfolio's zone
        portfolio: Hectares and rent flag

    Returns:
        PortfolioNeeds with inputs, working capital and total cost in USD
    """
    ha_soy, ha_corn = portfolio.ha_soy, portfolio.ha_corn
    return PortfolioNeeds(
        need_inputs=ha_soy * soy.cost_inputs_mean + ha_corn * corn.cost_inputs_mean,
        need_working_capital=(ha_soy * soy.working_capital_per_ha(portfolio.has_rent)
                              + ha_corn * corn.working_capital_per_ha(portfolio.has_rent)),
        cost_total=ha_soy * soy.cost_total_mean + ha_corn * corn.cost_total_mean,
    )


def aggregate_portfolio(crops: List[CropDraws], hectares: List[float]) -> PortfolioDraws:
    """
    Weight each crop's per-hectare columns by its area and sum across crops.

    Args:
        crops: Draws for each crop, all of the same length
        hectares: Area planted for each crop, in the same order

    Returns:
        PortfolioDraws with revenue, inputs, rest (labors + rent), cost and margin
    """
    n = crops[0].n
    revenue = np.zeros(n)
    inputs = np.zeros(n)
    rest = np.zeros(n)
    for draws, ha in zip(crops, hectares):
        revenue += ha * draws.revenue_per_ha
        inputs += ha * draws.inputs
        rest += ha * draws.rest_per_ha

    cost = inputs + rest
    return PortfolioDraws(
        total_revenue=revenue,
        total_inputs=inputs,
        total_rest=rest,
        total_cost=cost,
        total_margin=revenue - cost,
    )


def run_scenarios(rng: np.random.Generator, portfolio: PortfolioInput, params: SimulationParameters,
                  profiles: Optional[List[CropProfile]] = None,
                  prices: Optional[Dict[str, PriceProfile]] = None
                  ) -> Tuple[Dict[str, CropDraws], PortfolioDraws, PortfolioNeeds]:
    """
    Sample every crop and aggregate one run's scenarios.

    The draw arrays belong to this call only; nothing is cached between runs.

    Returns:
        Tuple of (draws per crop, portfolio draws, deterministic needs)
    """
    soy, corn = profiles_for_zone(portfolio.zone, profiles)
    prices = PRICE_PROFILES if prices is None else prices

    crop_draws = {}
    for profile in (soy, corn):
        crop_draws[profile.crop] = generate_crop_draws(
            rng,
            profile,
            get_price_profile(profile.crop, prices),
            params.risk_for(profile.crop),
            params.n_draws,
            portfolio.has_rent,
        )

    draws = aggregate_portfolio(
        [crop_draws["soy"], crop_draws["corn"]],
        [portfolio.ha_soy, portfolio.ha_corn],
    )
    needs = compute_needs(soy, corn, portfolio)
    logger.debug("Scenarios ready: mean revenue %.0f, mean cost %.0f, needs %s",
                 float(draws.total_revenue.mean()), float(draws.total_cost.mean()), needs)
    return crop_draws, draws, needs
