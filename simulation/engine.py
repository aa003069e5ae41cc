#!/usr/bin/env python3
"""
Core simulation entry point.
Validates inputs, samples scenarios, scans the credit grid and classifies the result.
"""

import logging
import time
from typing import Dict, List, Optional

from numpy.random import SeedSequence, default_rng

from analysis.outcomes import summarize_outcomes
from analysis.ranges import build_recommendation, classify_bands
from config.parameters import SimulationParameters, apply_overrides
from config.profiles import CropProfile, PriceProfile
from simulation.credit_grid import CancelToken, scan_credit_grid
from simulation.results import SimulationResult
from simulation.scenarios import PortfolioInput, run_scenarios
from simulation.validation import preflight_validate

logger = logging.getLogger(__name__)


def run_simulation(portfolio: PortfolioInput, params: Optional[SimulationParameters] = None, *,
                   cancel: Optional[CancelToken] = None,
                   profiles: Optional[List[CropProfile]] = None,
                   prices: Optional[Dict[str, PriceProfile]] = None) -> SimulationResult:
    """
    Run one Monte Carlo credit simulation.

    Args:
        portfolio: Zone, hectares per crop and rent flag
        params: Simulation parameters (defaults when None)
        cancel: Optional token to stop the credit grid scan
        profiles: Optional replacement zonal table
        prices: Optional replacement price table

    Returns:
        SimulationResult with needs, recommendation, bands and insights

    Raises:
        ConfigurationError: invalid inputs, before any sampling
        SimulationCancelled: if cancel is set during the grid scan
    """
    params = params or SimulationParameters()
    degenerate = preflight_validate(portfolio, params, profiles, prices)

    seed_seq = SeedSequence(params.seed)
    rng = default_rng(seed_seq)
    started = time.perf_counter()
    logger.info("Simulating %s soy=%.1f ha corn=%.1f ha rent=%s: N=%d, %d grid points, seed=%s",
                portfolio.zone, portfolio.ha_soy, portfolio.ha_corn, portfolio.has_rent,
                params.n_draws, params.grid_steps, seed_seq.entropy)

    _, draws, needs = run_scenarios(rng, portfolio, params, profiles, prices)

    base_usd = needs.credit_base(params.credit_base)
    grid = scan_credit_grid(draws, base_usd, params.interest_rate, params.grid_steps,
                            workers=params.workers, cancel=cancel)

    bands = classify_bands(grid, params.target_prob, params.red_prob)
    recommendation = build_recommendation(grid, bands.green, params.target_prob)
    if recommendation is None:
        logger.info("No credit level reaches the %.0f%% repayment target", params.target_prob * 100)

    insights = summarize_outcomes(draws.total_margin)

    logger.info("Simulation finished in %.2fs", time.perf_counter() - started)
    return SimulationResult(
        portfolio=portfolio,
        need_inputs_usd=needs.need_inputs,
        need_working_capital_usd=needs.need_working_capital,
        cost_total_usd=needs.cost_total,
        credit_base=params.credit_base.value,
        credit_base_usd=base_usd,
        recommendation=recommendation,
        bands=bands,
        insights=insights,
        grid=grid,
        n_draws=params.n_draws,
        seed=seed_seq.entropy,
        degenerate=degenerate,
    )


def simulate(zone: str, ha_soy: float, ha_corn: float, has_rent: bool = True,
             params: Optional[SimulationParameters] = None, **overrides) -> SimulationResult:
    """
    Convenience wrapper taking plain values.

    Keyword overrides use the PARAM_SPECS keys, e.g. seed=7, n_draws=20_000
    or **{"soy.total_loss_prob": 0.0}.
    """
    params = apply_overrides(params or SimulationParameters(), overrides)
    return run_simulation(PortfolioInput(zone=zone, ha_soy=ha_soy, ha_corn=ha_corn, has_rent=has_rent), params)
