#!/usr/bin/env python3
"""
Tests for the credit grid scan and its waterfall repayment rule.
"""

import numpy as np
import pytest
from numpy.random import default_rng

from config.parameters import SimulationParameters
from simulation.credit_grid import CancelToken, grid_percentages, repayment_probability, scan_credit_grid
from simulation.scenarios import PortfolioDraws, PortfolioInput, run_scenarios
from utils.errors import SimulationCancelled


def _portfolio_draws(revenue, inputs, rest):
    revenue, inputs, rest = (np.array(v, dtype=float) for v in (revenue, inputs, rest))
    cost = inputs + rest
    return PortfolioDraws(total_revenue=revenue, total_inputs=inputs, total_rest=rest,
                          total_cost=cost, total_margin=revenue - cost)


@pytest.mark.parametrize("steps", [1, 2, 5, 21])
def test_grid_percentages_shape(steps):
    pct = grid_percentages(steps)
    assert len(pct) == steps
    assert pct[0] == 0.0
    if steps > 1:
        assert pct[-1] == 1.0
        assert (np.diff(pct) > 0).all()


def test_grid_percentages_rejects_empty_grid():
    with pytest.raises(ValueError):
        grid_percentages(0)


def test_waterfall_pays_rest_before_credit():
    # revenue 1000 with 600 of labors+rent leaves 400 for the credit
    draws = _portfolio_draws([1000.0], [900.0], [600.0])
    assert repayment_probability(draws, 400.0) == 1.0
    assert repayment_probability(draws, 400.01) == 0.0


def test_scan_amounts_and_interest():
    draws = _portfolio_draws([1000.0, 1000.0, 2000.0, 0.0], [0.0] * 4, [500.0] * 4)
    grid = scan_credit_grid(draws, base_usd=1000.0, interest_rate=0.25, steps=5)

    assert list(grid.amount) == [0.0, 250.0, 500.0, 750.0, 1000.0]
    assert grid.required_repayment(2) == pytest.approx(625.0)
    # required repayments 0, 312.5, 625, 937.5, 1250 against free cash 500, 500, 1500, -500
    assert list(grid.probability) == [0.75, 0.75, 0.25, 0.25, 0.25]


def test_pct_zero_matches_revenue_covering_rest():
    params = SimulationParameters(n_draws=20_000)
    _, draws, needs = run_scenarios(default_rng(4), PortfolioInput("Núcleo", 200, 150), params)
    grid = scan_credit_grid(draws, needs.need_inputs, 0.1, 21)

    assert grid.amount[0] == 0.0
    assert grid.required_repayment(0) == 0.0
    assert grid.probability[0] == pytest.approx(np.mean(draws.total_revenue >= draws.total_rest))


def test_threaded_scan_matches_serial():
    params = SimulationParameters(n_draws=10_000)
    _, draws, needs = run_scenarios(default_rng(8), PortfolioInput("NEA", 80, 40), params)

    serial = scan_credit_grid(draws, needs.need_inputs, 0.1, 21)
    threaded = scan_credit_grid(draws, needs.need_inputs, 0.1, 21, workers=4)
    assert np.array_equal(serial.probability, threaded.probability)


def test_probabilities_are_not_assumed_monotone():
    # the scan reports whatever the draws give; a decreasing curve is only the typical case
    params = SimulationParameters(n_draws=10_000)
    _, draws, needs = run_scenarios(default_rng(2), PortfolioInput("NEA", 100, 100), params)
    grid = scan_credit_grid(draws, needs.need_working_capital, 0.1, 21)
    assert ((grid.probability >= 0) & (grid.probability <= 1)).all()
    assert grid.probability[0] >= grid.probability[-1]


def test_cancel_token_stops_scan():
    draws = _portfolio_draws([1.0], [0.0], [0.0])
    token = CancelToken()
    token.cancel()
    assert token.cancelled
    with pytest.raises(SimulationCancelled):
        scan_credit_grid(draws, 100.0, 0.1, 21, cancel=token)
    with pytest.raises(SimulationCancelled):
        scan_credit_grid(draws, 100.0, 0.1, 21, workers=2, cancel=token)


def test_to_frame_columns():
    draws = _portfolio_draws([10.0], [0.0], [0.0])
    df = scan_credit_grid(draws, 10.0, 0.0, 3).to_frame()
    assert list(df.columns) == ["pct", "credit_usd", "prob_repay"]
    assert len(df) == 3
