#!/usr/bin/env python3
"""
Tests for the bad/typical/good margin summary.
"""

import numpy as np

from analysis.outcomes import summarize_outcomes


def test_nearest_rank_quantiles():
    margin = np.arange(101, dtype=float)[::-1] - 50.0  # -50..50, unsorted
    out = summarize_outcomes(margin)

    assert out.bad == -45.0
    assert out.typical == 0.0
    assert out.good == 45.0
    assert out.probability_positive == 50 / 101


def test_floor_index_selection():
    # N=10: floor(0.05*9)=0, floor(0.5*9)=4, floor(0.95*9)=8
    margin = np.array([7.0, 1.0, 9.0, 3.0, 5.0, 2.0, 8.0, 4.0, 6.0, 10.0])
    out = summarize_outcomes(margin)
    assert (out.bad, out.typical, out.good) == (1.0, 5.0, 9.0)


def test_quantiles_are_ordered():
    margin = np.random.default_rng(3).normal(1000, 5000, 20_000)
    out = summarize_outcomes(margin)
    assert out.bad <= out.typical <= out.good


def test_zero_margin_is_not_positive():
    out = summarize_outcomes(np.zeros(50))
    assert (out.bad, out.typical, out.good) == (0.0, 0.0, 0.0)
    assert out.probability_positive == 0.0


def test_single_draw():
    out = summarize_outcomes(np.array([12.5]))
    assert out.bad == out.typical == out.good == 12.5
    assert out.probability_positive == 1.0
