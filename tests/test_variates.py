#!/usr/bin/env python3
"""
Tests for yield, price and cost sampling.
"""

import numpy as np
import pytest
from numpy.random import default_rng

from config.parameters import CropRiskParams
from config.profiles import PRICE_PROFILES, get_crop_profile
from simulation.variates import (
    SHOCK_NONE, SHOCK_PARTIAL, SHOCK_TOTAL, apply_downside_shocks, clamped_normal, correlated_normals,
    generate_crop_draws, standard_normals, two_piece_yield
)


def test_standard_normals_moments():
    z = standard_normals(default_rng(1), 200_000)
    assert np.isfinite(z).all()
    assert abs(z.mean()) < 0.01
    assert abs(z.std() - 1.0) < 0.01


def test_standard_normals_resample_zero_uniforms():
    class ZeroFirstRng:
        """Returns zeros on the first call, then defers to a real generator."""

        def __init__(self):
            self.calls = 0
            self.rng = default_rng(3)

        def random(self, n):
            self.calls += 1
            if self.calls == 1:
                return np.zeros(n)
            return self.rng.random(n)

    z = standard_normals(ZeroFirstRng(), 10)
    assert np.isfinite(z).all()


@pytest.mark.parametrize("rho", [-0.9, -0.05, 0.0, 0.5, 0.95])
def test_correlated_normals_converge_to_rho(rho):
    z_yield, z_price = correlated_normals(default_rng(7), 200_000, rho)
    empirical = np.corrcoef(z_yield, z_price)[0, 1]
    assert abs(empirical - rho) < 0.01


def test_two_piece_yield_uses_down_sd_below_mean():
    z = np.array([-1.0, 0.0, 1.0])
    y = two_piece_yield(40.0, 8.0, 2.0, z)
    assert list(y) == [32.0, 40.0, 42.0]


def test_clamps_floor_at_zero():
    z = np.array([-50.0, -3.0, 0.0, 3.0])
    assert (two_piece_yield(10.0, 6.0, 1.0, z) >= 0).all()
    assert (clamped_normal(5.0, 10.0, z) >= 0).all()
    assert clamped_normal(5.0, 10.0, z)[0] == 0.0


def test_downside_shocks_are_mutually_exclusive():
    yields = np.full(100_000, 30.0)
    shocked, codes = apply_downside_shocks(default_rng(11), yields, 0.1, 0.2, 0.45)

    assert set(np.unique(codes)) <= {SHOCK_NONE, SHOCK_PARTIAL, SHOCK_TOTAL}
    assert (shocked[codes == SHOCK_TOTAL] == 0.0).all()
    assert np.allclose(shocked[codes == SHOCK_PARTIAL], 30.0 * 0.45)
    assert (shocked[codes == SHOCK_NONE] == 30.0).all()
    assert abs((codes == SHOCK_TOTAL).mean() - 0.1) < 0.005
    assert abs((codes == SHOCK_PARTIAL).mean() - 0.2) < 0.005
    # input left untouched
    assert (yields == 30.0).all()


def test_no_shocks_when_probabilities_are_zero():
    yields = np.linspace(0, 50, 1000)
    shocked, codes = apply_downside_shocks(default_rng(0), yields, 0.0, 0.0, 0.45)
    assert (codes == SHOCK_NONE).all()
    assert np.array_equal(shocked, yields)


def test_generate_crop_draws_shapes_units_and_signs():
    profile = get_crop_profile("Núcleo", "corn")
    draws = generate_crop_draws(default_rng(5), profile, PRICE_PROFILES["corn"],
                                CropRiskParams(partial_loss_prob=0.2, total_loss_prob=0.1), 50_000, True)

    for column in (draws.yield_ton, draws.price, draws.inputs, draws.labors, draws.rent):
        assert column.shape == (50_000,)
        assert (column >= 0).all()
    # yields are quoted in quintals and returned in tons
    assert draws.yield_ton.max() < profile.yield_mean_qq
    assert abs(draws.inputs.mean() - profile.cost_inputs_mean) < 2.0
    assert (draws.yield_ton[draws.shock == SHOCK_TOTAL] == 0).all()


def test_generate_crop_draws_without_rent():
    profile = get_crop_profile("NEA", "soy")
    draws = generate_crop_draws(default_rng(5), profile, PRICE_PROFILES["soy"], CropRiskParams(), 1000, False)
    assert (draws.rent == 0).all()
    assert np.array_equal(draws.rest_per_ha, draws.labors)


def test_generate_crop_draws_reproducible_from_seed():
    profile = get_crop_profile("NEA", "corn")
    a = generate_crop_draws(default_rng(42), profile, PRICE_PROFILES["corn"], CropRiskParams(), 1000, True)
    b = generate_crop_draws(default_rng(42), profile, PRICE_PROFILES["corn"], CropRiskParams(), 1000, True)
    assert np.array_equal(a.yield_ton, b.yield_ton)
    assert np.array_equal(a.price, b.price)
    assert np.array_equal(a.rent, b.rent)


def test_price_correlation_survives_asymmetric_yield():
    profile = get_crop_profile("NEA", "corn")
    risk = CropRiskParams(rho=-0.6, yield_sd_down_factor=2.0, yield_sd_up_factor=0.5,
                          partial_loss_prob=0.0, total_loss_prob=0.0)
    draws = generate_crop_draws(default_rng(9), profile, PRICE_PROFILES["corn"], risk, 100_000, True)
    assert abs(np.corrcoef(draws.z_yield, draws.z_price)[0, 1] + 0.6) < 0.01
    assert np.corrcoef(draws.yield_ton, draws.price)[0, 1] < -0.5
