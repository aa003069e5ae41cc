#!/usr/bin/env python3
"""
Tests for simulation parameters, presets and reference tables.
"""

import pytest

from config.parameters import CreditBase, CropRiskParams, SimulationParameters, apply_overrides
from config.presets import PARAMETER_PRESETS, create_preset_parameters
from config.profiles import get_crop_profile, get_price_profile, profiles_for_zone
from utils.errors import ConfigurationError
from utils.helpers import format_currency, format_percentage


def test_defaults_are_valid():
    params = SimulationParameters()
    assert params.validate() == []
    assert params.credit_base is CreditBase.INPUTS
    assert params.risk_for("corn").total_loss_prob == 0.01


def test_validate_collects_every_error():
    params = SimulationParameters(n_draws=0, interest_rate=-0.1, target_prob=0.5, red_prob=0.7, workers=0)
    errors = params.validate()
    assert len(errors) == 4
    assert any("Red threshold" in e for e in errors)


def test_crop_risk_validation():
    assert CropRiskParams().validate() == []
    errors = CropRiskParams(rho=1.0, partial_loss_factor=1.5).validate("soy")
    assert len(errors) == 2
    assert all(e.startswith("soy: ") for e in errors)


def test_missing_crop_risk_is_reported():
    params = SimulationParameters(crop_risk={"soy": CropRiskParams()})
    assert "Missing risk parameters for crop 'corn'" in params.validate()


def test_credit_base_coerced_from_string():
    assert SimulationParameters(credit_base="working_capital").credit_base is CreditBase.WORKING_CAPITAL


def test_dict_and_file_round_trip(tmp_path):
    params = SimulationParameters(seed=42, interest_rate=0.12).with_crop_risk("soy", total_loss_prob=0.02)
    path = tmp_path / "params.json"
    params.save_to_file(str(path))

    loaded = SimulationParameters.load_from_file(str(path))
    assert loaded == params
    assert loaded.to_dict()["credit_base"] == "inputs"


def test_from_dict_keeps_defaults_for_missing_crops():
    params = SimulationParameters.from_dict({"crop_risk": {"soy": {"partial_loss_prob": 0.1}}})
    assert params.risk_for("soy").partial_loss_prob == 0.1
    assert params.risk_for("corn") == SimulationParameters().risk_for("corn")


def test_apply_overrides_does_not_mutate_base():
    base = SimulationParameters()
    out = apply_overrides(base, {"interest_rate": 0.2, "corn.total_loss_prob": 0.0})
    assert out.interest_rate == 0.2
    assert out.risk_for("corn").total_loss_prob == 0.0
    assert base.interest_rate == 0.10
    assert base.risk_for("corn").total_loss_prob == 0.01


@pytest.mark.parametrize("name", sorted(PARAMETER_PRESETS))
def test_presets_are_valid(name):
    assert create_preset_parameters(name).validate() == []


def test_preset_contents():
    assert create_preset_parameters("cautious").red_prob == 0.75
    assert create_preset_parameters("working_capital").credit_base is CreditBase.WORKING_CAPITAL
    no_shock = create_preset_parameters("no_shock", seed=1)
    assert no_shock.seed == 1
    assert no_shock.risk_for("soy").partial_loss_prob == 0.0
    assert no_shock.risk_for("corn").yield_sd_down_factor == 1.0


def test_unknown_preset():
    with pytest.raises(ValueError):
        create_preset_parameters("optimistic")


def test_profile_lookup():
    soy, corn = profiles_for_zone("NEA")
    assert (soy.crop, corn.crop) == ("soy", "corn")
    assert get_crop_profile("Núcleo", "corn").yield_mean_qq == 10.0
    assert get_price_profile("soy").price_mean == 320.0
    with pytest.raises(ConfigurationError):
        get_crop_profile("Pampa", "soy")
    with pytest.raises(ConfigurationError):
        get_price_profile("wheat")


def test_working_capital_per_ha():
    soy = get_crop_profile("Núcleo", "soy")
    assert soy.working_capital_per_ha(True) == pytest.approx(234.3 + 53.9 + 520.1)
    assert soy.working_capital_per_ha(False) == pytest.approx(234.3 + 53.9)


def test_formatting_helpers():
    assert format_currency(1234567.4) == "$1,234,567"
    assert format_currency(950.0, thousands_sep=False) == "$950"
    assert format_currency(None) == "—"
    assert format_percentage(0.153) == "15.3%"
