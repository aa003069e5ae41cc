#!/usr/bin/env python3
"""
Named parameter presets for the agro credit simulator.
Each preset is a set of modifications applied on top of the defaults.
"""

from dataclasses import replace

from config.parameters import CreditBase, SimulationParameters

PARAMETER_PRESETS = {
    "baseline": {
        "description": "Inputs-based credit, two-piece yield with partial and total loss shocks",
        "modifications": {},
    },
    "working_capital": {
        "description": "Credit sized against working capital (inputs + labors + rent)",
        "modifications": {"credit_base": CreditBase.WORKING_CAPITAL},
    },
    "cautious": {
        "description": "Stricter red threshold, so the yellow band is narrower",
        "modifications": {"red_prob": 0.75},
    },
    "single_shock": {
        "description": "Only the partial loss shock, no total loss",
        "modifications": {},
        "crop_risk": {
            "soy": {"total_loss_prob": 0.0},
            "corn": {"total_loss_prob": 0.0},
        },
    },
    "no_shock": {
        "description": "Symmetric normal yields without shocks",
        "modifications": {},
        "crop_risk": {
            crop: {"yield_sd_down_factor": 1.0, "yield_sd_up_factor": 1.0,
                   "partial_loss_prob": 0.0, "total_loss_prob": 0.0}
            for crop in ("soy", "corn")
        },
    },
}


def create_preset_parameters(preset_name: str, **overrides) -> SimulationParameters:
    """Create parameters using one of the predefined presets"""
    if preset_name not in PARAMETER_PRESETS:
        raise ValueError(f"Unknown preset: {preset_name}. Available: {list(PARAMETER_PRESETS.keys())}")

    preset = PARAMETER_PRESETS[preset_name]
    params = replace(SimulationParameters(), **preset["modifications"])
    for crop, changes in preset.get("crop_risk", {}).items():
        params = params.with_crop_risk(crop, **changes)
    if overrides:
        params = replace(params, **overrides)
    return params
