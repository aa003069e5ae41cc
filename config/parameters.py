#!/usr/bin/env python3
"""
Simulation parameters for the agro credit simulator.
Defaults, per-crop risk dials, validation and the UI parameter specifications.
"""

import json
from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional

from config.profiles import CROPS

N_DRAWS = 100_000
GRID_STEPS = 21
RHO_SOY = -0.05
RHO_CORN = -0.05
INTEREST_RATE = 0.10
TARGET_PROB = 0.85
RED_PROB = 0.60


class CreditBase(str, Enum):
    """Deterministic need that credit percentages are expressed against"""
    INPUTS = "inputs"
    WORKING_CAPITAL = "working_capital"


@dataclass(frozen=True)
class CropRiskParams:
    """Correlation, two-piece yield skew and downside shocks for one crop"""
    rho: float = -0.05
    yield_sd_down_factor: float = 1.25
    yield_sd_up_factor: float = 0.85
    partial_loss_prob: float = 0.03
    partial_loss_factor: float = 0.45
    total_loss_prob: float = 0.005

    def validate(self, crop: str = "") -> List[str]:
        errors = []
        tag = f"{crop}: " if crop else ""
        if not -1.0 < self.rho < 1.0:
            errors.append(f"{tag}correlation rho must lie strictly between -1 and 1")
        if self.yield_sd_down_factor < 0 or self.yield_sd_up_factor < 0:
            errors.append(f"{tag}yield sd factors cannot be negative")
        for name in ("partial_loss_prob", "total_loss_prob", "partial_loss_factor"):
            value = getattr(self, name)
            if value < 0 or value > 1:
                errors.append(f"{tag}{name} must be between 0 and 1")
        if self.partial_loss_prob + self.total_loss_prob > 1:
            errors.append(f"{tag}partial and total loss probabilities together cannot exceed 1")
        return errors


def _default_crop_risk() -> Dict[str, CropRiskParams]:
    return {
        "soy": CropRiskParams(rho=RHO_SOY, partial_loss_prob=0.03, total_loss_prob=0.005),
        "corn": CropRiskParams(rho=RHO_CORN, partial_loss_prob=0.05, total_loss_prob=0.01),
    }


@dataclass
class SimulationParameters:
    """How a simulation run samples, scans and classifies"""
    n_draws: int = N_DRAWS
    grid_steps: int = GRID_STEPS
    interest_rate: float = INTEREST_RATE
    target_prob: float = TARGET_PROB
    red_prob: float = RED_PROB
    credit_base: CreditBase = CreditBase.INPUTS
    crop_risk: Dict[str, CropRiskParams] = field(default_factory=_default_crop_risk)
    seed: Optional[int] = None
    workers: int = 1

    def __post_init__(self):
        self.credit_base = CreditBase(self.credit_base)

    def risk_for(self, crop: str) -> CropRiskParams:
        return self.crop_risk[crop]

    def with_crop_risk(self, crop: str, **changes) -> "SimulationParameters":
        """Copy with some fields of one crop's risk dials replaced."""
        risk = dict(self.crop_risk)
        risk[crop] = replace(risk[crop], **changes)
        return replace(self, crop_risk=risk)

    def validate(self) -> List[str]:
        errors = []
        if self.n_draws < 1:
            errors.append("Number of draws must be at least 1")
        if self.grid_steps < 1:
            errors.append("Grid must have at least one point")
        if self.interest_rate < 0:
            errors.append("Interest rate cannot be negative")
        for name in ("target_prob", "red_prob"):
            value = getattr(self, name)
            if value < 0 or value > 1:
                errors.append(f"{name} must be between 0 and 1")
        if self.red_prob > self.target_prob:
            errors.append("Red threshold cannot be above the target threshold")
        if self.workers < 1:
            errors.append("Workers must be at least 1")
        for crop in CROPS:
            if crop not in self.crop_risk:
                errors.append(f"Missing risk parameters for crop {crop!r}")
            else:
                errors.extend(self.crop_risk[crop].validate(crop))
        return errors

    def to_dict(self) -> Dict[str, Any]:
        """Convert parameters to a plain dictionary for serialization"""
        out = asdict(self)
        out["credit_base"] = self.credit_base.value
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimulationParameters":
        """Create parameters from a dictionary, keeping defaults for missing keys"""
        data = dict(data)
        if "crop_risk" in data:
            risk = _default_crop_risk()
            for crop, values in data["crop_risk"].items():
                risk[crop] = values if isinstance(values, CropRiskParams) else CropRiskParams(**values)
            data["crop_risk"] = risk
        return cls(**data)

    def save_to_file(self, filepath: str):
        """Save parameters to a JSON file"""
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load_from_file(cls, filepath: str) -> "SimulationParameters":
        """Load parameters from a JSON file"""
        with open(filepath, "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))


# UI PARAMETER SPECIFICATIONS - keys are SimulationParameters fields or "<crop>.<CropRiskParams field>"
PARAM_SPECS = {
    "n_draws": {"type": "int", "min": 1_000, "max": 200_000, "step": 1_000, "label": "Scenarios simulated",
                "desc": "Monte Carlo draws per run; fewer is faster but noisier"},
    "grid_steps": {"type": "int", "min": 2, "max": 101, "step": 1, "label": "Credit grid points",
                   "desc": "Equally spaced credit levels from 0% to 100% of the credit base"},
    "interest_rate": {"type": "float", "min": 0.0, "max": 0.60, "step": 0.01, "label": "Interest rate",
                      "desc": "Interest charged on the credit for the campaign"},
    "target_prob": {"type": "float", "min": 0.50, "max": 0.99, "step": 0.01, "label": "Target repayment probability",
                    "desc": "Credit levels at or above this probability are green"},
    "red_prob": {"type": "float", "min": 0.10, "max": 0.95, "step": 0.01, "label": "Red threshold",
                 "desc": "Credit levels below this probability are red"},
    "credit_base": {"type": "select", "options": [("Inputs", "inputs"), ("Working capital", "working_capital")],
                    "label": "Credit base", "desc": "Need that 100% of credit refers to"},
    "soy.partial_loss_prob": {"type": "float", "min": 0.0, "max": 0.30, "step": 0.005, "label": "Soy partial loss prob.",
                              "desc": "Chance of a drought/hail year that cuts soy yield"},
    "soy.total_loss_prob": {"type": "float", "min": 0.0, "max": 0.10, "step": 0.001, "label": "Soy total loss prob.",
                            "desc": "Chance of losing the whole soy harvest"},
    "corn.partial_loss_prob": {"type": "float", "min": 0.0, "max": 0.30, "step": 0.005, "label": "Corn partial loss prob.",
                               "desc": "Chance of a drought/hail year that cuts corn yield"},
    "corn.total_loss_prob": {"type": "float", "min": 0.0, "max": 0.10, "step": 0.001, "label": "Corn total loss prob.",
                             "desc": "Chance of losing the whole corn harvest"},
}

PARAM_GROUPS = {
    "credit": {"title": "Credit & thresholds",
               "basic": ["interest_rate", "target_prob", "red_prob"],
               "detailed": ["credit_base"]},
    "risk": {"title": "Climate shocks",
             "basic": ["soy.partial_loss_prob", "corn.partial_loss_prob"],
             "detailed": ["soy.total_loss_prob", "corn.total_loss_prob"]},
    "simulation": {"title": "Simulation",
                   "basic": ["n_draws"],
                   "detailed": ["grid_steps"]},
}


def apply_overrides(params: SimulationParameters, overrides: Dict[str, Any]) -> SimulationParameters:
    """
    Maps flat UI overrides onto a copy of the parameters.

    Args:
        params: Base parameters
        overrides: Flat dict keyed like PARAM_SPECS ("interest_rate", "soy.total_loss_prob", ...)

    Returns:
        New SimulationParameters with the overrides applied
    """
    out = params
    for key, value in overrides.items():
        if "." in key:
            crop, name = key.split(".", 1)
            out = out.with_crop_risk(crop, **{name: value})
        else:
            out = replace(out, **{key: value})
    return out
