#!/usr/bin/env python3
"""
Result value object returned by a simulation run.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

import pandas as pd

from analysis.outcomes import OutcomeInsights
from analysis.ranges import Recommendation, RiskBands
from simulation.credit_grid import CreditGrid
from simulation.scenarios import PortfolioInput


@dataclass(frozen=True)
class SimulationResult:
    """
    Everything the presentation layer needs from one run.

    Needs are deterministic (profile means); recommendation, bands and
    insights come from the Monte Carlo draws.
    """
    portfolio: PortfolioInput
    need_inputs_usd: float
    need_working_capital_usd: float
    cost_total_usd: float
    credit_base: str
    credit_base_usd: float
    recommendation: Optional[Recommendation]
    bands: RiskBands
    insights: OutcomeInsights
    grid: CreditGrid
    n_draws: int
    seed: Optional[int]
    degenerate: bool = False

    @property
    def meets_objective(self) -> bool:
        return self.recommendation is not None

    def grid_frame(self) -> pd.DataFrame:
        return self.grid.to_frame()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for easy serialization"""
        return {
            "zone": self.portfolio.zone,
            "ha_soy": self.portfolio.ha_soy,
            "ha_corn": self.portfolio.ha_corn,
            "has_rent": self.portfolio.has_rent,
            "need_inputs_usd": self.need_inputs_usd,
            "need_working_capital_usd": self.need_working_capital_usd,
            "cost_total_usd": self.cost_total_usd,
            "credit_base": self.credit_base,
            "credit_base_usd": self.credit_base_usd,
            "recommendation": self.recommendation.to_dict() if self.recommendation else None,
            "bands": self.bands.to_dict(),
            "insights": self.insights.to_dict(),
            "table": self.grid.to_frame().to_dict(orient="records"),
            "n_draws": self.n_draws,
            "seed": self.seed,
            "degenerate": self.degenerate,
        }
