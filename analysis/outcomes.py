#!/usr/bin/env python3
"""
Narrative outcome summary of the simulated portfolio margin.
"""

from dataclasses import asdict, dataclass

import numpy as np
import pandas as pd

BAD_QUANTILE = 0.05
TYPICAL_QUANTILE = 0.50
GOOD_QUANTILE = 0.95


@dataclass(frozen=True)
class OutcomeInsights:
    """Bad / typical / very good year margins and the share of profitable draws"""
    bad: float
    typical: float
    good: float
    probability_positive: float

    def to_dict(self) -> dict:
        return asdict(self)


def summarize_outcomes(margin: np.ndarray) -> OutcomeInsights:
    """
    Nearest-rank quantiles of the margin, sorted[floor(p*(N-1))].

    Args:
        margin: Total margin per draw (USD)

    Returns:
        OutcomeInsights with the 5th, 50th and 95th percentile and P(margin > 0)
    """
    s = pd.Series(margin, dtype=float)
    q = s.quantile([BAD_QUANTILE, TYPICAL_QUANTILE, GOOD_QUANTILE], interpolation="lower")
    return OutcomeInsights(
        bad=float(q[BAD_QUANTILE]),
        typical=float(q[TYPICAL_QUANTILE]),
        good=float(q[GOOD_QUANTILE]),
        probability_positive=float((s > 0).mean()),
    )
