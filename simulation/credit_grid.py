#!/usr/bin/env python3
"""
Credit grid scan: repayment probability for each candidate credit level.

Repayment follows a waterfall. Labors and rent are paid out of revenue first,
then the credit principal plus interest:

    draw i repays  <=>  total_revenue[i] >= total_rest[i] + credit * (1 + rate)

Inputs are not on the revenue side; with an inputs-based credit they are
what the credit pays for.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd

from simulation.scenarios import PortfolioDraws
from utils.errors import SimulationCancelled

logger = logging.getLogger(__name__)


class CancelToken:
    """Cooperative cancellation flag checked between grid points."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self):
        if self._event.is_set():
            raise SimulationCancelled("credit grid scan cancelled")


@dataclass(frozen=True)
class CreditGrid:
    """Ordered credit levels with their empirical repayment probability"""
    pct: np.ndarray
    amount: np.ndarray
    probability: np.ndarray
    base_usd: float
    interest_rate: float

    def __len__(self) -> int:
        return len(self.pct)

    def required_repayment(self, index: int) -> float:
        return float(self.amount[index] * (1.0 + self.interest_rate))

    def to_frame(self) -> pd.DataFrame:
        """Grid as a table with columns pct, credit_usd, prob_repay"""
        return pd.DataFrame({
            "pct": self.pct,
            "credit_usd": self.amount,
            "prob_repay": self.probability,
        })


def grid_percentages(steps: int) -> np.ndarray:
    """Equally spaced fractions from 0 to 1; a one-point grid is [0.0]."""
    if steps < 1:
        raise ValueError("grid needs at least one point")
    return np.linspace(0.0, 1.0, steps)


def repayment_probability(draws: PortfolioDraws, required_repayment: float) -> float:
    """Share of draws whose revenue covers rest costs and then the credit repayment."""
    repays = draws.total_revenue >= draws.total_rest + required_repayment
    return float(np.count_nonzero(repays)) / draws.n


def scan_credit_grid(draws: PortfolioDraws, base_usd: float, interest_rate: float, steps: int,
                     workers: int = 1, cancel: Optional[CancelToken] = None) -> CreditGrid:
    """
    Evaluate the repayment probability over the whole credit grid.

    Args:
        draws: Portfolio draws of the current run (read only)
        base_usd: Credit base; 100% of the grid equals this amount
        interest_rate: Interest charged on the credit amount
        steps: Number of grid points
        workers: Threads used to evaluate grid points
        cancel: Optional token checked before each grid point

    Returns:
        CreditGrid ordered by increasing pct

    Raises:
        SimulationCancelled: if the token is set during the scan
    """
    pct = grid_percentages(steps)
    amount = base_usd * pct

    def _evaluate(credit: float) -> float:
        if cancel is not None:
            cancel.raise_if_cancelled()
        return repayment_probability(draws, credit + credit * interest_rate)

    if workers > 1 and steps > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            probability = np.array(list(pool.map(_evaluate, amount)))
    else:
        probability = np.array([_evaluate(credit) for credit in amount])

    logger.debug("Credit grid over base %.0f: p[0]=%.3f p[-1]=%.3f", base_usd, probability[0], probability[-1])
    return CreditGrid(pct=pct, amount=amount, probability=probability,
                      base_usd=float(base_usd), interest_rate=float(interest_rate))
