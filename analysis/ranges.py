#!/usr/bin/env python3
"""
Risk band classification of the repayment-probability curve.

Green is the longest run of grid points at or above the target probability
(earliest run on ties). Red starts at the first point below the red threshold
after green and runs to the end of the grid. Yellow is the run of points in
[red, target) between the two.
"""

from dataclasses import asdict, dataclass
from typing import Optional, Sequence, Tuple


@dataclass(frozen=True)
class RiskBand:
    """Contiguous slice of the credit grid, inclusive on both ends"""
    start_index: int
    end_index: int
    pct_min: float
    pct_max: float
    amt_min: float
    amt_max: float

    def indices(self) -> range:
        return range(self.start_index, self.end_index + 1)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class RiskBands:
    green: Optional[RiskBand]
    yellow: Optional[RiskBand]
    red: Optional[RiskBand]

    def to_dict(self) -> dict:
        return {name: (band.to_dict() if band else None)
                for name, band in (("green", self.green), ("yellow", self.yellow), ("red", self.red))}


@dataclass(frozen=True)
class Recommendation:
    """Recommended credit range and the largest credit meeting the target"""
    pct_min: float
    pct_max: float
    amt_min: float
    amt_max: float
    max_credit_pct: float
    max_credit_amt: float
    target_prob: float

    def to_dict(self) -> dict:
        return asdict(self)


def longest_run(probabilities: Sequence[float], threshold: float) -> Optional[Tuple[int, int]]:
    """
    Longest contiguous run of indices with probability >= threshold.

    Args:
        probabilities: Probabilities ordered by credit level
        threshold: Minimum probability for an index to belong to a run

    Returns:
        (start, end) inclusive, the earliest run on ties, or None if no index qualifies
    """
    best = None
    run_start = None
    for i, p in enumerate(probabilities):
        if p >= threshold:
            if run_start is None:
                run_start = i
            if best is None or (i - run_start) > (best[1] - best[0]):
                best = (run_start, i)
        else:
            run_start = None
    return best


def first_below(probabilities: Sequence[float], threshold: float, start: int = 0) -> Optional[int]:
    """First index at or after start whose probability is below threshold."""
    for i in range(start, len(probabilities)):
        if probabilities[i] < threshold:
            return i
    return None


def band_from_indices(grid, start: int, end: int) -> RiskBand:
    """Build a band from grid index bounds; grid needs pct and amount arrays."""
    return RiskBand(
        start_index=int(start),
        end_index=int(end),
        pct_min=float(grid.pct[start]),
        pct_max=float(grid.pct[end]),
        amt_min=float(grid.amount[start]),
        amt_max=float(grid.amount[end]),
    )


def classify_bands(grid, target_prob: float, red_prob: float) -> RiskBands:
    """
    Partition the grid into green, yellow and red bands.

    Args:
        grid: Credit grid with pct, amount and probability arrays ordered by pct
        target_prob: Green threshold
        red_prob: Red threshold (<= target_prob)

    Returns:
        RiskBands; any band may be None
    """
    probs = [float(p) for p in grid.probability]
    last = len(probs) - 1

    green_idx = longest_run(probs, target_prob)
    after_green = green_idx[1] + 1 if green_idx else 0

    red_start = first_below(probs, red_prob, after_green)

    window_end = red_start - 1 if red_start is not None else last
    yellow = None
    for i in range(after_green, window_end + 1):
        if red_prob <= probs[i] < target_prob:
            end = i
            while end + 1 <= window_end and red_prob <= probs[end + 1] < target_prob:
                end += 1
            yellow = band_from_indices(grid, i, end)
            break

    return RiskBands(
        green=band_from_indices(grid, *green_idx) if green_idx else None,
        yellow=yellow,
        red=band_from_indices(grid, red_start, last) if red_start is not None else None,
    )


def build_recommendation(grid, green: Optional[RiskBand], target_prob: float) -> Optional[Recommendation]:
    """Recommendation from the green band; None when no credit level meets the target."""
    if green is None:
        return None
    best = green.end_index
    return Recommendation(
        pct_min=green.pct_min,
        pct_max=green.pct_max,
        amt_min=green.amt_min,
        amt_max=green.amt_max,
        max_credit_pct=float(grid.pct[best]),
        max_credit_amt=float(grid.amount[best]),
        target_prob=target_prob,
    )
