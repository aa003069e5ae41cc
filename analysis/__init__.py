# analysis/__init__.py
"""Risk band classification and outcome metrics."""

from .outcomes import OutcomeInsights, summarize_outcomes
from .ranges import (
    Recommendation, RiskBand, RiskBands, build_recommendation, classify_bands, first_below, longest_run
)

__all__ = [
    'OutcomeInsights',
    'summarize_outcomes',
    'Recommendation',
    'RiskBand',
    'RiskBands',
    'build_recommendation',
    'classify_bands',
    'first_below',
    'longest_run'
]
