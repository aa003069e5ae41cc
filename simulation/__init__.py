# simulation/__init__.py
"""Simulation engine module."""

from .credit_grid import CancelToken, CreditGrid, grid_percentages, repayment_probability, scan_credit_grid
from .engine import run_simulation, simulate
from .results import SimulationResult
from .scenarios import PortfolioDraws, PortfolioInput, PortfolioNeeds, aggregate_portfolio, compute_needs
from .validation import normalize_hectares, preflight_validate
from .variates import CropDraws, generate_crop_draws

__all__ = [
    'CancelToken',
    'CreditGrid',
    'grid_percentages',
    'repayment_probability',
    'scan_credit_grid',
    'run_simulation',
    'simulate',
    'SimulationResult',
    'PortfolioDraws',
    'PortfolioInput',
    'PortfolioNeeds',
    'aggregate_portfolio',
    'compute_needs',
    'normalize_hectares',
    'preflight_validate',
    'CropDraws',
    'generate_crop_draws'
]
