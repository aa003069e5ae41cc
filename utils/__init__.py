# utils/__init__.py
"""Utilities, helper functions and shared error types."""

from .errors import ConfigurationError, DegenerateInputWarning, SimulationCancelled
from .helpers import format_currency, format_percentage

__all__ = [
    'ConfigurationError',
    'DegenerateInputWarning',
    'SimulationCancelled',
    'format_currency',
    'format_percentage'
]
