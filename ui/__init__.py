# ui/__init__.py
"""User interface components module."""

from .components import (
    render_parameter,
    render_parameter_group,
    render_portfolio_inputs,
    render_simulation_settings
)

__all__ = [
    'render_parameter',
    'render_parameter_group',
    'render_portfolio_inputs',
    'render_simulation_settings'
]
