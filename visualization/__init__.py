# visualization/__init__.py
"""Visualization and chart generation module."""

from .charts import figure_to_png, plot_repayment_curve

__all__ = [
    'figure_to_png',
    'plot_repayment_curve'
]
