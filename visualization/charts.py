#!/usr/bin/env python3
"""
Chart generation for simulation results.
Repayment probability against credit amount, with the risk bands shaded.
"""

import io

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

BAND_COLORS = {"green": "#2e7d32", "yellow": "#f9a825", "red": "#c62828"}


def plot_repayment_curve(grid, bands, target_prob: float, red_prob: float, title: str = ""):
    """
    Plot the repayment probability curve.

    Args:
        grid: CreditGrid of the run
        bands: RiskBands of the run
        target_prob: Green threshold, drawn as a dashed line
        red_prob: Red threshold, drawn as a dotted line
        title: Optional axes title

    Returns:
        matplotlib Figure
    """
    fig, ax = plt.subplots(figsize=(8, 3.2))
    ax.plot(grid.amount, grid.probability, marker="o", markersize=3, color="#1f4e79", lw=1.5)

    # Bands cover half a grid step either side of their end points
    step = (grid.amount[1] - grid.amount[0]) / 2 if len(grid) > 1 else 0.5
    for name in ("green", "yellow", "red"):
        band = getattr(bands, name)
        if band is not None:
            ax.axvspan(band.amt_min - step, band.amt_max + step, color=BAND_COLORS[name], alpha=0.12, lw=0)

    ax.axhline(target_prob, color=BAND_COLORS["green"], ls="--", lw=1, label=f"Target {target_prob:.0%}")
    ax.axhline(red_prob, color=BAND_COLORS["red"], ls=":", lw=1, label=f"Red {red_prob:.0%}")

    ax.set_ylim(0, 1.02)
    ax.set_xlabel("Credit (USD)")
    ax.set_ylabel("P(repay)")
    if title:
        ax.set_title(title)
    ax.legend(loc="lower left", fontsize=8, frameon=False)
    fig.tight_layout()
    return fig


def figure_to_png(fig, dpi: int = 200) -> bytes:
    """Render a figure to PNG bytes and close it."""
    buf = io.BytesIO()
    fig.savefig(buf, dpi=dpi, bbox_inches="tight", format="png")
    plt.close(fig)
    buf.seek(0)
    return buf.read()
