#!/usr/bin/env python3
"""
Main Streamlit application for the agro credit simulator.
Collects the portfolio, runs the engine and renders the recommendation.
"""

import io
import logging

import streamlit as st

from config.parameters import PARAM_GROUPS, SimulationParameters, apply_overrides
from config.presets import PARAMETER_PRESETS, create_preset_parameters
from simulation.engine import run_simulation
from simulation.scenarios import PortfolioInput
from ui.components import render_parameter_group, render_portfolio_inputs, render_simulation_settings
from utils.errors import ConfigurationError
from utils.helpers import format_currency, format_percentage
from visualization.charts import figure_to_png, plot_repayment_curve

logger = logging.getLogger(__name__)


def initialize_streamlit():
    """Initialize Streamlit configuration and page setup."""
    st.set_page_config(page_title="Agro Credit Optimizer", layout="wide")
    st.title("Agro Credit Optimizer")
    st.caption("Núcleo vs NEA · Monte Carlo repayment probability by credit level")


@st.cache_data(show_spinner=False)
def run_simulation_cached(portfolio: dict, params: dict):
    """Cached run keyed on plain dicts; only used when the seed is fixed."""
    return run_simulation(PortfolioInput(**portfolio), SimulationParameters.from_dict(params))


def render_sidebar():
    """
    Render the sidebar with all configuration controls.

    Returns:
        tuple: (portfolio, params)
    """
    with st.sidebar:
        st.header("Portfolio")
        portfolio = render_portfolio_inputs()

        st.header("Assumptions")
        preset_names = list(PARAMETER_PRESETS.keys())
        preset = st.selectbox("Preset", preset_names, index=0,
                              format_func=lambda name: f"{name} · {PARAMETER_PRESETS[name]['description']}")
        params = create_preset_parameters(preset)

        overrides = {}
        for group_config in PARAM_GROUPS.values():
            with st.expander(group_config["title"], expanded=False):
                render_parameter_group(group_config, params, overrides)
        overrides.update(render_simulation_settings())

    return portfolio, apply_overrides(params, overrides)


def render_results(portfolio: PortfolioInput, params: SimulationParameters):
    """
    Run the simulation and render needs, insights and the recommendation.

    Args:
        portfolio: Portfolio from the sidebar
        params: Parameters from the sidebar
    """
    with st.spinner("Running simulator…"):
        try:
            if params.seed is None:
                result = run_simulation(portfolio, params)
            else:
                result = run_simulation_cached(
                    {"zone": portfolio.zone, "ha_soy": portfolio.ha_soy,
                     "ha_corn": portfolio.ha_corn, "has_rent": portfolio.has_rent},
                    params.to_dict(),
                )
        except ConfigurationError as e:
            logger.warning("Rejected inputs from the form: %d problem(s)", len(e.errors))
            st.error("Invalid inputs:\n- " + "\n- ".join(e.errors))
            return

    if result.degenerate:
        st.warning("No hectares entered: needs are zero and any credit level trivially repays.")

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Inputs (USD)", format_currency(result.need_inputs_usd))
    col2.metric("Working capital (USD)", format_currency(result.need_working_capital_usd))
    col3.metric("Total cost (USD)", format_currency(result.cost_total_usd))
    col4.metric("Scenarios in profit", format_percentage(result.insights.probability_positive))

    st.markdown("#### What the year could look like")
    st.markdown(
        f"- **Tough year:** ~{format_currency(result.insights.bad)}\n"
        f"- **Typical year:** ~{format_currency(result.insights.typical)}\n"
        f"- **Very good year:** up to ~{format_currency(result.insights.good)}"
    )

    render_recommendation(result, params)

    fig = plot_repayment_curve(result.grid, result.bands, params.target_prob, params.red_prob)
    st.pyplot(fig)
    png = figure_to_png(fig)

    render_download_section(result, png)


def render_recommendation(result, params: SimulationParameters):
    """Render the recommended credit range or the no-solution message."""
    st.markdown("#### Recommended credit")
    base_label = "inputs" if result.credit_base == "inputs" else "working capital"
    rec = result.recommendation
    if rec is None:
        st.error(f"No credit level reaches the {params.target_prob:.0%} repayment objective.")
    else:
        st.success(
            f"Range {rec.pct_min:.0%} – {rec.pct_max:.0%} of {base_label} "
            f"({format_currency(rec.amt_min)} – {format_currency(rec.amt_max)}). "
            f"Maximum credit meeting the objective: {format_currency(rec.max_credit_amt)} ({rec.max_credit_pct:.0%})."
        )

    bands = result.bands
    for name, icon in (("green", "🟢"), ("yellow", "🟡"), ("red", "🔴")):
        band = getattr(bands, name)
        if band is None:
            st.caption(f"{icon} {name}: none")
        else:
            st.caption(f"{icon} {name}: {band.pct_min:.0%} – {band.pct_max:.0%} "
                       f"({format_currency(band.amt_min)} – {format_currency(band.amt_max)})")


def render_download_section(result, png: bytes):
    """Render chart and grid downloads and the grid table."""
    df = result.grid_frame()
    col1, col2 = st.columns(2)
    with col1:
        st.download_button("Download chart (PNG)", data=png, file_name="repayment_curve.png", mime="image/png")
    with col2:
        csv_buffer = io.StringIO()
        df.to_csv(csv_buffer, index=False)
        st.download_button("Download grid (CSV)", data=csv_buffer.getvalue(),
                           file_name="credit_grid.csv", mime="text/csv")

    st.markdown("#### Credit grid")
    st.dataframe(df.style.format({"pct": "{:.0%}", "credit_usd": "${:,.0f}", "prob_repay": "{:.1%}"}))


def main():
    """Main application entry point."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    initialize_streamlit()

    portfolio, params = render_sidebar()

    if st.button("Run simulation"):
        render_results(portfolio, params)


if __name__ == "__main__":
    main()
