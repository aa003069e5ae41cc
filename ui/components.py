#!/usr/bin/env python3
"""
Reusable UI components for the Streamlit interface.
Handles portfolio input, parameter rendering and progressive disclosure.
"""

import streamlit as st

from config.parameters import PARAM_SPECS, SimulationParameters
from config.profiles import ZONES
from simulation.scenarios import PortfolioInput
from simulation.validation import normalize_hectares


def parameter_value(params: SimulationParameters, param_name: str):
    """Current value of a PARAM_SPECS key on a parameters object."""
    if "." in param_name:
        crop, field_name = param_name.split(".", 1)
        return getattr(params.risk_for(crop), field_name)
    value = getattr(params, param_name)
    return getattr(value, "value", value)


def render_portfolio_inputs() -> PortfolioInput:
    """
    Render zone, hectares and rent controls.

    Returns:
        PortfolioInput built from the widgets
    """
    zone = st.selectbox("Zone", list(ZONES), index=0)
    col1, col2 = st.columns(2)
    ha_soy = col1.text_input("Soy (ha)", value="200")
    ha_corn = col2.text_input("Corn (ha)", value="150")
    has_rent = st.checkbox("Land is rented", value=True)
    return PortfolioInput(
        zone=zone,
        ha_soy=normalize_hectares(ha_soy),
        ha_corn=normalize_hectares(ha_corn),
        has_rent=has_rent,
    )


def render_parameter_group(group_config: dict, params: SimulationParameters, overrides: dict) -> dict:
    """
    Render a parameter group with progressive disclosure.

    Args:
        group_config: Group entry from PARAM_GROUPS
        params: Parameters providing the current values
        overrides: Dict collecting the widget values, updated in place

    Returns:
        Updated overrides
    """
    for param_name in group_config["basic"]:
        overrides[param_name] = render_parameter(param_name, PARAM_SPECS[param_name],
                                                 parameter_value(params, param_name))

    if group_config.get("detailed"):
        with st.expander("🔧 Advanced Settings", expanded=False):
            for param_name in group_config["detailed"]:
                overrides[param_name] = render_parameter(param_name, PARAM_SPECS[param_name],
                                                         parameter_value(params, param_name))
    return overrides


def render_parameter(param_name: str, spec: dict, current_value):
    """
    Render individual parameter with appropriate widget.

    Args:
        param_name: Name of the parameter (used as widget key)
        spec: Parameter specification
        current_value: Current parameter value

    Returns:
        Updated parameter value
    """
    param_type = spec["type"]
    label = spec["label"]
    help_text = spec.get("desc", "")

    if param_type == "int":
        return st.slider(label, min_value=spec["min"], max_value=spec["max"], value=int(current_value),
                         step=spec["step"], key=param_name, help=help_text)

    elif param_type == "float":
        return st.slider(label, min_value=float(spec["min"]), max_value=float(spec["max"]),
                         value=float(current_value), step=float(spec["step"]), key=param_name, help=help_text)

    elif param_type == "select":
        options = spec["options"]
        index = next((i for i, opt in enumerate(options) if opt[1] == current_value), 0)
        choice = st.selectbox(label, options=options, index=index, format_func=lambda x: x[0],
                              key=param_name, help=help_text)
        return choice[1]

    return current_value


def render_simulation_settings() -> dict:
    """
    Render seed controls.

    Returns:
        Dictionary with the seed (None for a fresh random run)
    """
    with st.expander("Reproducibility", expanded=False):
        fixed = st.checkbox("Fix random seed", value=True)
        seed = st.number_input("Random seed", min_value=0, max_value=10_000_000, step=1, value=42)
    return {"seed": int(seed) if fixed else None}
