# ============================================================
# tanker_app.py — AeroTanker UI (A320 / A321 side by side)
# Run: streamlit run tanker_app.py
# ============================================================
from __future__ import annotations
from typing import Dict

import streamlit as st

from aircraft_limits import MODELS, VARIANTS, AircraftLimits, limits_for_variant
from tanker_settings import configure_logging, load_settings, limits_table
from tanker_core import (
    CalculatorInput, DerivedWeights, INPUT_FIELDS, TAXI_HINT, EXCEEDS_TEXT,
    compute_panel, reset_inputs, format_kg, format_signed_kg, zfw_status_label,
)

APP_VERSION = "v1.0.0"

FIELD_LABELS: Dict[str, str] = {
    "taxi": "Taxi",
    "sector4": "Sec 4",
    "sector3": "Sec 3",
    "sector2": "Sec 2",
    "sector1": "Sec 1",
    "zfw": "ZFW (KG)",
    "trip_plus_taxi": "Sector 1 (Trip+Taxi)",
}


cfg = load_settings()
st.set_page_config(page_title=cfg["page_title"], page_icon="✈️", layout="wide")
configure_logging(cfg["log_level"])
table = limits_table(cfg)


def _key(model: str, field: str) -> str:
    return f"{model}_{field}"


def _init_state():
    ss = st.session_state
    for model in MODELS:
        for field in INPUT_FIELDS:
            ss.setdefault(_key(model, field), "")


def _reset_panel(model: str):
    blank = reset_inputs()
    for field in INPUT_FIELDS:
        st.session_state[_key(model, field)] = getattr(blank, field)


def _panel_inputs(model: str) -> CalculatorInput:
    return CalculatorInput(**{f: st.session_state[_key(model, f)] for f in INPUT_FIELDS})


def _text(model: str, field: str, placeholder: str = "0"):
    st.text_input(FIELD_LABELS[field], key=_key(model, field), placeholder=placeholder)


def render_panel(model: str, variant: str, limits: AircraftLimits):
    head_l, head_r = st.columns([3, 2])
    with head_l:
        st.subheader(f"{model} · {variant}")
    with head_r:
        st.button("Reset", key=f"reset_{model}", on_click=_reset_panel, args=(model,),
                  help="Reset all fields")

    # Inputs first; results below use this run's values
    sec = st.columns(5)
    with sec[0]:
        _text(model, "taxi", placeholder="0.2")
    for col, field in zip(sec[1:], ("sector4", "sector3", "sector2", "sector1")):
        with col:
            _text(model, field)
    st.caption(TAXI_HINT)

    c_zfw, c_trip = st.columns(2)
    with c_zfw:
        _text(model, "zfw")
    with c_trip:
        _text(model, "trip_plus_taxi")

    res = compute_panel(_panel_inputs(model), limits)
    _render_results(res)


def _render_results(res: DerivedWeights):
    m1, m2, m3, m4 = st.columns(4)
    m1.metric("MTOW (KG)", format_kg(res.mtow_limit_kg))
    m2.metric("MLW (KG)", format_kg(res.mlw_limit_kg))
    m3.metric("Tanker", format_kg(res.tanker_fuel_kg))
    m4.metric("Limiter", res.limiter)

    w1, w2 = st.columns(2)
    with w1:
        st.metric("TOW", format_kg(res.tow_kg))
        if res.tow_exceeds:
            st.error(f"TOW above MTOW {format_kg(res.mtow_limit_kg)}")
    with w2:
        st.metric("Calc LWG", format_kg(res.lwg_kg), delta=format_signed_kg(res.mlw_delta_kg),
                  delta_color="inverse")
        if res.lwg_exceeds:
            st.error(f"LWG above MLW {format_kg(res.mlw_limit_kg)}")

    r1, r2 = st.columns(2)
    with r1:
        if res.tank_exceeds:
            st.error(f"Tank Allowed: **{format_kg(res.tank_allowed_kg)}** — {EXCEEDS_TEXT}")
        else:
            st.success(f"Tank Allowed: **{format_kg(res.tank_allowed_kg)}**")
    with r2:
        st.warning(f"Delta Reduce ZFW: **{format_kg(res.delta_reduce_zfw_kg)}** "
                   f"{zfw_status_label(res.delta_reduce_zfw_kg)}")


# ------------------------------ UI ------------------------------
_init_state()

top_l, top_r = st.columns([3, 1])
with top_l:
    st.title(cfg["page_title"])
    st.caption(f"Fuel Tankering & Weight Calculator · {APP_VERSION}")
with top_r:
    variant = st.radio("Engine", list(VARIANTS), horizontal=True,
                       index=list(VARIANTS).index(cfg["default_variant"]),
                       format_func=lambda v: f"{v} Engine")

# one variant drives both panels
panel_limits = limits_for_variant(variant, table)
cols = st.columns(len(MODELS))
for col, model in zip(cols, MODELS):
    with col:
        with st.container(border=True):
            render_panel(model, variant, panel_limits[model])

st.markdown("---")
st.caption("Verification of load sheet data is mandatory before use.")
