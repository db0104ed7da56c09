"""
Cost Projection Workbench: Monte Carlo comparison of discount programs
========================================================================

The rep enters the current cost, renewal history and bad-year settings,
toggles the programs, and runs the simulation. Results can be saved per
company and reloaded later.

Run: streamlit run app/streamlit_app.py   (or the `cost-projection` console script)
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

# ---------------------------------------------------------------------------
# Make project root importable
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from core.config import DiscountConstants, EngineConfig
from core.schema import SimulationResult
from core.utils import format_currency, format_percent
from data_prep.history import derive_historical_costs
from data_prep.loader import inputs_from_form
from data_prep.validators import validate_inputs
from engine.runner import run_simulation
from report.aggregator import bad_year_table
from storage.store import ScenarioStoreError, SQLiteScenarioStore

logger = logging.getLogger(__name__)

DATA_DIR = PROJECT_ROOT / "data"
DB_FILE = DATA_DIR / "workbench.db"

# Editable rows in the same shape as the constants table
DEFAULT_CONSTANT_ROWS = [
    {"constant_name": "self_insured_discount", "constant_value": 25.0, "active": True,
     "category": "discount", "description": "Self-insured premium reduction (%)"},
    {"constant_name": "reference_based_discount", "constant_value": 15.0, "active": True,
     "category": "discount", "description": "Reference-based pricing reduction (%)"},
    {"constant_name": "map_discount", "constant_value": 60.0, "active": True,
     "category": "drug", "description": "MAP discount on drug spend (%)"},
    {"constant_name": "drug_spend_share", "constant_value": 60.0, "active": True,
     "category": "drug", "description": "Drug share of total cost (%)"},
]


@st.cache_resource
def _store() -> SQLiteScenarioStore:
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    return SQLiteScenarioStore(DB_FILE)


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------
def _plot_histogram(result: SimulationResult, *, height=320):
    if result.samples is None or result.samples.n_iterations == 0:
        st.info("No samples to plot.")
        return
    df = result.samples.to_dataframe()
    fig = go.Figure()
    fig.add_trace(go.Histogram(x=df["baseline"], name="Baseline", opacity=0.6, nbinsx=40))
    fig.add_trace(go.Histogram(x=df["map_drug"], name="All Programs", opacity=0.6, nbinsx=40))
    if df["bad_year"].any():
        fig.add_trace(go.Histogram(x=df.loc[df["bad_year"], "baseline"], name="Bad Years",
                                   opacity=0.6, nbinsx=40))
    fig.update_layout(
        barmode="overlay",
        title="Simulated Annual Cost",
        xaxis_title="Cost ($)",
        yaxis_title="Iterations",
        height=height,
    )
    st.plotly_chart(fig, use_container_width=True)


def _display_result(result: SimulationResult):
    cols = st.columns(4)
    for col, name, label in zip(
        cols,
        result.SCENARIOS,
        ["Baseline Mean", "Self-Insured", "Reference-Based", "MAP Drugs"],
    ):
        stats = result.scenario(name)
        with col:
            delta = None
            if name != "baseline":
                delta = f"Save {format_currency(result.baseline.mean - stats.mean)}"
            st.metric(label, format_currency(stats.mean), delta=delta)

    summary = result.summary_table()
    st.dataframe(
        summary.style.format({c: "${:,.2f}" for c in ["Mean", "P5", "P95", "Savings vs Baseline"]}),
        use_container_width=True,
        hide_index=True,
    )
    _plot_histogram(result)

    st.markdown("**Generated Narrative**")
    st.text(result.narrative)

    bad = result.bad_year_stats
    if bad.count > 0:
        st.markdown("**Bad Year Impact Analysis**")
        st.dataframe(bad_year_table(bad, iterations=result.iterations),
                     use_container_width=True, hide_index=True)
        st.caption(
            "Average spike " + format_percent(bad.avg_spike_pct)
            + f", 1 in {bad.frequency} year frequency."
        )

    if result.total_historical_savings_if_in_place > 0:
        st.markdown("**Historical \"What-If\" Savings**")
        st.metric("Total", format_currency(result.total_historical_savings_if_in_place))
        st.dataframe(result.historical_table(), use_container_width=True, hide_index=True)


def render():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    st.set_page_config(page_title="Cost Projection Workbench", layout="wide")
    st.title("Cost Projection Workbench")
    st.caption("Monte Carlo comparison of current cost against sequential discount programs")

    with st.sidebar:
        st.header("Company")
        company_id = st.text_input("Company ID", value=st.session_state.get("company_id", ""))
        st.session_state["company_id"] = company_id
        if st.button("Load Saved Results", disabled=not company_id):
            try:
                loaded = _store().load(company_id)
            except ScenarioStoreError as e:
                st.error(f"Load failed: {e}")
            else:
                if loaded is None:
                    st.info("No saved results for this company.")
                else:
                    st.session_state["mc_result"] = loaded
                    st.success("Loaded saved results.")

    # ---------------------------------------------------------------
    # Inputs
    # ---------------------------------------------------------------
    st.markdown("#### Renewal History & Current Cost")
    c1, c2, c3, c4 = st.columns(4)
    with c1:
        current_cost = st.number_input("Current Annual Cost ($)", min_value=0.0, value=100000.0, step=1000.0)
    with c2:
        renewal1 = st.number_input("Renewal Year 1 (%)", value=5.0, step=0.5)
    with c3:
        renewal2 = st.number_input("Renewal Year 2 (%)", value=7.0, step=0.5)
    with c4:
        renewal3 = st.number_input("Renewal Year 3 (%)", value=6.0, step=0.5)

    st.markdown("#### Historical Costs")
    allow_edit = st.checkbox("Allow editing history (otherwise derived from renewals)", value=False)
    h1, h2, h3 = st.columns(3)
    supplied = [
        h1.number_input("Historical Cost Year -1 ($)", min_value=0.0, value=0.0, step=1000.0,
                        disabled=not allow_edit),
        h2.number_input("Historical Cost Year -2 ($)", min_value=0.0, value=0.0, step=1000.0,
                        disabled=not allow_edit),
        h3.number_input("Historical Cost Year -3 ($)", min_value=0.0, value=0.0, step=1000.0,
                        disabled=not allow_edit),
    ]
    historical = derive_historical_costs(
        current_cost, [renewal1, renewal2, renewal3], locked=not allow_edit, supplied=supplied
    )
    if not allow_edit:
        st.caption("Derived: " + ", ".join(format_currency(h) for h in historical))

    st.markdown("#### Simulation Settings")
    s1, s2, s3, s4, s5 = st.columns(5)
    with s1:
        iterations = st.number_input("Iterations", min_value=1, max_value=EngineConfig().max_iterations,
                                     value=1000, step=100)
    with s2:
        volatility_pct = st.number_input("Volatility Override (%)", min_value=0.0, value=0.0, step=0.5,
                                         help="0 = derive from renewal history")
    with s3:
        bad_freq = st.number_input("Bad Year: 1 in N", min_value=1, value=5, step=1)
    with s4:
        bad_min = st.number_input("Spike Min (%)", min_value=0.0, value=30.0, step=1.0)
    with s5:
        bad_max = st.number_input("Spike Max (%)", min_value=0.0, value=40.0, step=1.0)

    st.markdown("#### Programs")
    p1, p2, p3 = st.columns(3)
    use_self = p1.checkbox("Self-Insured", value=True)
    use_rbp = p2.checkbox("Reference-Based Pricing", value=True)
    use_map = p3.checkbox("MAP Drug Savings", value=True)

    with st.expander("Discount Constants"):
        rows = st.data_editor(
            pd.DataFrame(DEFAULT_CONSTANT_ROWS),
            use_container_width=True,
            hide_index=True,
            disabled=["constant_name", "category", "description"],
            column_config={
                "constant_value": st.column_config.NumberColumn(
                    "Value (%)", min_value=0.0, max_value=100.0, step=0.5
                ),
            },
        )
        constants = DiscountConstants.from_rows(rows.to_dict("records"), percent=True)
        st.caption("Effective MAP reduction on total cost: "
                   + format_percent(constants.map_effective_discount * 100, decimals=1))

    form = {
        "currentCost": current_cost,
        "renewal1": renewal1,
        "renewal2": renewal2,
        "renewal3": renewal3,
        "iterations": iterations,
        "volatilityOverride": volatility_pct / 100.0 if volatility_pct > 0 else None,
        "historicalCost1": historical[0],
        "historicalCost2": historical[1],
        "historicalCost3": historical[2],
        "useSelfInsured": use_self,
        "useReferenceBased": use_rbp,
        "useMap": use_map,
        "badYearFrequency": bad_freq,
        "badYearIncreaseMin": bad_min,
        "badYearIncreaseMax": bad_max,
    }
    inputs = inputs_from_form(form)

    vr = validate_inputs(inputs)
    if not vr.is_valid:
        st.error("Input validation failed:\n" + vr.summary())
    elif vr.warnings:
        with st.expander(f"Input warnings ({len(vr.warnings)})"):
            st.text(vr.summary())

    run = st.button("Run Simulation", type="primary", use_container_width=True, disabled=not vr.is_valid)
    if run:
        with st.spinner(f"Simulating {inputs.resolve().iterations} years..."):
            result = run_simulation(inputs, constants=constants)
        st.session_state["mc_result"] = result
        st.success(
            f"Simulation complete. Baseline: {format_currency(result.baseline.mean)} | "
            f"Historical savings: {format_currency(result.total_historical_savings_if_in_place)}"
        )

    # ---------------------------------------------------------------
    # Results
    # ---------------------------------------------------------------
    result = st.session_state.get("mc_result")
    if result is None:
        st.info("Click 'Run Simulation' to generate projections.")
        return

    st.divider()
    st.markdown("#### Simulation Results")
    _display_result(result)

    if st.button("Save Results", disabled=not company_id):
        try:
            _store().save(company_id, result)
        except ScenarioStoreError as e:
            st.error(f"Save failed: {e}")
        else:
            st.success(f"Saved results for {company_id}.")


def main():
    """Console entry point: launch this page under the Streamlit runtime."""
    from streamlit.web import cli as stcli

    sys.argv = ["streamlit", "run", str(Path(__file__).resolve())]
    sys.exit(stcli.main())


if __name__ == "__main__":
    if st.runtime.exists():
        render()
    else:
        main()
