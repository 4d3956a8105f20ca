"""
Store Dispatch - Operations Dashboard
======================================

Dashboard for running the store delivery dispatch simulation.

Features:
- KPI cards for a dispatch run
- Assignment, fleet and order-collection tables
- Traffic toggle and reproducible vehicle distances
"""

import streamlit as st
import pandas as pd
import os
import sys
from typing import Dict, Any, Optional

# Ensure store_dispatch is importable
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from store_dispatch.errors import DispatchError
from store_dispatch.simulation import Simulation, SimulationResults
from store_dispatch import config

# =============================================================================
# PAGE CONFIG
# =============================================================================

st.set_page_config(
    page_title="Store Dispatch",
    page_icon="🚚",
    layout="wide",
    initial_sidebar_state="expanded"
)

# =============================================================================
# CUSTOM STYLING
# =============================================================================

st.markdown("""
<style>
    /* KPI Cards */
    .kpi-card {
        background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
        border-radius: 16px;
        padding: 1.5rem;
        color: white;
        text-align: center;
        box-shadow: 0 10px 40px rgba(102, 126, 234, 0.3);
    }

    .kpi-card.green {
        background: linear-gradient(135deg, #11998e 0%, #38ef7d 100%);
    }

    .kpi-card.orange {
        background: linear-gradient(135deg, #f093fb 0%, #f5576c 100%);
    }

    .kpi-value {
        font-size: 2.5rem;
        font-weight: 800;
        margin: 0.5rem 0;
    }

    .kpi-label {
        font-size: 0.9rem;
        opacity: 0.9;
        text-transform: uppercase;
        letter-spacing: 1px;
    }

    /* Section headers */
    .section-header {
        font-size: 1.5rem;
        font-weight: 700;
        color: #1a1a2e;
        margin: 2rem 0 1rem 0;
        padding-bottom: 0.5rem;
        border-bottom: 3px solid #667eea;
    }

    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
</style>
""", unsafe_allow_html=True)

# =============================================================================
# DATA LOADING
# =============================================================================

DATASETS: Dict[str, str] = {
    "Downtown (10 orders)": os.path.join(config.DATA_DIR, "downtown"),
    "No Freezer Fleet": os.path.join(config.DATA_DIR, "no_freezer"),
}


def get_available_datasets() -> Dict[str, str]:
    """Return only datasets that exist on disk."""
    return {name: path for name, path in DATASETS.items() if os.path.isdir(path)}


def run_simulation(data_dir: str, traffic: bool, seed: Optional[int]) -> SimulationResults:
    """Load a scenario and run it. Loaded fresh each time, vehicles carry state."""
    stores, customers, vehicles, orders = Simulation.load_data(data_dir)
    sim = Simulation(stores, customers, vehicles, orders, increased_traffic=traffic, seed=seed)
    return sim.run(verbose=False)


# =============================================================================
# SIDEBAR
# =============================================================================

def render_sidebar() -> Optional[Dict[str, Any]]:
    """Render the sidebar controls. Returns run parameters once the user clicks run."""
    st.sidebar.markdown("## ⚙️ Configuration")

    available = get_available_datasets()
    if not available:
        st.sidebar.error("No datasets found in data/")
        return None

    dataset_name = st.sidebar.selectbox("Dataset", list(available.keys()))
    traffic = st.sidebar.checkbox(
        "Increased traffic",
        value=False,
        help="Frozen orders always need a freezer vehicle while traffic is increased"
    )
    use_seed = st.sidebar.checkbox("Fixed vehicle distances", value=True)
    seed = st.sidebar.number_input("Seed", min_value=0, value=42, step=1) if use_seed else None

    st.sidebar.markdown("---")
    if st.sidebar.button("🚚 Dispatch", use_container_width=True):
        params = {
            "data_dir": available[dataset_name],
            "traffic": traffic,
            "seed": int(seed) if seed is not None else None,
        }
        st.session_state["params"] = params
        st.session_state.pop("results", None)
        return params

    return st.session_state.get("params")


# =============================================================================
# KPI DISPLAY
# =============================================================================

def render_kpi_row(results: SimulationResults) -> None:
    """Render the top KPI cards."""
    col1, col2, col3, col4 = st.columns(4)

    cards = [
        (col1, "", "Orders Delivered", f"{results.orders_delivered}/{results.total_orders}"),
        (col2, "green", "Vehicles Used", f"{results.vehicles_used}/{results.total_vehicles}"),
        (col3, "orange", "Stranded Orders", str(len(results.stranded_orders))),
        (col4, "", "Avg Distance", f"{results.avg_distance_per_order:.1f}"),
    ]
    for col, style, label, value in cards:
        with col:
            st.markdown(f"""
            <div class="kpi-card {style}">
                <div class="kpi-label">{label}</div>
                <div class="kpi-value">{value}</div>
            </div>
            """, unsafe_allow_html=True)


# =============================================================================
# TABLES
# =============================================================================

def render_tables(results: SimulationResults) -> None:
    """Render the assignment and fleet tables."""
    st.markdown('<div class="section-header">📦 Assignments</div>', unsafe_allow_html=True)
    if results.assignments:
        df = pd.DataFrame(results.assignments)
        df = df.rename(columns={
            "round": "Round",
            "order_number": "Order",
            "store": "Store",
            "customer": "Customer",
            "vin": "Vehicle",
            "vehicle_type": "Type",
            "distance": "Distance",
            "keep_frozen": "Frozen",
            "products": "Products",
        })
        st.dataframe(df, use_container_width=True, hide_index=True)
    else:
        st.warning("No orders were assigned.")

    if results.stranded_orders:
        stranded = ", ".join(f"#{n}" for n in results.stranded_orders)
        st.warning(f"No eligible vehicle for orders {stranded}")

    st.markdown('<div class="section-header">🚚 Fleet</div>', unsafe_allow_html=True)
    fleet_df = pd.DataFrame(results.vehicle_summary)
    if not fleet_df.empty:
        st.dataframe(fleet_df, use_container_width=True, hide_index=True)

    st.markdown('<div class="section-header">📊 Summary</div>', unsafe_allow_html=True)
    summary_df = pd.DataFrame(
        [{"Metric": k, "Value": str(v)} for k, v in results.to_dict().items()]
    )
    st.dataframe(summary_df, use_container_width=True, hide_index=True)


def render_explainer() -> None:
    """Render the dispatch rule explainer."""
    with st.expander("How Dispatch Works", expanded=False):
        st.markdown(f"""
        For each waiting order the dispatcher scans the fleet in registration order
        and picks the **available** vehicle with the smallest total distance
        (customer to store plus vehicle to store). Ties go to the vehicle registered first.

        **Frozen orders** travelling more than {config.FROZEN_DISTANCE_THRESHOLD} units,
        or any frozen order under **increased traffic**, only go to vehicles with a freezer.

        Vehicles deliver their load at the end of each round and become available again.
        """)


# =============================================================================
# MAIN APPLICATION
# =============================================================================

def main():
    """Main application entry point."""
    st.markdown("""
    <div style="text-align: center; padding: 1rem 0 2rem 0;">
        <h1 style="font-size: 3rem; font-weight: 800;">Store Dispatch</h1>
        <p style="font-size: 1.2rem; color: #666;">Greedy nearest-vehicle delivery dispatch</p>
    </div>
    """, unsafe_allow_html=True)

    params = render_sidebar()
    if params is None:
        st.info("👈 Pick a dataset in the sidebar and click **Dispatch**.")
        render_explainer()
        return

    if "results" in st.session_state:
        results = st.session_state["results"]
    else:
        try:
            with st.spinner("Dispatching..."):
                results = run_simulation(params["data_dir"], params["traffic"], params["seed"])
        except (FileNotFoundError, ValueError, DispatchError) as e:
            st.error(f"Simulation failed: {e}")
            return
        st.session_state["results"] = results

    st.success(f"Simulation complete in {results.rounds} round(s)")
    render_kpi_row(results)
    st.markdown("<br>", unsafe_allow_html=True)
    render_tables(results)
    render_explainer()


if __name__ == "__main__":
    main()
