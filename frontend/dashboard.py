"""Streamlit frontend for AgriFlow.

Replaceable UI layer: all display logic lives here. Data comes from the
AgriFlow API through ``frontend.api_client``.

Run with ``streamlit run frontend/dashboard.py``.
"""

from __future__ import annotations

from typing import Any, Optional

import streamlit as st

from app.config import get_frontend_settings
from flows.errors import SchemaUnresolvableError
from flows.graph import FlowGraph
from flows.states import resolve_slug, state_for_api, to_slug
from frontend.api_client import AgriFlowClient
from frontend.calendar_view import parse_calendar_csv
from frontend.charts import build_sankey_figure

# ── Page config (must be first Streamlit call) ─────────────────────────────
st.set_page_config(
    page_title="AgriFlow",
    page_icon="🌾",
    layout="wide",
    initial_sidebar_state="expanded",
)

_PAGES = ("State Comparisons", "Crop Calendar", "Objective")


@st.cache_resource(show_spinner=False)
def _client() -> AgriFlowClient:
    return AgriFlowClient(settings=get_frontend_settings())


@st.cache_data(show_spinner=False, ttl=300)
def _load_states() -> tuple[list[str], str, Optional[str]]:
    result = _client().list_states()
    if not result.ok:
        return [], "unavailable", result.error
    return list(result.data["states"]), str(result.data.get("source", "")), result.data.get("error")


# ── Sidebar ────────────────────────────────────────────────────────────────
with st.sidebar:
    st.title("AgriFlow")
    st.caption("Indian agricultural production, state by state")
    st.divider()
    page = st.radio("Navigate", _PAGES, label_visibility="collapsed")


# ── Helper renderers ───────────────────────────────────────────────────────
def _render_metrics(metrics: dict[str, Any]) -> None:
    cols = st.columns(4)
    cols[0].metric(
        "Total Crops",
        metrics.get("totalCrops", 0),
        help=f"{metrics.get('totalRecords', 0)} records across {metrics.get('totalSeasons', 0)} seasons",
    )
    cols[1].metric("Total Districts", metrics.get("totalDistricts", 0), help="Districts in the state")
    cols[2].metric(
        "Most Common Crop",
        metrics.get("mostCommonCrop") or "—",
        help=f"{metrics.get('cropPercentage', 0)}% of all cultivation",
    )
    cols[3].metric(
        "Primary Season",
        metrics.get("primarySeason") or "—",
        help=f"{metrics.get('seasonPercentage', 0)}% of records",
    )


def _render_sankey(graph: FlowGraph) -> None:
    if not graph.links:
        st.info("No flows to display.")
        return
    st.plotly_chart(build_sankey_figure(graph), use_container_width=True)


def _render_no_data(state: str) -> None:
    st.warning(
        f"**No Data Available**  \n"
        f"There is no agricultural data available for {state} in our records."
    )


def _select_state(key: str) -> Optional[str]:
    states, source, error = _load_states()
    if error:
        st.caption(f"State list source: {source} ({error})")
    if not states:
        st.error("No states are available right now.")
        return None
    # Selected state round-trips through the URL as a slug, e.g. ?state=west-bengal.
    linked = resolve_slug(st.query_params.get("state"), states)
    index = states.index(linked) if linked is not None else 0
    state = st.selectbox("State", states, index=index, key=key)
    if state:
        st.query_params["state"] = to_slug(state)
    return state


# ── Pages ──────────────────────────────────────────────────────────────────
def _render_state_comparison() -> None:
    st.header("State Comparisons")
    state = _select_state("comparison_state")
    if not state:
        return

    if st.button("Refresh data", help="Clear the server cache for this state"):
        _client().clear_comparison_cache(state)
        _load_states.clear()
        st.rerun()

    with st.spinner(f"Loading {state}…"):
        result = _client().get_comparison(state)

    payload: dict[str, Any] = result.data or {}
    if payload.get("source") == "stale":
        st.warning("Showing cached data: the source file could not be read.")
    elif not result.ok:
        st.error(result.error)

    st.subheader(f"{state} Agricultural Production Data")
    _render_metrics(payload.get("metrics") or {})

    data = payload.get("data") or {}
    if data.get("state_name"):
        _render_sankey(FlowGraph.from_dict(payload.get("flow") or {}))
    else:
        _render_no_data(state)


def _render_crop_calendar() -> None:
    st.header("Crop Calendar")
    state = _select_state("calendar_state")
    if not state:
        return

    with st.spinner(f"Loading crop calendar for {state}…"):
        result = _client().get_crop_calendar_csv(state_for_api(state))
    if not result.ok:
        st.error(result.error)
        return

    try:
        view = parse_calendar_csv(result.data)
    except SchemaUnresolvableError as exc:
        st.error(f"Crop calendar file is missing required columns: {exc}")
        return

    st.subheader(f"{state} Crop Calendar")
    _render_metrics(view.metrics.to_wire())
    if len(view.table) == 0:
        _render_no_data(state)
        return
    _render_sankey(view.graph)

    with st.expander("Data preview"):
        st.dataframe(view.frame.head(50), use_container_width=True)
        st.caption(f"{len(view.table):,} of {len(view.frame):,} rows usable")


def _render_objective() -> None:
    st.header("Objective")
    st.markdown(
        "Behind India's agricultural landscape lies a wealth of data scattered "
        "across government repositories. This dashboard gathers it into one "
        "place and shows how production flows from each state through its "
        "seasons and crops down to individual districts."
    )


# ── Main content area ──────────────────────────────────────────────────────
if page == "State Comparisons":
    _render_state_comparison()
elif page == "Crop Calendar":
    _render_crop_calendar()
else:
    _render_objective()
