import streamlit as st
from streamlit_folium import st_folium

from climatehealth.baselines import BaselineTable
from climatehealth.config import load_config
from climatehealth.dashboard import handle_click
from climatehealth.ingest.open_meteo_client import OpenMeteoClient
from climatehealth.logging_setup import setup_logging
from climatehealth.paths import resolve
from climatehealth.selection import DEFAULT_CENTER, DEFAULT_ZOOM, DashboardState, RegionSelection
from climatehealth.utils_geo import load_regions_or_empty
from climatehealth.viz.maps import build_region_map
from climatehealth.viz.panel import FETCH_ERROR_MESSAGE, PanelView

# --- CONFIG ---
cfg = load_config()
setup_logging(cfg.project.get("log_level", "INFO"))
PAGE_TITLE = cfg.project.get("page_title", "Climate Health Dashboard")

st.set_page_config(page_title=PAGE_TITLE, layout="wide")

# --- LOADERS ---
@st.cache_resource
def load_baselines():
    return BaselineTable.from_config(cfg)

@st.cache_resource
def load_region_layer():
    path = resolve(cfg.data.get("regions_path", "data/external/regions.geojson"))
    return load_regions_or_empty(path, cfg.data.get("regions_name_property", "nom"))

@st.cache_resource
def load_client():
    return OpenMeteoClient.from_config(cfg)

def get_state() -> DashboardState:
    """One DashboardState per browser session."""
    if "dashboard" not in st.session_state:
        selection = RegionSelection(
            center=tuple(cfg.map.get("center", DEFAULT_CENTER)),
            zoom=int(cfg.map.get("zoom", DEFAULT_ZOOM)),
            padding=tuple(cfg.map.get("fit_padding", (50, 50))),
        )
        st.session_state["dashboard"] = DashboardState(selection=selection)
    return st.session_state["dashboard"]

def render_panel(view: PanelView) -> None:
    st.subheader(view.region_name)
    st.markdown(
        f"<div style='font-size:3rem;font-weight:700;color:{view.score_color}'>{view.score}</div>",
        unsafe_allow_html=True,
    )
    st.markdown(
        f"<div style='background:#1f2937;border-radius:4px;height:8px'>"
        f"<div style='width:{view.progress_width};background:{view.progress_color};"
        f"height:8px;border-radius:4px'></div></div>",
        unsafe_allow_html=True,
    )
    st.caption(f"{view.trend.badge}")
    st.write(view.explanation)

    col1, col2 = st.columns(2)
    col1.metric("Temperature", view.temperature_text)
    col1.markdown(
        f"<span style='color:{view.anomaly_color}'>{view.anomaly_text}</span>",
        unsafe_allow_html=True,
    )
    col2.metric("Precipitation", view.precipitation_text)
    col1.metric("Air quality", view.air_label)
    col1.caption(view.air_detail)
    col2.metric("Energy", view.energy_text)
    col2.metric("Carbon intensity", view.carbon_text)

    if view.critical_visible:
        st.warning(f"At this rate, critical thresholds could be reached around {view.critical_year}.")

# --- MAIN APP ---
st.title(PAGE_TITLE)

state = get_state()
regions = load_region_layer()
if regions.empty:
    st.info("No regions loaded. Run `python scripts/download_regions.py` first.")

col_map, col_panel = st.columns([3, 1], gap="medium")

with col_panel:
    if state.error:
        st.error(state.error)
    if state.selection.panel_visible and state.panel is not None:
        render_panel(state.panel)
    else:
        st.write("Click a region on the map to see its climate health score.")
    if state.selection.selected is not None:
        if st.button("Close", key="close_panel"):
            state.close()
            st.rerun()

with col_map:
    folium_map = build_region_map(regions, state.selection, cfg)
    map_data = st_folium(
        folium_map,
        key=state.map_key,
        use_container_width=True,
        height=620,
        returned_objects=["last_clicked"],
    )

if map_data and map_data.get("last_clicked"):
    click = map_data["last_clicked"]
    lat, lon = float(click["lat"]), float(click["lng"])
    if state.is_new_click(lat, lon):
        with st.spinner("Fetching live conditions..."):
            ticket = handle_click(
                state,
                regions,
                load_baselines(),
                load_client(),
                lat,
                lon,
                cfg.viz.get("fetch_error_message", FETCH_ERROR_MESSAGE),
            )
        if ticket is not None:
            st.rerun()
