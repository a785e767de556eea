"""Map click handling for the dashboard.

Has no Streamlit dependency; ``src/app.py`` wraps :func:`handle_click` in a
spinner and reruns the page afterwards.
"""

from __future__ import annotations

import logging
from typing import Optional

import geopandas as gpd  # type: ignore[import]

from .baselines import BaselineTable
from .ingest.open_meteo_client import DataFetchFailure, OpenMeteoClient
from .selection import DashboardState, FetchTicket
from .utils_geo import region_at, region_bounds
from .viz.panel import FETCH_ERROR_MESSAGE, present, present_failure

logger = logging.getLogger(__name__)


def handle_click(
    state: DashboardState,
    regions: gpd.GeoDataFrame,
    baselines: BaselineTable,
    client: OpenMeteoClient,
    lat: float,
    lon: float,
    error_message: str = FETCH_ERROR_MESSAGE,
) -> Optional[FetchTicket]:
    """Select the region under the click and show its live panel.

    Returns the fetch ticket, or None when the click hit no region.
    """
    state.last_click = (lat, lon)
    region = region_at(regions, lat, lon)
    if region is None:
        logger.debug(f"Click at ({lat:.4f}, {lon:.4f}) is outside every region")
        return None

    ticket = state.selection.click(region, lat, lon, region_bounds(regions, region))
    try:
        snapshot = client.fetch_climate_data(ticket.lat, ticket.lon)
    except DataFetchFailure as e:
        logger.warning(f"Fetch failed for {region!r}: {e}")
        present_failure(state, ticket, error_message)
        return ticket
    present(state, ticket, snapshot, baselines.get(region))
    return ticket
