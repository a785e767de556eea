"""Build the interactive region map."""

from __future__ import annotations

from typing import Any, Dict, Optional

import folium  # type: ignore[import]
import geopandas as gpd  # type: ignore[import]

from ..config import Config
from ..selection import RegionSelection


# --- helpers -----------------------------------------------------------------

def _region_name(feature: Dict[str, Any]) -> str:
    return str(feature.get("properties", {}).get("name", ""))


def _style_function(selection: RegionSelection):
    def style(feature: Dict[str, Any]) -> Dict[str, Any]:
        return selection.style_for(_region_name(feature))
    return style


def _highlight_function(selection: RegionSelection):
    # folium needs a style for every feature; the selected one keeps its own
    def highlight(feature: Dict[str, Any]) -> Dict[str, Any]:
        name = _region_name(feature)
        return selection.hover_style(name) or selection.style_for(name)
    return highlight


# --- main --------------------------------------------------------------------

def build_region_map(
    regions: gpd.GeoDataFrame,
    selection: RegionSelection,
    cfg: Optional[Config] = None,
) -> folium.Map:
    """Return a folium map with the region layer styled for ``selection``.

    The viewport follows ``selection.viewport``: the overview centre and zoom
    when nothing is selected, otherwise the selected region's bounds.
    """
    map_cfg = cfg.map if cfg is not None else {}
    overview = selection.overview

    m = folium.Map(
        location=list(overview.center),
        zoom_start=overview.zoom,
        tiles=map_cfg.get("tiles", "CartoDB dark_matter"),
        zoom_control=False,
        scroll_wheel_zoom=True,
        double_click_zoom=False,
    )

    if not regions.empty:
        folium.GeoJson(
            data=regions.to_json(),
            name="Regions",
            style_function=_style_function(selection),
            highlight_function=_highlight_function(selection),
            tooltip=folium.GeoJsonTooltip(
                fields=["name"],
                labels=False,
                sticky=False,
            ),
        ).add_to(m)

    viewport = selection.viewport
    if viewport.bounds is not None:
        south_west, north_east = viewport.bounds
        m.fit_bounds([list(south_west), list(north_east)], padding=viewport.padding)
    return m
