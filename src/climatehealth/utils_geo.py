"""Region geometry loading and point lookups"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

import geopandas as gpd  # type: ignore[import]
from shapely.geometry import Point  # type: ignore[import]

logger = logging.getLogger(__name__)

# ((south, west), (north, east)) as expected by Leaflet's fitBounds
Bounds = Tuple[Tuple[float, float], Tuple[float, float]]


class AssetLoadFailure(Exception):
    """The region geometry file could not be read."""
    pass


def empty_regions() -> gpd.GeoDataFrame:
    return gpd.GeoDataFrame({"name": []}, geometry=[], crs="EPSG:4326")


def load_regions(path: Union[str, Path], name_property: str = "nom") -> gpd.GeoDataFrame:
    """Read a polygon collection and normalise its name column to ``name``."""
    try:
        gdf = gpd.read_file(path)
    except Exception as e:
        raise AssetLoadFailure(f"Could not read region geometry from {path}") from e

    if name_property not in gdf.columns:
        raise AssetLoadFailure(
            f"Region file {path} has no '{name_property}' property. Columns found: {list(gdf.columns)}"
        )

    if gdf.crs is None:
        gdf = gdf.set_crs("EPSG:4326")
    elif str(gdf.crs) != "EPSG:4326":
        gdf = gdf.to_crs("EPSG:4326")

    gdf = gdf.rename(columns={name_property: "name"})[["name", "geometry"]]
    logger.info(f"Loaded {len(gdf)} regions from {path}")
    return gdf


def load_regions_or_empty(path: Union[str, Path], name_property: str = "nom") -> gpd.GeoDataFrame:
    """Like :func:`load_regions` but logs failures and returns no regions."""
    try:
        return load_regions(path, name_property)
    except AssetLoadFailure as e:
        logger.error(f"{e}: {e.__cause__ or ''}")
        return empty_regions()


def region_at(regions: gpd.GeoDataFrame, lat: float, lon: float) -> Optional[str]:
    """Return the name of the region containing the point, if any."""
    if regions.empty:
        return None
    hits = regions[regions.geometry.intersects(Point(lon, lat))]
    if hits.empty:
        return None
    return str(hits.iloc[0]["name"])


def region_bounds(regions: gpd.GeoDataFrame, name: str) -> Optional[Bounds]:
    rows = regions[regions["name"] == name]
    if rows.empty:
        return None
    minx, miny, maxx, maxy = rows.total_bounds
    return ((float(miny), float(minx)), (float(maxy), float(maxx)))
