import json

import geopandas as gpd
import pytest
from shapely.geometry import box

from climatehealth.utils_geo import (
    AssetLoadFailure,
    load_regions,
    load_regions_or_empty,
    region_at,
    region_bounds,
)


def _regions():
    return gpd.GeoDataFrame(
        {"name": ["West", "East"]},
        geometry=[box(0.0, 40.0, 5.0, 45.0), box(5.0, 40.0, 10.0, 45.0)],
        crs="EPSG:4326",
    )


def _write_geojson(path, name_property="nom"):
    features = [
        {
            "type": "Feature",
            "properties": {name_property: "West", "code": "01"},
            "geometry": box(0.0, 40.0, 5.0, 45.0).__geo_interface__,
        }
    ]
    path.write_text(json.dumps({"type": "FeatureCollection", "features": features}), encoding="utf-8")
    return path


def test_region_at_uses_click_point():
    regions = _regions()

    assert region_at(regions, 42.0, 2.0) == "West"
    assert region_at(regions, 42.0, 7.5) == "East"
    assert region_at(regions, 50.0, 2.0) is None


def test_region_bounds_are_south_west_north_east():
    assert region_bounds(_regions(), "East") == ((40.0, 5.0), (45.0, 10.0))
    assert region_bounds(_regions(), "Nowhere") is None


def test_load_regions_normalises_name(tmp_path):
    gdf = load_regions(_write_geojson(tmp_path / "regions.geojson"), "nom")

    assert list(gdf.columns) == ["name", "geometry"]
    assert gdf.iloc[0]["name"] == "West"
    assert region_at(gdf, 41.0, 1.0) == "West"


def test_load_regions_missing_name_property(tmp_path):
    path = _write_geojson(tmp_path / "regions.geojson", name_property="label")

    with pytest.raises(AssetLoadFailure):
        load_regions(path, "nom")


def test_missing_file_degrades_to_no_regions(tmp_path, caplog):
    with caplog.at_level("ERROR"):
        gdf = load_regions_or_empty(tmp_path / "missing.geojson")

    assert gdf.empty
    assert region_at(gdf, 42.0, 2.0) is None
    assert "Could not read region geometry" in caplog.text
