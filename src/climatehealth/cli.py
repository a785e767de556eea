"""The command-line interface for this project"""

from __future__ import annotations

from typing import Optional

import typer
from pydantic import ValidationError

from climatehealth.baselines import BaselineTable
from climatehealth.config import load_config
from climatehealth.ingest.open_meteo_client import (
    AirReading,
    ClimateSnapshot,
    DataFetchFailure,
    OpenMeteoClient,
    WeatherReading,
)
from climatehealth.logging_setup import setup_logging
from climatehealth.paths import resolve
from climatehealth.utils_geo import load_regions_or_empty, region_at
from climatehealth.viz.panel import FETCH_ERROR_MESSAGE, PanelView, build_panel


app = typer.Typer(add_completion=False, help="Climate health dashboard command-line interface")


def _echo_panel(view: PanelView) -> None:
    typer.secho(f"{view.region_name}: {view.score}/100", bold=True)
    typer.echo(f"  {view.explanation}")
    typer.echo(f"  Trend:         {view.trend.badge}")
    typer.echo(f"  Temperature:   {view.temperature_text} ({view.anomaly_text})")
    typer.echo(f"  Precipitation: {view.precipitation_text}")
    typer.echo(f"  Air quality:   {view.air_label} ({view.air_detail})")
    typer.echo(f"  Energy:        {view.energy_text}")
    typer.echo(f"  Carbon:        {view.carbon_text}")
    if view.critical_visible:
        typer.secho(f"  Critical thresholds around {view.critical_year}", fg=typer.colors.RED)


@app.command("score")
def score(
    temperature: float = typer.Option(..., help="Current temperature (°C)"),
    pm25: float = typer.Option(..., "--pm25", help="PM2.5 concentration (µg/m³)"),
    no2: float = typer.Option(0.0, "--no2", help="Nitrogen dioxide concentration (µg/m³)"),
    precipitation: float = typer.Option(0.0, help="Precipitation (mm)"),
    pm10: float = typer.Option(0.0, "--pm10", help="PM10 concentration (µg/m³)"),
    ozone: float = typer.Option(0.0, help="Ozone concentration (µg/m³)"),
    region: str = typer.Option("default", help="Region name used for the baseline lookup"),
) -> None:
    """Score explicit readings without calling the live APIs."""
    baselines = BaselineTable.from_config()
    try:
        snapshot = ClimateSnapshot(
            weather=WeatherReading(temperature_c=temperature, precipitation_mm=precipitation),
            air=AirReading(pm10=pm10, pm2_5=pm25, nitrogen_dioxide=no2, ozone=ozone),
        )
    except ValidationError as e:
        problems = "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors())
        typer.secho(f"Invalid readings: {problems}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    _echo_panel(build_panel(region, snapshot, baselines.get(region)))


@app.command("snapshot")
def snapshot(
    lat: float = typer.Option(..., help="Latitude of the query point"),
    lon: float = typer.Option(..., help="Longitude of the query point"),
    region: Optional[str] = typer.Option(
        None,
        help="Region name for the baseline.  Looked up from the region file when omitted.",
    ),
) -> None:
    """Fetch live conditions for a point and print the panel values.

    When no region is given, the point is matched against the configured
    region geometry; points outside every region use the default baseline.
    """
    cfg = load_config()
    setup_logging(cfg.project.get("log_level", "INFO"))
    if region is None:
        regions = load_regions_or_empty(
            resolve(cfg.data.get("regions_path", "data/external/regions.geojson")),
            cfg.data.get("regions_name_property", "nom"),
        )
        region = region_at(regions, lat, lon) or "default"

    with OpenMeteoClient.from_config(cfg) as client:
        try:
            data = client.fetch_climate_data(lat, lon)
        except DataFetchFailure as e:
            typer.secho(f"{cfg.viz.get('fetch_error_message', FETCH_ERROR_MESSAGE)} ({e})", fg=typer.colors.RED)
            raise typer.Exit(code=1)

    _echo_panel(build_panel(region, data, BaselineTable.from_config(cfg).get(region)))


if __name__ == "__main__":
    app()
