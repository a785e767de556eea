"""Side-panel view model.

:func:`build_panel` turns a region's snapshot and baseline into a flat,
immutable :class:`PanelView` holding every display value; the dashboard only
has to render it.  :func:`present` and :func:`present_failure` apply a fetch
outcome to the :class:`~climatehealth.selection.DashboardState`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..baselines import Baseline
from ..ingest.open_meteo_client import ClimateSnapshot
from ..scoring import (
    Trend,
    air_quality_label,
    anomaly_color,
    color_for_score,
    compute_health_score,
    explanation_for_score,
    projected_critical_year,
    temperature_anomaly,
    trend_from_score,
)
from ..selection import DashboardState, FetchTicket

logger = logging.getLogger(__name__)

FETCH_ERROR_MESSAGE = "Could not retrieve live weather data."


def _num(value: float) -> str:
    """Format a reading without a trailing ``.0``."""
    return f"{value:g}"


@dataclass(frozen=True)
class PanelView:
    region_name: str
    score: int
    score_color: str
    explanation: str
    temperature_text: str
    anomaly: float
    anomaly_text: str
    anomaly_color: str
    precipitation_text: str
    air_label: str
    air_detail: str
    energy_text: str
    carbon_text: str
    trend: Trend
    progress_width: str
    progress_color: str
    critical_year: Optional[int]
    visible: bool = True

    @property
    def critical_visible(self) -> bool:
        return self.critical_year is not None


def build_panel(region: str, snapshot: ClimateSnapshot, baseline: Baseline) -> PanelView:
    weather, air = snapshot.weather, snapshot.air
    score = compute_health_score(weather, air, baseline.carbon_intensity)
    color = color_for_score(score)
    anomaly = temperature_anomaly(weather.temperature_c)

    return PanelView(
        region_name=region,
        score=score,
        score_color=color,
        explanation=explanation_for_score(score),
        temperature_text=f"{_num(weather.temperature_c)}°C",
        anomaly=anomaly,
        anomaly_text=f"{'+' if anomaly > 0 else ''}{anomaly:.1f}°C deviation (est.)",
        anomaly_color=anomaly_color(anomaly),
        precipitation_text=f"{_num(weather.precipitation_mm)} mm",
        air_label=air_quality_label(air.pm2_5),
        air_detail=f"PM2.5: {_num(air.pm2_5)} µg/m³",
        energy_text=f"{_num(baseline.energy_intensity)} GWh",
        carbon_text=f"{_num(baseline.carbon_intensity)} gCO2/kWh",
        trend=trend_from_score(score),
        progress_width=f"{score}%",
        progress_color=color,
        critical_year=projected_critical_year(score),
    )


def present(state: DashboardState, ticket: FetchTicket, snapshot: ClimateSnapshot, baseline: Baseline) -> bool:
    """Show the result for ``ticket`` unless a newer selection superseded it."""
    if not state.selection.is_current(ticket):
        logger.debug(f"Discarding stale result for {ticket.region!r} (generation {ticket.generation})")
        return False
    state.panel = build_panel(ticket.region, snapshot, baseline)
    state.selection.show_panel()
    state.error = None
    return True


def present_failure(state: DashboardState, ticket: FetchTicket, message: str = FETCH_ERROR_MESSAGE) -> bool:
    """Record the user notification; the previously shown panel is kept."""
    if not state.selection.is_current(ticket):
        logger.debug(f"Discarding stale failure for {ticket.region!r}")
        return False
    state.error = message
    return True
