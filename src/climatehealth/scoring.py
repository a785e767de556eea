"""Climate health score and the indicators derived from it.

Every function here is pure.  The score starts at 100 and loses points for
fine particulate matter, nitrogen dioxide, the region's baseline carbon
intensity and temperature stress, then is clamped to [0, 100].
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional

from .ingest.open_meteo_client import AirReading, WeatherReading

NO_SCORE_COLOR = "#374151"
GOOD_COLOR = "#22c55e"
FAIR_COLOR = "#fbbf24"
POOR_COLOR = "#f97316"
CRITICAL_COLOR = "#ef4444"

WARM_COLOR = "#f87171"
COOL_COLOR = "#60a5fa"

# thresholds below which a pollutant/condition costs nothing
PM25_THRESHOLD = 5.0
NO2_THRESHOLD = 10.0
CARBON_THRESHOLD = 50.0
COMFORT_TEMP_C = 20.0
TEMP_STRESS_THRESHOLD = 10.0

ANOMALY_REFERENCE_C = 15.0
CRITICAL_SCORE = 55


def _round_half_up(value: float, places: int = 0) -> Decimal:
    quantum = Decimal(1).scaleb(-places)
    return Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)


def compute_health_score(weather: WeatherReading, air: AirReading, baseline_carbon: float) -> int:
    """Return the climate health score in [0, 100]."""
    score = 100.0

    if air.pm2_5 > PM25_THRESHOLD:
        score -= (air.pm2_5 - PM25_THRESHOLD) * 1.5
    if air.nitrogen_dioxide > NO2_THRESHOLD:
        score -= (air.nitrogen_dioxide - NO2_THRESHOLD) * 0.5
    if baseline_carbon > CARBON_THRESHOLD:
        score -= (baseline_carbon - CARBON_THRESHOLD) * 0.5

    temp_stress = abs(weather.temperature_c - COMFORT_TEMP_C)
    if temp_stress > TEMP_STRESS_THRESHOLD:
        score -= (temp_stress - TEMP_STRESS_THRESHOLD) * 2

    score = max(0.0, min(100.0, score))
    return int(_round_half_up(score))


def color_for_score(score: Optional[int]) -> str:
    if score is None:
        return NO_SCORE_COLOR
    if score >= 80:
        return GOOD_COLOR
    if score >= 60:
        return FAIR_COLOR
    if score >= 40:
        return POOR_COLOR
    return CRITICAL_COLOR


def air_quality_label(pm2_5: float) -> str:
    if pm2_5 < 10:
        return "Good"
    if pm2_5 < 25:
        return "Moderate"
    if pm2_5 < 50:
        return "Degraded"
    return "Poor"


class Trend(Enum):
    """Direction badge shown next to the score."""

    IMPROVING = ("Improving", "↗", "trend-impr")
    STABLE = ("Stable", "→", "trend-stable")
    WORSENING = ("Worsening", "↘", "trend-degrade")

    def __init__(self, label: str, arrow: str, css_class: str):
        self.label = label
        self.arrow = arrow
        self.css_class = css_class

    @property
    def badge(self) -> str:
        return f"{self.arrow} {self.label}"


def trend_from_score(score: int) -> Trend:
    if score < 50:
        return Trend.WORSENING
    if score > 80:
        return Trend.IMPROVING
    return Trend.STABLE


def temperature_anomaly(temperature_c: float) -> float:
    """Deviation from a fixed 15 °C reference, rounded to one decimal."""
    return float(_round_half_up(temperature_c - ANOMALY_REFERENCE_C, 1))


def anomaly_color(anomaly: float) -> str:
    return WARM_COLOR if anomaly > 0 else COOL_COLOR


def projected_critical_year(score: int) -> Optional[int]:
    """Year shown in the critical-threshold warning, for scores below 55.

    This is a presentational heuristic (``2030 + score / 5``) and not a
    scientific projection.
    """
    if score >= CRITICAL_SCORE:
        return None
    return math.floor(2030 + score / 5)


def explanation_for_score(score: int) -> str:
    if score >= 75:
        return "This region currently shows good climate resilience."
    if score >= 50:
        return "Area under watch: moderate environmental stress, monitor."
    return "Warning: critical climate indicators (pollution/weather)."
