"""
Client for the Open-Meteo forecast and air-quality endpoints.
Issues both requests for a coordinate concurrently and joins them into a
single snapshot; a failure of either request fails the whole fetch.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Optional

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from requests.adapters import HTTPAdapter

from ..config import Config, load_config

logger = logging.getLogger(__name__)

WEATHER_URL = "https://api.open-meteo.com/v1/forecast"
AIR_QUALITY_URL = "https://air-quality-api.open-meteo.com/v1/air-quality"
DEFAULT_TIMEOUT_S = 10.0

WEATHER_FIELDS = "temperature_2m,precipitation"
AIR_FIELDS = "pm10,pm2_5,nitrogen_dioxide,ozone"


class DataFetchFailure(Exception):
    """Either live request failed or returned an unusable payload."""
    pass


class _Reading(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False, strict=True)


class WeatherReading(_Reading):
    temperature_c: float = Field(alias="temperature_2m")
    precipitation_mm: float = Field(alias="precipitation")


class AirReading(_Reading):
    """Current pollutant concentrations in µg/m³."""

    pm10: float
    pm2_5: float
    nitrogen_dioxide: float
    ozone: float


class ClimateSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    weather: WeatherReading
    air: AirReading


def _current_block(payload: Any, source: str) -> Dict[str, Any]:
    if not isinstance(payload, dict) or not isinstance(payload.get("current"), dict):
        raise DataFetchFailure(f"{source} response has no 'current' block")
    return payload["current"]


def parse_weather(payload: Any) -> WeatherReading:
    try:
        return WeatherReading.model_validate(_current_block(payload, "Weather"))
    except ValidationError as e:
        raise DataFetchFailure(f"Malformed weather payload: {e.error_count()} error(s)") from e


def parse_air(payload: Any) -> AirReading:
    try:
        return AirReading.model_validate(_current_block(payload, "Air quality"))
    except ValidationError as e:
        raise DataFetchFailure(f"Malformed air quality payload: {e.error_count()} error(s)") from e


class OpenMeteoClient:
    """
    Fetches current conditions for a coordinate.  No retries: a stale or
    partial reading is worse than a visible error on a live dashboard.
    """
    def __init__(
        self,
        weather_url: str = WEATHER_URL,
        air_quality_url: str = AIR_QUALITY_URL,
        timeout: float = DEFAULT_TIMEOUT_S,
        session: Optional[requests.Session] = None,
    ):
        self.weather_url = weather_url
        self.air_quality_url = air_quality_url
        self.timeout = timeout
        self.session = session or requests.Session()

        adapter = HTTPAdapter(pool_connections=2, pool_maxsize=2, max_retries=0)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

        self.session.headers.update({
            "User-Agent": "ClimateHealthDashboard/1.0",
            "Accept": "application/json",
        })

    @classmethod
    def from_config(cls, cfg: Optional[Config] = None, **kwargs: Any) -> "OpenMeteoClient":
        cfg = cfg or load_config()
        return cls(
            weather_url=cfg.api.get("weather_url", WEATHER_URL),
            air_quality_url=cfg.api.get("air_quality_url", AIR_QUALITY_URL),
            timeout=float(cfg.api.get("timeout_s", DEFAULT_TIMEOUT_S)),
            **kwargs,
        )

    def _get_json(self, url: str, params: Dict[str, Any]) -> Any:
        try:
            logger.debug(f"Fetching {url} {params}")
            resp = self.session.get(url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except ValueError as e:
            logger.error(f"Non-JSON response from {url}")
            raise DataFetchFailure("Response was not JSON") from e
        except requests.RequestException as e:
            logger.error(f"Network error fetching {url}: {e}")
            raise DataFetchFailure("Connection failed") from e

    def fetch_weather(self, lat: float, lon: float) -> WeatherReading:
        params = {"latitude": lat, "longitude": lon, "current": WEATHER_FIELDS, "timezone": "auto"}
        return parse_weather(self._get_json(self.weather_url, params))

    def fetch_air(self, lat: float, lon: float) -> AirReading:
        params = {"latitude": lat, "longitude": lon, "current": AIR_FIELDS, "timezone": "auto"}
        return parse_air(self._get_json(self.air_quality_url, params))

    def fetch_climate_data(self, lat: float, lon: float) -> ClimateSnapshot:
        """Fetch weather and air quality concurrently and join them.

        Both requests are in flight before either is awaited.  Raises
        :class:`DataFetchFailure` if either one fails.
        """
        with ThreadPoolExecutor(max_workers=2) as pool:
            weather_future = pool.submit(self.fetch_weather, lat, lon)
            air_future = pool.submit(self.fetch_air, lat, lon)
            # .result() re-raises the worker's exception; the pool still
            # waits for the other request before the block exits
            weather = weather_future.result()
            air = air_future.result()
        logger.info(f"Fetched snapshot for ({lat:.4f}, {lon:.4f})")
        return ClimateSnapshot(weather=weather, air=air)

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def fetch_climate_data(lat: float, lon: float, client: Optional[OpenMeteoClient] = None) -> ClimateSnapshot:
    """Module-level convenience wrapper around :meth:`OpenMeteoClient.fetch_climate_data`."""
    if client is not None:
        return client.fetch_climate_data(lat, lon)
    with OpenMeteoClient.from_config() as own_client:
        return own_client.fetch_climate_data(lat, lon)
