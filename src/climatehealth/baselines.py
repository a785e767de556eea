"""Static per-region baseline statistics.

Energy intensity is expressed in GWh and carbon intensity in gCO2/kWh.  The
table is read once from the ``baselines`` section of the configuration and
never changes afterwards; names that are not in the table fall back to the
``default`` entry.
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from .config import Config, load_config

logger = logging.getLogger(__name__)

DEFAULT_KEY = "default"


class Baseline(BaseModel):
    """Reference energy and carbon intensity for one region."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    energy_intensity: float = Field(alias="energy")
    carbon_intensity: float = Field(alias="carbon")


class BaselineTable:
    """Lookup of region name to :class:`Baseline` with a default fallback."""

    def __init__(self, entries: Mapping[str, Mapping[str, float]]):
        if DEFAULT_KEY not in entries:
            raise ValueError(f"Baseline table requires a '{DEFAULT_KEY}' entry")
        self._entries: Dict[str, Baseline] = {
            name: Baseline.model_validate(values) for name, values in entries.items()
        }

    @classmethod
    def from_config(cls, cfg: Optional[Config] = None) -> "BaselineTable":
        cfg = cfg or load_config()
        return cls(cfg.baselines)

    @property
    def default(self) -> Baseline:
        return self._entries[DEFAULT_KEY]

    def get(self, region: str) -> Baseline:
        """Return the baseline for ``region``, or the default entry."""
        baseline = self._entries.get(region)
        if baseline is None:
            logger.debug(f"No baseline for {region!r}; using default")
            return self.default
        return baseline

    def __contains__(self, region: object) -> bool:
        return region in self._entries

    def __len__(self) -> int:
        return len(self._entries)
