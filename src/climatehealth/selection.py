"""Region selection state and the dashboard's application state.

At most one region is selected at a time.  Clicking a region selects it
(replacing any previous selection), fits the map to it and issues a
:class:`FetchTicket` for the click coordinates; the panel only becomes
visible once a result for that ticket has been presented.  Closing the
panel returns to the overview.  Each click and close advances a generation
counter so that a result fetched for an earlier selection can be
recognised and dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple, Union

from .utils_geo import Bounds

if TYPE_CHECKING:
    from .viz.panel import PanelView

logger = logging.getLogger(__name__)

DEFAULT_CENTER: Tuple[float, float] = (46.603354, 1.888334)
DEFAULT_ZOOM = 6

DEFAULT_STYLE: Dict[str, Any] = {
    "fillColor": "#334155",
    "weight": 1,
    "opacity": 1,
    "color": "rgba(255,255,255,0.3)",
    "dashArray": "",
    "fillOpacity": 0.4,
}
ACTIVE_STYLE: Dict[str, Any] = {
    "fillColor": "rgba(255, 255, 255, 0.1)",
    "weight": 3,
    "opacity": 1,
    "color": "#22c55e",
    "dashArray": "",
    "fillOpacity": 0.1,
}
HOVER_STYLE: Dict[str, Any] = {
    "weight": 2,
    "color": "#e2e8f0",
    "fillOpacity": 0.6,
}


@dataclass(frozen=True)
class NoneSelected:
    pass


@dataclass(frozen=True)
class Selected:
    region: str


SelectionState = Union[NoneSelected, Selected]


@dataclass(frozen=True)
class Viewport:
    """Either a fixed centre/zoom or a bounding box to fit."""

    center: Optional[Tuple[float, float]] = None
    zoom: Optional[int] = None
    bounds: Optional[Bounds] = None
    padding: Tuple[int, int] = (50, 50)


@dataclass(frozen=True)
class FetchTicket:
    region: str
    lat: float
    lon: float
    generation: int


class RegionSelection:
    def __init__(self, center: Tuple[float, float] = DEFAULT_CENTER, zoom: int = DEFAULT_ZOOM,
                 padding: Tuple[int, int] = (50, 50)):
        self.overview = Viewport(center=tuple(center), zoom=zoom)
        self.padding = tuple(padding)
        self.state: SelectionState = NoneSelected()
        self.viewport: Viewport = self.overview
        self.panel_visible = False
        self.generation = 0

    @property
    def selected(self) -> Optional[str]:
        return self.state.region if isinstance(self.state, Selected) else None

    def click(self, region: str, lat: float, lon: float, bounds: Optional[Bounds] = None) -> FetchTicket:
        """Select ``region`` and return the ticket for its data fetch."""
        previous = self.selected
        self.generation += 1
        self.state = Selected(region)
        if bounds is not None:
            self.viewport = Viewport(bounds=bounds, padding=self.padding)
        logger.info(f"Selected {region!r} (was {previous!r}) at ({lat:.4f}, {lon:.4f})")
        return FetchTicket(region=region, lat=lat, lon=lon, generation=self.generation)

    def close(self) -> None:
        self.generation += 1
        self.state = NoneSelected()
        self.viewport = self.overview
        self.panel_visible = False
        logger.info("Selection cleared")

    def show_panel(self) -> None:
        self.panel_visible = True

    def is_current(self, ticket: FetchTicket) -> bool:
        return ticket.generation == self.generation and ticket.region == self.selected

    def style_for(self, region: str) -> Dict[str, Any]:
        return dict(ACTIVE_STYLE if region == self.selected else DEFAULT_STYLE)

    def hover_style(self, region: str) -> Optional[Dict[str, Any]]:
        """Highlight for a hovered region; the selected region keeps its style."""
        if region == self.selected:
            return None
        return dict(HOVER_STYLE)


@dataclass
class DashboardState:
    """Everything the dashboard remembers between reruns."""

    selection: RegionSelection = field(default_factory=RegionSelection)
    panel: Optional["PanelView"] = None
    error: Optional[str] = None
    last_click: Optional[Tuple[float, float]] = None
    map_epoch: int = 0

    @property
    def map_key(self) -> str:
        """Widget key for the map; a new key remounts it without a stored click."""
        return f"region_map_{self.map_epoch}"

    def is_new_click(self, lat: float, lon: float) -> bool:
        return self.last_click != (lat, lon)

    def close(self) -> None:
        self.selection.close()
        self.error = None
        self.last_click = None
        self.map_epoch += 1
