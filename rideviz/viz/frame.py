# rideviz/viz/frame.py
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from rideviz.core.binning import LOG_BINS, bin_values
from rideviz.core.encoding import DEFAULT_BOUNDS, RidershipBounds, encode
from rideviz.core.projection import NYC_BOUNDS, project
from rideviz.core.sky import Background, background_for_hour
from rideviz.types import (
    Bucket,
    CanvasExtent,
    GeoBounds,
    StationSample,
    TimeKey,
    VisualEncoding,
)
from rideviz.viz.data.time_index import filter_samples

# hover radius, same as the largest marker
HOVER_DISTANCE = 8.0


@dataclass(frozen=True)
class RenderState:
    samples: Sequence[StationSample]
    time_key: Optional[TimeKey]
    extent: CanvasExtent
    bounds: RidershipBounds = DEFAULT_BOUNDS
    geo_bounds: GeoBounds = NYC_BOUNDS
    edges: Tuple[float, ...] = LOG_BINS
    hover: Optional[Tuple[float, float]] = None


@dataclass(frozen=True)
class Marker:
    x: float
    y: float
    encoding: VisualEncoding
    sample: StationSample


@dataclass(frozen=True)
class Tooltip:
    x: float
    y: float
    text: str


@dataclass
class Frame:
    extent: CanvasExtent
    background: Background
    markers: List[Marker] = field(default_factory=list)
    baseline: List[Bucket] = field(default_factory=list)
    current: List[Bucket] = field(default_factory=list)
    tooltip: Optional[Tooltip] = None
    time_key: Optional[TimeKey] = None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe payload consumed by the canvas page."""
        return {
            "width": self.extent.width,
            "height": self.extent.height,
            "time": self.time_key.label if self.time_key else None,
            "background": {
                "color": self.background.color,
                "stops": [list(s) for s in self.background.stops],
            },
            "markers": [
                {
                    "x": round(m.x, 2),
                    "y": round(m.y, 2),
                    "r": round(m.encoding.radius, 3),
                    "stops": [list(s) for s in m.encoding.fill],
                    "id": m.sample.station_complex_id,
                    "name": m.sample.station_complex,
                    "borough": m.sample.borough,
                    "ridership": m.sample.total_ridership,
                }
                for m in self.markers
            ],
            "baseline": [b.count for b in self.baseline],
            "current": [b.count for b in self.current],
            "tooltip": (
                {"x": self.tooltip.x, "y": self.tooltip.y, "text": self.tooltip.text}
                if self.tooltip
                else None
            ),
        }


def format_ridership(value: float) -> str:
    v = float(value)
    return f"{int(v)}" if v.is_integer() else f"{v:.2f}"


def find_station_at(
    samples: Sequence[StationSample],
    x: float,
    y: float,
    extent: CanvasExtent,
    geo_bounds: GeoBounds = NYC_BOUNDS,
    max_distance: float = HOVER_DISTANCE,
) -> Optional[StationSample]:
    """
    Hover hit test. Among stations within `max_distance` px of (x, y), the
    one drawn last wins, since it sits on top.
    """
    found = None
    for s in samples:
        p = project(s.latitude, s.longitude, extent, geo_bounds)
        if math.hypot(p.x - x, p.y - y) < max_distance:
            found = s
    return found


def tooltip_for(sample: StationSample, extent: CanvasExtent, geo_bounds: GeoBounds = NYC_BOUNDS) -> Tooltip:
    # box sits up and to the right of the marker
    p = project(sample.latitude, sample.longitude, extent, geo_bounds)
    return Tooltip(
        x=p.x + 10,
        y=p.y - 10,
        text=f"{sample.station_complex}: {format_ridership(sample.total_ridership)} riders",
    )


def render(state: RenderState) -> Frame:
    """
    One redraw: markers for the selected (day, hour), the all-time and
    current histograms, and a tooltip if the hover point hits a station.
    An empty dataset or empty hour is a valid, blank frame.
    """
    hour = int(state.time_key.hour) if state.time_key else 0
    visible = filter_samples(state.samples, state.time_key)

    markers = []
    for s in visible:
        p = project(s.latitude, s.longitude, state.extent, state.geo_bounds)
        markers.append(
            Marker(x=p.x, y=p.y, encoding=encode(s.total_ridership, state.bounds), sample=s)
        )

    tooltip = None
    if state.hover is not None:
        hit = find_station_at(visible, state.hover[0], state.hover[1], state.extent, state.geo_bounds)
        if hit is not None:
            tooltip = tooltip_for(hit, state.extent, state.geo_bounds)

    return Frame(
        extent=state.extent,
        background=background_for_hour(hour),
        markers=markers,
        baseline=bin_values((s.total_ridership for s in state.samples), state.edges),
        current=bin_values((s.total_ridership for s in visible), state.edges),
        tooltip=tooltip,
        time_key=state.time_key,
    )
