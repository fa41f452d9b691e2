# rideviz/types.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class StationSample:
    station_complex_id: str
    station_complex: str
    transit_day: str  # YYYY-MM-DD
    transit_hour: str  # "7" or "07"
    total_ridership: float
    latitude: float
    longitude: float
    borough: str = ""

    @property
    def hour(self) -> int:
        return int(self.transit_hour)


@dataclass(frozen=True)
class CanvasExtent:
    width: float
    height: float


@dataclass(frozen=True)
class GeoBounds:
    lat_min: float
    lat_max: float
    lon_min: float
    lon_max: float


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class TimeKey:
    day: str
    hour: str

    @property
    def label(self) -> str:
        return f"{self.day} {int(self.hour):02d}:00"


@dataclass(frozen=True)
class Stroke:
    color: str
    width: float = 0.0


@dataclass(frozen=True)
class VisualEncoding:
    """
    radius:     marker radius in px
    t:          normalized ridership in [0, 1]
    color:      (r, g, b) ints in [0, 255]
    brightness: alpha at the middle of the glow
    fill:       radial glow stops, [(offset, css rgba), ...]
    """
    radius: float
    t: float
    color: RGB
    brightness: float
    fill: List[Tuple[float, str]] = field(default_factory=list)
    stroke: Optional[Stroke] = None


@dataclass(frozen=True)
class Bucket:
    lower_bound: float
    upper_bound: float
    count: int
