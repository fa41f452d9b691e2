# rideviz/core/projection.py
from __future__ import annotations

from rideviz.types import CanvasExtent, GeoBounds, Point

# NYC metro box the subway dataset falls in
NYC_BOUNDS = GeoBounds(lat_min=40.6, lat_max=40.9, lon_min=-74.2, lon_max=-73.7)


def project(
    lat: float,
    lon: float,
    extent: CanvasExtent,
    bounds: GeoBounds = NYC_BOUNDS,
) -> Point:
    """
    Map (lat, lon) to canvas pixels.

    Both axes share one scale, min(width, height), and the result is
    centered along the longer axis. North is up, so y grows as latitude
    drops. Points outside `bounds` land outside the drawn square; clipping
    is left to whoever draws.
    """
    if extent.width <= 0 or extent.height <= 0:
        raise ValueError("canvas extent must have positive width and height")

    lon_span = bounds.lon_max - bounds.lon_min
    lat_span = bounds.lat_max - bounds.lat_min
    if lon_span <= 0 or lat_span <= 0:
        raise ValueError("geo bounds must have max > min on both axes")

    scale = min(extent.width, extent.height)
    x_off = (extent.width - scale) / 2
    y_off = (extent.height - scale) / 2

    x = (lon - bounds.lon_min) / lon_span * scale + x_off
    y = (bounds.lat_max - lat) / lat_span * scale + y_off

    return Point(x=x, y=y)
