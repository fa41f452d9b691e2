# rideviz/core/encoding.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np

from rideviz.types import RGB, Stroke, VisualEncoding

MIN_RADIUS = 4.0
MAX_RADIUS = 8.0

LOW_ANCHOR = "#E7E7E7"   # [231, 231, 231]
HIGH_ANCHOR = "#FF000A"  # [255, 0, 10]

# glow alpha: 1.0 at the center, `brightness` halfway, near 0 at the rim
BASE_BRIGHTNESS = 0.8
BRIGHTNESS_GAIN = 0.2
RIM_ALPHA_FACTOR = 0.01


@dataclass(frozen=True)
class RidershipBounds:
    lower_cutoff: float
    upper_cutoff: float

    def __post_init__(self):
        if not self.lower_cutoff > 0:
            raise ValueError("lower_cutoff must be > 0 for log scaling")
        if self.upper_cutoff < self.lower_cutoff:
            raise ValueError("upper_cutoff must be >= lower_cutoff")


# the two threshold lines drawn on the histogram
DEFAULT_BOUNDS = RidershipBounds(lower_cutoff=19.95, upper_cutoff=1122.02)


def hex_to_rgb(color: str) -> RGB:
    c = color.lstrip("#")
    if len(c) != 6:
        raise ValueError(f"expected #RRGGBB, got {color!r}")
    return (int(c[0:2], 16), int(c[2:4], 16), int(c[4:6], 16))


def rgb_to_hex(rgb: RGB) -> str:
    return "#{:02X}{:02X}{:02X}".format(*rgb)


def rgba(rgb: RGB, alpha: float) -> str:
    r, g, b = rgb
    return f"rgba({r}, {g}, {b}, {alpha:g})"


def _clamp01(t: float) -> float:
    return max(0.0, min(1.0, t))


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def interpolate_color(a, b, t: float) -> RGB:
    """
    Channel-wise linear blend between two colors (hex strings or rgb
    tuples). Channels are rounded and clamped to [0, 255].
    """
    ca = hex_to_rgb(a) if isinstance(a, str) else tuple(a)
    cb = hex_to_rgb(b) if isinstance(b, str) else tuple(b)
    t = _clamp01(t)
    return tuple(
        int(max(0, min(255, round(_lerp(x, y, t)))))
        for x, y in zip(ca, cb)
    )


def normalize(ridership: float, bounds: RidershipBounds = DEFAULT_BOUNDS) -> float:
    """
    Log-normalized position of `ridership` between the two cutoffs, in [0, 1].
    """
    if math.isnan(ridership):
        raise ValueError("ridership is NaN")
    r = max(0.0, float(ridership))

    lo, hi = bounds.lower_cutoff, bounds.upper_cutoff
    if hi == lo or r <= lo:
        return 0.0
    if r >= hi:
        return 1.0

    t = (math.log(r) - math.log(lo)) / (math.log(hi) - math.log(lo))
    return _clamp01(t)


def glow_stops(rgb: RGB, brightness: float) -> list[Tuple[float, str]]:
    return [
        (0.0, rgba(rgb, 1.0)),
        (0.5, rgba(rgb, round(brightness, 4))),
        (1.0, rgba(rgb, round(brightness * RIM_ALPHA_FACTOR, 6))),
    ]


def encode(
    ridership: float,
    bounds: RidershipBounds = DEFAULT_BOUNDS,
    *,
    min_radius: float = MIN_RADIUS,
    max_radius: float = MAX_RADIUS,
    low_color: str = LOW_ANCHOR,
    high_color: str = HIGH_ANCHOR,
    stroke_width: float = 0.0,
) -> VisualEncoding:
    """
    Logarithmic two-cutoff encoding.

      ridership <= lower_cutoff  -> min radius, low anchor
      ridership >= upper_cutoff  -> max radius, high anchor
      in between                 -> lerp on t = log-position between cutoffs

    Negative ridership counts as 0. NaN raises ValueError.
    """
    t = normalize(ridership, bounds)

    radius = _lerp(min_radius, max_radius, t)
    color = interpolate_color(low_color, high_color, t)
    brightness = BASE_BRIGHTNESS + BRIGHTNESS_GAIN * t

    return VisualEncoding(
        radius=radius,
        t=t,
        color=color,
        brightness=brightness,
        fill=glow_stops(color, brightness),
        stroke=Stroke(color=rgb_to_hex(color), width=stroke_width),
    )


def bounds_from_values(
    values: Iterable[float],
    lower_q: float = 0.25,
    upper_q: float = 0.95,
    *,
    fallback: RidershipBounds = DEFAULT_BOUNDS,
) -> RidershipBounds:
    """
    Data-derived cutoffs from quantiles of the positive ridership values.
    Falls back to `fallback` when there is nothing positive to look at.
    """
    if not 0.0 <= lower_q <= upper_q <= 1.0:
        raise ValueError("need 0 <= lower_q <= upper_q <= 1")

    arr = np.asarray(list(values), dtype=float)
    arr = arr[np.isfinite(arr) & (arr > 0)]
    if arr.size == 0:
        return fallback

    lo = float(np.quantile(arr, lower_q))
    hi = float(np.quantile(arr, upper_q))
    return RidershipBounds(lower_cutoff=lo, upper_cutoff=max(lo, hi))
