# rideviz/core/sky.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from rideviz.core.encoding import interpolate_color, rgb_to_hex

PINK = "#C63CBC"
ORANGE = "#FF4500"
DARK_BLUE = "#141233"
BLACK = "#000000"

# height of the horizon glow, in px from the bottom edge
HORIZON_PX = 100


@dataclass(frozen=True)
class Background:
    """
    Either a solid color (stops empty) or a vertical linear gradient that
    runs from the bottom edge up HORIZON_PX pixels.
    """
    color: str
    stops: List[Tuple[float, str]] = field(default_factory=list)

    @property
    def is_gradient(self) -> bool:
        return bool(self.stops)


def _horizon(bottom: str, top: str) -> Background:
    return Background(color=top, stops=[(0.0, bottom), (1.0, top)])


def background_for_hour(hour: int) -> Background:
    """
    Sky behind the stations: dawn glow 6-7h, dark blue through the day,
    dusk glow 18-19h, black at night.
    """
    h = int(hour)

    if 5 < h <= 7:
        ratio = (h - 5) / 2
        return _horizon(
            rgb_to_hex(interpolate_color(PINK, ORANGE, ratio)),
            rgb_to_hex(interpolate_color(BLACK, DARK_BLUE, ratio)),
        )
    if 7 < h < 18:
        return Background(color=DARK_BLUE)
    if 18 <= h < 20:
        ratio = (h - 18) / 2
        return _horizon(
            rgb_to_hex(interpolate_color(ORANGE, PINK, ratio)),
            rgb_to_hex(interpolate_color(DARK_BLUE, BLACK, ratio)),
        )
    return Background(color=BLACK)
