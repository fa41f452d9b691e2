import html

import folium

from rideviz.core.encoding import DEFAULT_BOUNDS, encode, rgb_to_hex
from rideviz.viz.frame import format_ridership


def add_station_markers(m, samples, time_key, bounds=DEFAULT_BOUNDS):
    """
    Draw one CircleMarker per station sample, sized and colored by the
    ridership encoding. `samples` should already be filtered to time_key.
    """
    for s in samples:
        enc = encode(s.total_ridership, bounds)
        color = rgb_to_hex(enc.color)

        popup = [
            f"<b>{html.escape(s.station_complex)}</b>",
            f"Station ID: {html.escape(s.station_complex_id)}",
            f"Ridership: {format_ridership(s.total_ridership)}",
        ]
        if s.borough:
            popup.insert(2, f"Borough: {html.escape(s.borough)}")
        if time_key is not None:
            popup.insert(2, f"Time: {time_key.label}")

        folium.CircleMarker(
            location=[float(s.latitude), float(s.longitude)],
            radius=enc.radius,
            fill=True,
            fill_color=color,
            fill_opacity=round(enc.brightness, 3),
            color=color,
            weight=enc.stroke.width if enc.stroke else 0,
            popup="<br>".join(popup),
        ).add_to(m)
