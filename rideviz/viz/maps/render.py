# rideviz/viz/maps/render.py
import json

import folium

from rideviz.core.encoding import DEFAULT_BOUNDS
from rideviz.core.projection import NYC_BOUNDS
from rideviz.viz.data.time_index import filter_samples
from rideviz.viz.overlays.stations import add_station_markers
from rideviz.viz.widgets.legend import build_legend_widget
from rideviz.viz.widgets.time_bar import build_time_bar

CENTER_LAT = (NYC_BOUNDS.lat_min + NYC_BOUNDS.lat_max) / 2
CENTER_LON = (NYC_BOUNDS.lon_min + NYC_BOUNDS.lon_max) / 2


def render_map_document(
    *,
    samples,
    time_keys,
    i_cur,
    title: str | None = None,
    bounds=DEFAULT_BOUNDS,
    annotations=None,
):
    """
    Tiled-map variant of the viewer: same encoding, drawn as Leaflet
    circle markers on a dark basemap.
    """
    time_key = time_keys[i_cur] if time_keys else None

    m = folium.Map(
        location=[CENTER_LAT, CENTER_LON],
        zoom_start=11,
        tiles="cartodbdark_matter",
        prefer_canvas=True,
    )

    # stations
    add_station_markers(m, filter_samples(samples, time_key), time_key, bounds)

    # timebar (widget)
    if time_keys:
        m.get_root().html.add_child(
            build_time_bar(samples, time_keys, i_cur, annotations=annotations)
        )

    # legend (widget); its script also builds #map-wrap around the map
    m.get_root().html.add_child(build_legend_widget(bounds=bounds))

    m.get_root().html.add_child(_map_overlay(_title_text(title, time_key)))

    return m.get_root().render()


def _title_text(title, time_key):
    parts = [p for p in (title, time_key.label if time_key else None) if p]
    return " · ".join(parts)


def _map_overlay(title_text):
    # json.dumps quotes the title for JS; "</" must not close the script tag
    title_js = json.dumps(title_text).replace("</", "<\\/")
    return folium.Element(
        f"""
<style>
#map-wrap .leaflet-container {{ height: 75vh !important; min-height: 520px; }}
#map-title {{
  position: absolute; top: 12px; left: 50%; transform: translateX(-50%);
  background: rgba(255,255,255,0.95); padding: 6px 16px; border-radius: 999px;
  font: 600 14px sans-serif; z-index: 1300;
}}
</style>
<script>
document.addEventListener("DOMContentLoaded", () => {{
  const wrap = document.getElementById("map-wrap");
  if (!wrap) return;
  const titleText = {title_js};
  if (titleText) {{
    const t = document.createElement("div");
    t.id = "map-title";
    t.textContent = titleText;
    wrap.appendChild(t);
  }}
  const timebar = document.getElementById("timebar");
  if (timebar) wrap.appendChild(timebar);
}});
</script>
"""
    )
