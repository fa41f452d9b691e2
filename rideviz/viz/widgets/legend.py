# rideviz/viz/widgets/legend.py
import folium

from rideviz.core.encoding import DEFAULT_BOUNDS, encode, rgb_to_hex
from rideviz.viz.frame import format_ridership


def build_legend_widget(*, bounds=DEFAULT_BOUNDS):
    """
    Returns a Folium Element that injects a floating legend with the two
    anchor colors and the cutoffs they saturate at.
    """
    low = encode(bounds.lower_cutoff, bounds)
    high = encode(bounds.upper_cutoff, bounds)
    lo_txt = format_ridership(bounds.lower_cutoff)
    hi_txt = format_ridership(bounds.upper_cutoff)

    return folium.Element(
        f"""
<style>
#map-legend {{
  position: absolute;
  bottom: 140px;
  left: 16px;
  background: rgba(20,18,51,0.85);
  color: #eee;
  padding: 8px 12px;
  border-radius: 10px;
  font-size: 12px;
  font-family: sans-serif;
  z-index: 1200;
}}
.legend-dot {{
  border-radius: 50%;
  display: inline-block;
  margin-right: 6px;
  vertical-align: middle;
}}
</style>

<script>
document.addEventListener("DOMContentLoaded", () => {{
  // canvas page ships its own wrapper; the tiled map needs one
  let wrap = document.getElementById("map-wrap");
  if (!wrap) {{
    const mapEl = document.querySelector(".leaflet-container");
    if (!mapEl) return;
    wrap = document.createElement("div");
    wrap.id = "map-wrap";
    wrap.style.position = "relative";
    wrap.style.width = "100%";
    mapEl.parentNode.insertBefore(wrap, mapEl);
    wrap.appendChild(mapEl);
  }}

  const existing = document.getElementById("map-legend");
  if (existing) existing.remove();

  const legend = document.createElement("div");
  legend.id = "map-legend";
  legend.innerHTML = `
    <div><span class="legend-dot" style="width:{2 * low.radius:g}px;height:{2 * low.radius:g}px;background:{rgb_to_hex(low.color)}"></span> &le; {lo_txt} riders/h</div>
    <div><span class="legend-dot" style="width:{2 * high.radius:g}px;height:{2 * high.radius:g}px;background:{rgb_to_hex(high.color)}"></span> &ge; {hi_txt} riders/h</div>
    <div style="margin-top:4px;color:#aaa">log scale in between</div>
  `;
  wrap.appendChild(legend);
}});
</script>
"""
    )
