# rideviz/viz/canvas/render.py
import html
import json

import folium

from rideviz.core.binning import LOG_BINS
from rideviz.core.encoding import DEFAULT_BOUNDS
from rideviz.viz.charts.histogram import build_histogram
from rideviz.viz.widgets.legend import build_legend_widget
from rideviz.viz.widgets.time_bar import build_time_bar


def render_canvas_document(
    *,
    frame,
    samples,
    time_keys,
    i_cur,
    title=None,
    bounds=DEFAULT_BOUNDS,
    edges=LOG_BINS,
    annotations=None,
):
    """
    Full canvas page: the station canvas, time bar, legend and histogram.

    The Python side already projected and encoded every marker (frame);
    the script below only replays those descriptors onto a 2D context,
    and asks /frame and /hover for new ones when time, size or pointer
    change.
    """
    fig = folium.Figure()
    root = fig.html

    root.add_child(
        folium.Element(
            f"""
<style>
html, body {{
  margin: 0;
  background: #000;
  color: #eee;
  font-family: sans-serif;
}}
#map-wrap {{
  position: relative;
  width: 100%;
  height: 75vh;
  min-height: 520px;
}}
#map-wrap canvas {{
  position: absolute;
  top: 0;
  left: 0;
}}
#map-title {{
  position: absolute;
  top: 12px;
  left: 50%;
  transform: translateX(-50%);
  background: rgba(255,255,255,0.95);
  color: #111;
  padding: 6px 16px;
  border-radius: 999px;
  font-size: 14px;
  font-weight: 600;
  z-index: 1300;
}}
#map-time {{
  position: absolute;
  top: 12px;
  right: 16px;
  font-size: 14px;
  z-index: 1300;
}}
</style>

<div id="map-wrap">
  {f'<div id="map-title">{html.escape(title)}</div>' if title else ''}
  <div id="map-time">{html.escape(frame.time_key.label) if frame.time_key else ''}</div>
  <canvas id="rv_canvas" width="{int(frame.extent.width)}" height="{int(frame.extent.height)}"></canvas>
</div>
"""
        )
    )

    root.add_child(build_legend_widget(bounds=bounds))
    root.add_child(build_time_bar(samples, time_keys, i_cur, annotations=annotations))
    root.add_child(build_histogram(frame.baseline, frame.current, edges=edges, bounds=bounds))

    root.add_child(
        folium.Element(
            f"""
<script>
(function() {{
  let frame = {json.dumps(frame.to_dict())};
  let hovered = null;
  const canvas = document.getElementById("rv_canvas");
  const ctx = canvas.getContext("2d");

  function paintBackground(f) {{
    const bg = f.background;
    if (bg.stops.length) {{
      const g = ctx.createLinearGradient(0, f.height, 0, f.height - 100);
      bg.stops.forEach(([off, c]) => g.addColorStop(off, c));
      ctx.fillStyle = bg.color;
      ctx.fillRect(0, 0, f.width, f.height);
      ctx.fillStyle = g;
      ctx.fillRect(0, f.height - 100, f.width, 100);
    }} else {{
      ctx.fillStyle = bg.color;
      ctx.fillRect(0, 0, f.width, f.height);
    }}
  }}

  function draw() {{
    const f = frame;
    canvas.width = f.width;
    canvas.height = f.height;
    ctx.clearRect(0, 0, f.width, f.height);
    paintBackground(f);

    f.markers.forEach((m) => {{
      const g = ctx.createRadialGradient(m.x, m.y, 0, m.x, m.y, m.r);
      m.stops.forEach(([off, c]) => g.addColorStop(off, c));
      ctx.beginPath();
      ctx.arc(m.x, m.y, m.r, 0, 2 * Math.PI, false);
      ctx.fillStyle = g;
      ctx.fill();
    }});

    const tip = hovered || f.tooltip;
    if (tip) {{
      ctx.font = "12px sans-serif";
      const w = ctx.measureText(tip.text).width + 10;
      ctx.fillStyle = "white";
      ctx.fillRect(tip.x, tip.y, w, 30);
      ctx.fillStyle = "black";
      ctx.fillText(tip.text, tip.x + 5, tip.y + 19);
    }}
  }}

  function canvasSize() {{
    const wrap = document.getElementById("map-wrap");
    return {{ w: Math.max(1, wrap.clientWidth), h: Math.max(1, wrap.clientHeight) }};
  }}

  function load(i) {{
    const s = canvasSize();
    return fetch(`/frame?i=${{i}}&w=${{s.w}}&h=${{s.h}}`)
      .then((r) => r.json())
      .then((f) => {{
        frame = f;
        hovered = null;
        document.getElementById("map-time").textContent = f.time || "";
        if (window.rvUpdateHistogram) window.rvUpdateHistogram(f.current);
        draw();
      }});
  }}

  window.rvSetTime = function(i) {{
    const url = new URL(window.location.href);
    url.searchParams.set("i", String(i));
    window.history.replaceState(null, "", url.toString());
    load(i);
  }};

  let hoverTimer = null;
  canvas.addEventListener("mousemove", (evt) => {{
    const rect = canvas.getBoundingClientRect();
    const x = evt.clientX - rect.left;
    const y = evt.clientY - rect.top;
    clearTimeout(hoverTimer);
    hoverTimer = setTimeout(() => {{
      fetch(`/hover?i=${{rvIndex}}&x=${{x}}&y=${{y}}&w=${{frame.width}}&h=${{frame.height}}`)
        .then((r) => r.json())
        .then((tip) => {{
          hovered = tip && tip.text ? tip : null;
          draw();
        }});
    }}, 40);
  }});

  let resizeTimer = null;
  window.addEventListener("resize", () => {{
    clearTimeout(resizeTimer);
    resizeTimer = setTimeout(() => load(rvIndex), 150);
  }});

  document.addEventListener("DOMContentLoaded", () => {{
    const timebar = document.getElementById("timebar");
    if (timebar) document.getElementById("map-wrap").appendChild(timebar);
    load(rvIndex);
  }});
  draw();
}})();
</script>
"""
        )
    )

    return fig.render()
