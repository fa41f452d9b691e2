# rideviz/viz/widgets/time_bar.py
import html
import json

import folium

from rideviz.viz.data.time_index import next_index, ridership_by_time

ANIMATION_INTERVAL_MS = 1000


def build_time_bar(samples, time_keys, i_current, *, annotations=None, interval_ms=ANIMATION_INTERVAL_MS):
    """
    Time bar:
      - one bar per (day, hour), height ~ total ridership in that hour
      - click a bar to jump there, play/stop steps through at a fixed interval
      - annotations: {index: label} drawn as ticks above the bars

    Navigation goes through window.rvSetTime when the page defines it
    (canvas page redraws in place); otherwise the page reloads with ?i=.
    """
    totals = ridership_by_time(samples, time_keys)
    max_total = max(totals, default=0)
    steps = [next_index(i, len(time_keys)) for i in range(len(time_keys))]

    bars = []
    for i, (key, total) in enumerate(zip(time_keys, totals)):
        if max_total > 0:
            height = int((total / max_total) * 72)
        else:
            height = 0

        bars.append(
            f"""
            <div class="timebar-item"
                 onclick="setTime({i})"
                 data-label="{html.escape(key.label)}"
                 data-idx="{i}">
              <div class="timebar-bar"
                   style="height:{height}px; opacity:{'1.0' if i == i_current else '0.55'};">
              </div>
            </div>
            """
        )

    ticks_html = []
    for idx, label in sorted((annotations or {}).items()):
        if not 0 <= int(idx) < len(time_keys):
            continue
        ticks_html.append(
            f"""
            <div class="note-tick" data-idx="{int(idx)}" title="{html.escape(label)}">
              <span>{html.escape(label)}</span>
            </div>
            """
        )

    return folium.Element(
        f"""
<style>
#timebar {{
  position: absolute;
  left: 0;
  right: 0;
  bottom: 14px;
  height: 110px;
  z-index: 1200;
  pointer-events: auto;
  background: linear-gradient(
    to top,
    rgba(0,0,0,0.85),
    rgba(0,0,0,0.45),
    rgba(0,0,0,0)
  );
}}

#timebar-play {{
  position: absolute;
  left: 16px;
  bottom: 30px;
  width: 36px;
  height: 36px;
  border: none;
  border-radius: 6px;
  background: #f2f2f2;
  cursor: pointer;
  font-size: 14px;
}}

#timebar-scroll {{
  position: absolute;
  bottom: 14px;
  left: 64px;
  right: 0;
  padding: 0 16px;
  overflow-x: auto;
  white-space: nowrap;
  cursor: grab;
}}

.timebar-item {{
  display: inline-flex;
  align-items: flex-end;
  width: 10px;
  height: 84px;
  margin-right: 6px;
  cursor: pointer;
  position: relative;
}}

.timebar-bar {{
  width: 100%;
  background: #FF000A;
  border-radius: 2px;
}}

#timebar-label {{
  position: absolute;
  bottom: 92px;
  transform: translateX(-50%);
  background: rgba(231,231,231,0.9);
  padding: 4px 10px;
  border-radius: 999px;
  font-size: 12px;
  font-weight: 600;
  display: none;
}}

#note-ticks-layer {{
  position: absolute;
  left: 80px;
  right: 16px;
  bottom: 14px;
  height: 84px;
  pointer-events: none;
  z-index: 1250;
}}

.note-tick {{
  position: absolute;
  bottom: 0px;
  width: 2px;
  height: 96px;
  background: #d0d0d0;
}}

.note-tick span {{
  position: absolute;
  bottom: 98px;
  transform: translateX(-50%);
  font-size: 11px;
  color: #d0d0d0;
  white-space: nowrap;
}}
</style>

<div id="timebar">
  <div id="timebar-label"></div>

  <button id="timebar-play" onclick="toggleAnimation()" title="play / stop">&#9654;</button>

  <div id="timebar-scroll"
       onmousemove="timebarMove(event)"
       onmouseleave="timebarHide()">
    {''.join(bars)}
  </div>

  <div id="note-ticks-layer">
    {''.join(ticks_html)}
  </div>
</div>

<script>
let rvIndex = {int(i_current)};
const rvCount = {len(time_keys)};
const rvNext = {json.dumps(steps)};
let rvTimer = null;

function setTime(i) {{
  rvIndex = i;
  document.querySelectorAll(".timebar-item").forEach((it) => {{
    const bar = it.querySelector(".timebar-bar");
    if (bar) bar.style.opacity = (Number(it.dataset.idx) === i) ? "1.0" : "0.55";
  }});

  if (typeof window.rvSetTime === "function") {{
    window.rvSetTime(i);
    return;
  }}

  const url = new URL(window.location.href);
  url.searchParams.set("i", String(i));
  if (rvTimer) url.searchParams.set("play", "1");
  window.location.href = url.toString();
}}

function toggleAnimation() {{
  const btn = document.getElementById("timebar-play");
  if (rvTimer) {{
    clearInterval(rvTimer);
    rvTimer = null;
    btn.innerHTML = "&#9654;";
    return;
  }}
  if (rvCount <= 0) return;
  btn.innerHTML = "&#9632;";
  rvTimer = setInterval(() => setTime(rvNext[rvIndex]), {int(interval_ms)});
}}

function timebarMove(evt) {{
  const label = document.getElementById("timebar-label");
  const item = evt.target.closest(".timebar-item");
  if (!item) {{
    label.style.display = "none";
    return;
  }}
  const rect = item.getBoundingClientRect();
  label.textContent = item.dataset.label;
  label.style.left = (rect.left + rect.width / 2) + "px";
  label.style.display = "block";
}}

function timebarHide() {{
  document.getElementById("timebar-label").style.display = "none";
}}

function layoutNoteTicks() {{
  const scroll = document.getElementById("timebar-scroll");
  const layer = document.getElementById("note-ticks-layer");
  if (!scroll || !layer) return;

  const itemByIdx = {{}};
  scroll.querySelectorAll(".timebar-item").forEach((it) => {{
    itemByIdx[it.dataset.idx] = it;
  }});

  layer.querySelectorAll(".note-tick").forEach((tick) => {{
    const it = itemByIdx[tick.dataset.idx];
    if (!it) return;

    const r1 = scroll.getBoundingClientRect();
    const r2 = it.getBoundingClientRect();

    const centerX = (r2.left - r1.left) + (r2.width / 2);
    tick.style.left = (centerX - (tick.offsetWidth / 2)) + "px";
  }});
}}

document.addEventListener("DOMContentLoaded", () => {{
  layoutNoteTicks();

  const scroll = document.getElementById("timebar-scroll");
  if (scroll) {{
    scroll.addEventListener("scroll", () => {{
      layoutNoteTicks();
    }});
  }}

  let resizeTimer = null;
  window.addEventListener("resize", () => {{
    clearTimeout(resizeTimer);
    resizeTimer = setTimeout(layoutNoteTicks, 150);
  }});

  if (new URL(window.location.href).searchParams.get("play") === "1") {{
    toggleAnimation();
  }}
}});
</script>
"""
    )
