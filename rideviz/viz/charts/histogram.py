# rideviz/viz/charts/histogram.py
import json
import math

import folium

from rideviz.core.binning import LOG_BINS, bucket_centers, bucket_index
from rideviz.core.encoding import DEFAULT_BOUNDS, encode, rgb_to_hex, rgba


def _bin_labels(edges):
    def fmt(v):
        return f"{v:g}"
    return [f"{fmt(edges[i])}–{fmt(edges[i + 1])}" for i in range(len(edges) - 1)]


def cutoff_positions(edges, bounds):
    """
    Where each cutoff sits on the bar axis, in edge units: edge k is at k,
    so 2.5 is halfway (on the log scale) through bin 2. Cutoffs past either
    end are pinned to the outer edge.
    """
    n = len(edges) - 1
    out = []
    for cut in (bounds.lower_cutoff, bounds.upper_cutoff):
        if cut <= edges[0]:
            out.append(0.0)
            continue
        if cut >= edges[-1]:
            out.append(float(n))
            continue
        i = bucket_index(cut, edges)
        lo, hi = edges[i], edges[i + 1]
        if lo > 0:
            frac = (math.log(cut) - math.log(lo)) / (math.log(hi) - math.log(lo))
        else:
            frac = (cut - lo) / (hi - lo)
        out.append(round(i + frac, 6))
    return out


def legend_circles(edges=LOG_BINS, bounds=DEFAULT_BOUNDS):
    """
    One marker swatch per bin, encoded at the bin's geometric center, so
    the histogram colors match what the map draws.
    """
    circles = []
    for c in bucket_centers(edges):
        enc = encode(c, bounds)
        circles.append({"center": c, "radius": enc.radius, "color": rgb_to_hex(enc.color)})
    return circles


def build_histogram(baseline, current, *, edges=LOG_BINS, bounds=DEFAULT_BOUNDS):
    """
    Ridership distribution chart:
      - outlined bars: all samples (baseline)
      - filled bars:   the selected hour, colored per bin
      - dashed lines:  the encoder cutoffs
      - circles below: per-bin marker swatches

    window.rvUpdateHistogram(counts) swaps in a new hour without a reload.
    """
    labels = _bin_labels(edges)
    circles = legend_circles(edges, bounds)
    fills = [rgba(encode(c["center"], bounds).color, 0.9) for c in circles]
    cut_positions = cutoff_positions(edges, bounds)

    circles_html = "".join(
        f"""
        <div class="hist-swatch">
          <span style="width:{2 * c['radius']:g}px;height:{2 * c['radius']:g}px;
                       background:radial-gradient(circle, {c['color']} 0%, {c['color']} 50%, rgba(0,0,0,0) 100%);
                       border:1px solid {c['color']};"></span>
        </div>
        """
        for c in circles
    )

    return folium.Element(
        f"""
<style>
#hist-wrap {{
  max-width: 1100px;
  margin: 32px auto 60px auto;
  padding: 0 24px;
  font-family: sans-serif;
  color: #eee;
}}
#hist-wrap h2 {{
  font-size: 16px;
  font-weight: 800;
  margin-bottom: 12px;
}}
.hist-box {{
  height: 320px;
  position: relative;
}}
.hist-box canvas {{
  width: 100% !important;
  height: 100% !important;
}}
#hist-swatches {{
  display: flex;
  margin: 6px 0 0 60px;
}}
.hist-swatch {{
  flex: 1;
  display: flex;
  justify-content: center;
}}
.hist-swatch span {{
  display: inline-block;
  border-radius: 50%;
}}
</style>

<div id="hist-wrap">
  <h2>Distribution of Station Ridership (per station per hour)</h2>
  <div class="hist-box"><canvas id="rv_hist"></canvas></div>
  <div id="hist-swatches">{circles_html}</div>
</div>

<script src="https://cdn.jsdelivr.net/npm/chart.js"></script>
<script>
(function() {{
  const labels = {json.dumps(labels)};
  const baselineCounts = {json.dumps([b.count for b in baseline])};
  const cutPositions = {json.dumps(cut_positions)};

  // percent of stations per bin, so all-time and single-hour bars compare
  function shares(counts) {{
    const total = counts.reduce((a, b) => a + b, 0);
    return counts.map((c) => total > 0 ? 100 * c / total : 0);
  }}

  const cutoffLines = {{
    id: "cutoffLines",
    afterDatasetsDraw(chart) {{
      const x = chart.scales.x;
      const area = chart.chartArea;
      const ctx = chart.ctx;
      // bar k is centered on k, so edge position p sits at p - 0.5
      const step = labels.length > 1
        ? x.getPixelForValue(1) - x.getPixelForValue(0)
        : area.right - area.left;
      ctx.save();
      ctx.strokeStyle = "white";
      ctx.setLineDash([4, 4]);
      cutPositions.forEach((p) => {{
        const px = x.getPixelForValue(0) + (p - 0.5) * step;
        ctx.beginPath();
        ctx.moveTo(px, area.top);
        ctx.lineTo(px, area.bottom);
        ctx.stroke();
      }});
      ctx.restore();
    }}
  }};

  const chart = new Chart(document.getElementById("rv_hist"), {{
    type: "bar",
    data: {{
      labels,
      datasets: [
        {{
          label: "All hours",
          data: shares(baselineCounts),
          counts: baselineCounts,
          backgroundColor: "rgba(0,0,0,0)",
          borderColor: "white",
          borderWidth: 1,
          grouped: false,
          order: 2
        }},
        {{
          label: "This hour",
          data: shares({json.dumps([b.count for b in current])}),
          counts: {json.dumps([b.count for b in current])},
          backgroundColor: {json.dumps(fills)},
          borderWidth: 0,
          grouped: false,
          barPercentage: 0.6,
          order: 1
        }}
      ]
    }},
    options: {{
      responsive: true,
      maintainAspectRatio: false,
      animation: false,
      plugins: {{
        legend: {{ labels: {{ color: "#eee" }} }},
        tooltip: {{
          callbacks: {{
            label: (item) => `${{item.dataset.label}}: ${{item.dataset.counts[item.dataIndex]}} stations (${{item.raw.toFixed(1)}}%)`
          }}
        }}
      }},
      scales: {{
        y: {{
          beginAtZero: true,
          ticks: {{ color: "#eee" }},
          title: {{ display: true, text: "% of stations", color: "#eee" }}
        }},
        x: {{
          ticks: {{ color: "#eee" }},
          title: {{ display: true, text: "Riders per station per hour (log bins)", color: "#eee" }}
        }}
      }}
    }},
    plugins: [cutoffLines]
  }});

  window.rvUpdateHistogram = function(counts) {{
    const ds = chart.data.datasets[1];
    ds.counts = counts;
    ds.data = shares(counts);
    chart.update();
  }};
}})();
</script>
"""
    )
