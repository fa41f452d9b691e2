# rideviz/viz/app/single.py
from __future__ import annotations

from pathlib import Path

from colorama import Fore, Style
from flask import Flask, jsonify, request

from rideviz.core.binning import LOG_BINS
from rideviz.core.encoding import DEFAULT_BOUNDS, bounds_from_values
from rideviz.core.projection import NYC_BOUNDS
from rideviz.types import CanvasExtent
from rideviz.util.samples import load_samples
from rideviz.viz.canvas.render import render_canvas_document
from rideviz.viz.data.time_index import day_hour_combinations, filter_samples, snap_index
from rideviz.viz.frame import RenderState, find_station_at, format_ridership, render, tooltip_for
from rideviz.viz.maps.render import render_map_document

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
MAX_SIDE = 4000


def build_app(
    samples,
    *,
    title: str | None = None,
    bounds=DEFAULT_BOUNDS,
    cutoffs: str = "fixed",
    annotations=None,
):
    """
    Flask app for one dataset.

      /       canvas viewer
      /map    folium viewer
      /frame  JSON frame for ?i=&w=&h=
      /hover  JSON tooltip for ?i=&x=&y=&w=&h=

    cutoffs="data" swaps the fixed cutoffs for quantiles of the dataset.
    """
    if cutoffs == "data":
        bounds = bounds_from_values(s.total_ridership for s in samples)
    elif cutoffs != "fixed":
        raise ValueError("cutoffs must be 'fixed' or 'data'")

    time_keys = day_hour_combinations(samples)

    app = Flask(__name__)

    def _resolve_index():
        return snap_index(request.args.get("i", 0, type=int), len(time_keys))

    def _resolve_extent():
        w = request.args.get("w", DEFAULT_WIDTH, type=float)
        h = request.args.get("h", DEFAULT_HEIGHT, type=float)
        w = max(1.0, min(float(w), MAX_SIDE))
        h = max(1.0, min(float(h), MAX_SIDE))
        return CanvasExtent(width=w, height=h)

    def _state(i_cur, extent, hover=None):
        return RenderState(
            samples=samples,
            time_key=time_keys[i_cur] if time_keys else None,
            extent=extent,
            bounds=bounds,
            geo_bounds=NYC_BOUNDS,
            edges=LOG_BINS,
            hover=hover,
        )

    @app.route("/")
    def _index():
        i_cur = _resolve_index()
        frame = render(_state(i_cur, _resolve_extent()))
        return render_canvas_document(
            frame=frame,
            samples=samples,
            time_keys=time_keys,
            i_cur=i_cur,
            title=title,
            bounds=bounds,
            edges=LOG_BINS,
            annotations=annotations,
        )

    @app.route("/map")
    def _map():
        return render_map_document(
            samples=samples,
            time_keys=time_keys,
            i_cur=_resolve_index(),
            title=title,
            bounds=bounds,
            annotations=annotations,
        )

    @app.route("/frame")
    def _frame():
        frame = render(_state(_resolve_index(), _resolve_extent()))
        return jsonify(frame.to_dict())

    @app.route("/hover")
    def _hover():
        i_cur = _resolve_index()
        extent = _resolve_extent()
        x = request.args.get("x", -1.0, type=float)
        y = request.args.get("y", -1.0, type=float)

        visible = filter_samples(samples, time_keys[i_cur] if time_keys else None)
        hit = find_station_at(visible, x, y, extent, NYC_BOUNDS)
        if hit is None:
            return jsonify({})

        tip = tooltip_for(hit, extent, NYC_BOUNDS)
        return jsonify(
            {
                "x": tip.x,
                "y": tip.y,
                "text": tip.text,
                "id": hit.station_complex_id,
                "name": hit.station_complex,
                "ridership": format_ridership(hit.total_ridership),
            }
        )

    return app


def serve_viewer(
    *,
    data_file: str | Path,
    host: str = "127.0.0.1",
    port: int = 8080,
    debug: bool = False,
    title: str | None = None,
    cutoffs: str = "fixed",
    annotations=None,
):
    if data_file is None:
        raise ValueError("serve_viewer requires a data_file")

    print(f"{Fore.CYAN}Loading ridership samples from {data_file}…{Style.RESET_ALL}")
    samples = load_samples(data_file)
    print(f"{Fore.CYAN}Loaded {len(samples):,} samples{Style.RESET_ALL}")

    app = build_app(samples, title=title, cutoffs=cutoffs, annotations=annotations)

    print(f"{Fore.GREEN}Serving on http://{host}:{port}{Style.RESET_ALL}")
    app.run(host=host, port=int(port), debug=bool(debug))
