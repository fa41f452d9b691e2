import json

from conftest import make_sample

from rideviz.core.projection import project
from rideviz.core.sky import BLACK, DARK_BLUE
from rideviz.types import CanvasExtent, TimeKey
from rideviz.viz.frame import RenderState, find_station_at, format_ridership, render

EXTENT = CanvasExtent(width=800, height=600)


def test_render_selected_hour(samples):
    frame = render(RenderState(samples=samples, time_key=TimeKey("2024-09-01", "8"), extent=EXTENT))

    assert len(frame.markers) == 3
    assert frame.background.color == DARK_BLUE
    assert sum(b.count for b in frame.baseline) == len(samples)
    assert sum(b.count for b in frame.current) == 3
    assert frame.tooltip is None

    by_id = {m.sample.station_complex_id: m for m in frame.markers}
    # busiest station gets the biggest marker
    assert by_id["611"].encoding.radius > by_id["610"].encoding.radius > by_id["447"].encoding.radius - 1e-9


def test_render_markers_use_projection(samples):
    frame = render(RenderState(samples=samples, time_key=TimeKey("2024-09-02", "0"), extent=EXTENT))

    (m,) = frame.markers
    p = project(m.sample.latitude, m.sample.longitude, EXTENT)
    assert (m.x, m.y) == (p.x, p.y)
    assert frame.background.color == BLACK


def test_render_empty_dataset_draws_nothing():
    frame = render(RenderState(samples=[], time_key=None, extent=EXTENT))

    assert frame.markers == []
    assert [b.count for b in frame.current] == [0] * 10
    assert [b.count for b in frame.baseline] == [0] * 10
    assert frame.to_dict()["time"] is None


def test_render_hour_without_samples(samples):
    frame = render(RenderState(samples=samples, time_key=TimeKey("2024-09-05", "3"), extent=EXTENT))

    assert frame.markers == []
    assert sum(b.count for b in frame.baseline) == len(samples)


def test_hover_tooltip(samples):
    key = TimeKey("2024-09-01", "8")
    target = samples[2]
    p = project(target.latitude, target.longitude, EXTENT)

    frame = render(RenderState(samples=samples, time_key=key, extent=EXTENT, hover=(p.x + 2, p.y - 2)))

    assert frame.tooltip is not None
    assert "Flushing-Main St" in frame.tooltip.text
    assert frame.tooltip.x == p.x + 10
    assert frame.tooltip.y == p.y - 10


def test_hover_miss(samples):
    frame = render(RenderState(samples=samples, time_key=TimeKey("2024-09-01", "8"), extent=EXTENT, hover=(1, 1)))
    assert frame.tooltip is None


def test_find_station_last_drawn_wins():
    a = make_sample("1", "A", "2024-09-01", "8", 10, 40.75, -73.95)
    b = make_sample("2", "B", "2024-09-01", "8", 20, 40.75, -73.95)
    p = project(40.75, -73.95, EXTENT)

    assert find_station_at([a, b], p.x, p.y, EXTENT) is b
    assert find_station_at([a, b], p.x + 20, p.y, EXTENT) is None


def test_frame_dict_is_json_safe(samples):
    frame = render(RenderState(samples=samples, time_key=TimeKey("2024-09-01", "9"), extent=EXTENT))
    payload = json.loads(json.dumps(frame.to_dict()))

    assert payload["time"] == "2024-09-01 09:00"
    assert payload["width"] == 800
    assert len(payload["markers"]) == 2
    assert len(payload["current"]) == 10
    assert payload["markers"][0]["stops"][0][0] == 0.0


def test_format_ridership():
    assert format_ridership(2500.0) == "2500"
    assert format_ridership(40.5) == "40.50"
