import json
import math
import re

import pytest

from rideviz.core.binning import LOG_BINS, bin_values
from rideviz.core.encoding import DEFAULT_BOUNDS, RidershipBounds, bounds_from_values
from rideviz.viz.charts.histogram import build_histogram, cutoff_positions


def test_default_cutoffs_sit_on_bin_edges():
    assert cutoff_positions(LOG_BINS, DEFAULT_BOUNDS) == [3.0, 7.0]


def test_data_cutoffs_land_inside_their_bins():
    bounds = bounds_from_values([5, 30, 80, 200, 900, 2500])
    assert bounds.lower_cutoff == pytest.approx(42.5)
    assert bounds.upper_cutoff == pytest.approx(2100.0)

    lo, hi = cutoff_positions(LOG_BINS, bounds)

    # 42.5 is in [19.95, 54.55), 2100 is in [1122.02, 3073.8)
    assert 3 < lo < 4
    assert 7 < hi < 8
    expected = 3 + math.log(42.5 / 19.95) / math.log(54.55 / 19.95)
    assert lo == pytest.approx(expected, abs=1e-6)


def test_cutoffs_outside_the_edges_are_pinned():
    bounds = RidershipBounds(lower_cutoff=0.5, upper_cutoff=50000)
    assert cutoff_positions(LOG_BINS, bounds) == [0.0, 10.0]


def test_linear_step_when_first_edge_is_zero():
    bounds = RidershipBounds(lower_cutoff=5, upper_cutoff=15)
    assert cutoff_positions([0, 10, 20], bounds) == [0.5, pytest.approx(1 + math.log(1.5) / math.log(2))]


def test_histogram_embeds_data_cutoff_positions():
    values = [5, 30, 80, 200, 900, 2500]
    bounds = bounds_from_values(values)
    buckets = bin_values(values)

    page = build_histogram(buckets, buckets, bounds=bounds).render()

    m = re.search(r"const cutPositions = (\[.*?\]);", page)
    assert m is not None
    assert json.loads(m.group(1)) == cutoff_positions(LOG_BINS, bounds)
    assert len(json.loads(m.group(1))) == 2
