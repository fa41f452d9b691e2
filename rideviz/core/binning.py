# rideviz/core/binning.py
from __future__ import annotations

import math
from typing import Iterable, List, Optional, Sequence

import numpy as np

from rideviz.types import Bucket

# log-spaced ridership bins, 1 .. 20000
LOG_BINS = (1, 2.69, 7.24, 19.95, 54.55, 149.54, 409.49, 1122.02, 3073.8, 8421.87, 20000)


def validate_edges(edges: Sequence[float]) -> np.ndarray:
    arr = np.asarray(edges, dtype=float)
    if arr.ndim != 1 or arr.size < 2:
        raise ValueError("bin edges need at least 2 values")
    if not np.all(np.diff(arr) > 0):
        raise ValueError("bin edges must be strictly increasing")
    return arr


def bucket_index(value: float, edges: Sequence[float] = LOG_BINS) -> Optional[int]:
    """
    Index of the bucket holding `value`, or None when it is out of range.
    Buckets are [e[i], e[i+1]) except the last, which also takes e[-1].
    """
    arr = validate_edges(edges)
    if value is None or math.isnan(value):
        return None
    if value < arr[0] or value > arr[-1]:
        return None
    i = int(np.searchsorted(arr, value, side="right")) - 1
    return min(i, arr.size - 2)


def bin_values(values: Iterable[float], edges: Sequence[float] = LOG_BINS) -> List[Bucket]:
    """
    Count values per bucket. Out-of-range and NaN values are dropped.
    Output follows edge order; bucket i maps 1:1 to legend color i.
    """
    arr = validate_edges(edges)
    n_buckets = arr.size - 1

    v = np.asarray(list(values), dtype=float)
    v = v[(v >= arr[0]) & (v <= arr[-1])]

    idx = np.searchsorted(arr, v, side="right") - 1
    idx = np.minimum(idx, n_buckets - 1)
    counts = np.bincount(idx, minlength=n_buckets) if idx.size else np.zeros(n_buckets, dtype=int)

    return [
        Bucket(
            lower_bound=float(arr[i]),
            upper_bound=float(arr[i + 1]),
            count=int(counts[i]),
        )
        for i in range(n_buckets)
    ]


def bucket_centers(edges: Sequence[float] = LOG_BINS) -> List[float]:
    # geometric mean, the visual middle of a bar on a log axis
    arr = validate_edges(edges)
    return [math.sqrt(arr[i] * arr[i + 1]) for i in range(arr.size - 1)]
