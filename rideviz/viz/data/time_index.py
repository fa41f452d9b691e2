# rideviz/viz/data/time_index.py
from __future__ import annotations

from typing import Dict, List, Sequence

from rideviz.types import StationSample, TimeKey


def _hour_int(hour) -> int:
    return int(str(hour).strip())


def day_hour_combinations(samples: Sequence[StationSample]) -> List[TimeKey]:
    """
    Unique (day, hour) keys in timeline order: by day, then numeric hour.
    "7" and "07" are the same hour; the first spelling seen is kept.
    """
    seen: Dict[tuple, TimeKey] = {}
    for s in samples:
        k = (s.transit_day, _hour_int(s.transit_hour))
        if k not in seen:
            seen[k] = TimeKey(day=s.transit_day, hour=s.transit_hour)
    return [seen[k] for k in sorted(seen)]


def same_time(sample: StationSample, key: TimeKey) -> bool:
    return (
        sample.transit_day == key.day
        and _hour_int(sample.transit_hour) == _hour_int(key.hour)
    )


def filter_samples(samples: Sequence[StationSample], key: TimeKey | None) -> List[StationSample]:
    if key is None:
        return []
    return [s for s in samples if same_time(s, key)]


def snap_index(requested: int | None, n: int) -> int:
    """
    Snap a requested slider index into [0, n-1].
    Missing index -> 0. Empty timeline -> 0.
    """
    if requested is None or n <= 0:
        return 0
    return max(0, min(int(requested), n - 1))


def next_index(i: int, n: int) -> int:
    # animation step, wraps back to the start
    if n <= 0:
        return 0
    return (snap_index(i, n) + 1) % n


def ridership_by_time(samples: Sequence[StationSample], keys: Sequence[TimeKey]) -> List[float]:
    totals: Dict[tuple, float] = {}
    for s in samples:
        k = (s.transit_day, _hour_int(s.transit_hour))
        totals[k] = totals.get(k, 0.0) + float(s.total_ridership)
    return [totals.get((k.day, _hour_int(k.hour)), 0.0) for k in keys]
