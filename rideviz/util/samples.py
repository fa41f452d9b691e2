import json
import math
from pathlib import Path

import pandas as pd

from rideviz.types import StationSample

REQUIRED_FIELDS = (
    "station_complex_id",
    "station_complex",
    "transit_day",
    "transit_hour",
    "total_ridership",
    "latitude",
    "longitude",
)


def _finite(rec, key, row_no):
    try:
        v = float(rec[key])
    except (TypeError, ValueError):
        raise ValueError(f"record {row_no} has non-numeric {key}: {rec[key]!r}") from None
    if not math.isfinite(v):
        raise ValueError(f"record {row_no} has non-finite {key}: {rec[key]!r}")
    return v


def _hour(rec, row_no):
    """
    Keep the hour as spelled ("7", "07"); a float export's "7.0" becomes "7".
    """
    raw = str(rec["transit_hour"]).strip()
    try:
        h = float(raw)
    except ValueError:
        raise ValueError(f"record {row_no} has bad transit_hour: {raw!r}") from None
    if not h.is_integer() or not 0 <= h <= 23:
        raise ValueError(f"record {row_no} has bad transit_hour: {raw!r}")
    return raw if raw.isdigit() else str(int(h))


def _sample_from_record(rec, row_no):
    missing = [k for k in REQUIRED_FIELDS if k not in rec or rec[k] is None]
    if missing:
        raise ValueError(f"record {row_no} missing field(s): {', '.join(missing)}")

    return StationSample(
        station_complex_id=str(rec["station_complex_id"]),
        station_complex=str(rec["station_complex"]),
        transit_day=str(rec["transit_day"]),
        transit_hour=_hour(rec, row_no),
        total_ridership=_finite(rec, "total_ridership", row_no),
        latitude=_finite(rec, "latitude", row_no),
        longitude=_finite(rec, "longitude", row_no),
        borough=str(rec.get("borough") or ""),
    )


def samples_from_records(records):
    return [_sample_from_record(rec, i) for i, rec in enumerate(records)]


def load_samples(path):
    """
    Load the hourly ridership dataset.

    .json -> array of flat records (the format make_ridership_json.py writes)
    .csv  -> same columns, one record per row

    Returns a list of StationSample in file order.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        with open(path) as f:
            raw = json.load(f)
        if not isinstance(raw, list):
            raise ValueError(f"{path} must hold a JSON array of records")
        return samples_from_records(raw)

    if suffix == ".csv":
        df = pd.read_csv(path, dtype={"station_complex_id": str, "transit_hour": str})
        df = df.astype(object).where(pd.notna(df), None)
        return samples_from_records(df.to_dict(orient="records"))

    raise ValueError(f"unsupported dataset type: {path.suffix or path.name}")
