import pytest

from rideviz.types import StationSample


def make_sample(sid, name, day, hour, ridership, lat, lon, borough="M"):
    return StationSample(
        station_complex_id=sid,
        station_complex=name,
        transit_day=day,
        transit_hour=hour,
        total_ridership=ridership,
        latitude=lat,
        longitude=lon,
        borough=borough,
    )


@pytest.fixture
def samples():
    # two hours on one day, one hour on the next; hour spelled both ways
    return [
        make_sample("611", "Times Sq-42 St", "2024-09-01", "8", 2500.0, 40.7557, -73.9871),
        make_sample("610", "Grand Central-42 St", "2024-09-01", "8", 150.0, 40.7527, -73.9772),
        make_sample("447", "Flushing-Main St", "2024-09-01", "8", 12.0, 40.7596, -73.8300, "Q"),
        make_sample("611", "Times Sq-42 St", "2024-09-01", "09", 3100.0, 40.7557, -73.9871),
        make_sample("447", "Flushing-Main St", "2024-09-01", "9", 40.0, 40.7596, -73.8300, "Q"),
        make_sample("611", "Times Sq-42 St", "2024-09-02", "0", 30.0, 40.7557, -73.9871),
    ]
