import pandas as pd

IN_CSV = "MTA_Subway_Hourly_Ridership.csv"
OUT_JSON = "MTA_ridership_data.json"

START_DAY = "2024-09-01"
END_DAY_EXCLUSIVE = "2024-09-08"

COLUMNS = [
    "transit_timestamp",
    "transit_mode",
    "station_complex_id",
    "station_complex",
    "borough",
    "ridership",
    "latitude",
    "longitude",
]


def main():
    # load only needed columns (faster + less RAM)
    df = pd.read_csv(IN_CSV, usecols=COLUMNS, dtype={"station_complex_id": str})

    df = df[df["transit_mode"] == "subway"].copy()
    df["transit_timestamp"] = pd.to_datetime(df["transit_timestamp"], errors="coerce")
    df = df.dropna(subset=["transit_timestamp", "latitude", "longitude"])

    start = pd.Timestamp(START_DAY)
    end_exclusive = pd.Timestamp(END_DAY_EXCLUSIVE)
    df = df[(df["transit_timestamp"] >= start) & (df["transit_timestamp"] < end_exclusive)]

    df["transit_day"] = df["transit_timestamp"].dt.strftime("%Y-%m-%d")
    df["transit_hour"] = df["transit_timestamp"].dt.hour.astype(str)

    # one row per station per hour (the export splits by fare class / payment)
    out = (
        df.groupby(
            ["station_complex_id", "transit_day", "transit_hour"],
            as_index=False,
        )
        .agg(
            station_complex=("station_complex", "first"),
            total_ridership=("ridership", "sum"),
            latitude=("latitude", "first"),
            longitude=("longitude", "first"),
            borough=("borough", "first"),
        )
    )

    out["_h"] = out["transit_hour"].astype(int)
    out = out.sort_values(["transit_day", "_h", "station_complex_id"]).drop(columns="_h")

    out.to_json(OUT_JSON, orient="records", indent=1)

    print(f"Wrote: {OUT_JSON}")
    print(f"Rows kept: {len(out):,}")


if __name__ == "__main__":
    main()
