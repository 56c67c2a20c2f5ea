"""DataFrame helpers for hourly forecast points."""
from typing import Optional, Sequence, Tuple

import pandas as pd

from dawn_patrol.schemas.forecast import HourlyForecastPoint

COLUMNS = [
    "timestamp",
    "temperature",
    "cloud_cover",
    "precipitation_probability",
    "pressure",
    "wind_speed",
    "wind_direction",
]


def optional_float(value) -> Optional[float]:
    """Convert a pandas scalar to float, mapping NaN to None."""
    if value is None or pd.isna(value):
        return None
    return float(value)


def forecast_dataframe(points: Sequence[HourlyForecastPoint]) -> pd.DataFrame:
    """Convert forecast points to a time-sorted DataFrame with an hour column."""
    if not points:
        df = pd.DataFrame(columns=COLUMNS + ["hour"])
        return df.astype({c: "float64" for c in COLUMNS[1:]})

    df = pd.DataFrame([p.model_dump() for p in points], columns=COLUMNS)
    df["hour"] = [p.timestamp.hour for p in points]
    df[COLUMNS[1:]] = df[COLUMNS[1:]].astype("float64")
    return df.sort_values("timestamp", kind="stable").reset_index(drop=True)


def rows_in_window(df: pd.DataFrame, window: Tuple[int, int]) -> pd.DataFrame:
    """Rows whose local hour falls in an inclusive window, wrapping past midnight."""
    start, end = window
    if start <= end:
        mask = (df["hour"] >= start) & (df["hour"] <= end)
    else:
        mask = (df["hour"] >= start) | (df["hour"] <= end)
    return df[mask]
