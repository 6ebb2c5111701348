# src/mammal_monitor/aggregate.py
from decimal import Decimal, ROUND_HALF_UP

import numpy as np
import pandas as pd

from .config import TOP_N_SPECIES
from .geo_clustering import location_keys
from .schema import SPECIES_COL, GROUP_SIZE_COL, HOUR_COL, MONTH_COL, MONTH_NAMES


def total_detections(df: pd.DataFrame) -> int:
    """Individuals detected (group sizes summed)."""
    return int(df[GROUP_SIZE_COL].sum())


def camera_count(df: pd.DataFrame) -> int:
    """Distinct camera locations in the collection."""
    return int(location_keys(df).nunique())


def _bucket_counts(values: pd.Series, n: int) -> np.ndarray:
    valid = values.dropna().astype(int)
    valid = valid[(valid >= 0) & (valid < n)]
    return np.bincount(valid.to_numpy(), minlength=n)


def hourly_activity(df: pd.DataFrame) -> pd.DataFrame:
    """Records per hour of day, 0..23 (not weighted by group size)."""
    counts = _bucket_counts(df[HOUR_COL], 24)
    hours = np.arange(24)
    return pd.DataFrame({
        "hour": hours,
        "label": [f"{h}:00" for h in hours],
        "count": counts,
    })


def monthly_activity(df: pd.DataFrame) -> pd.DataFrame:
    """Records per calendar month, 0=Jan..11=Dec."""
    counts = _bucket_counts(df[MONTH_COL], 12)
    return pd.DataFrame({
        "month": np.arange(12),
        "month_name": MONTH_NAMES,
        "count": counts,
    })


def _top(table: pd.DataFrame, by: str, n: int) -> pd.DataFrame:
    # stable sort keeps first-seen order among ties
    return (
        table.sort_values(by, ascending=False, kind="stable")
        .head(n)
        .reset_index(drop=True)
    )


def species_frequency(df: pd.DataFrame, n: int = TOP_N_SPECIES) -> pd.DataFrame:
    """Top-n species by summed group size."""
    table = (
        df.groupby(SPECIES_COL, sort=False)[GROUP_SIZE_COL].sum()
        .reset_index()
        .rename(columns={SPECIES_COL: "species", GROUP_SIZE_COL: "count"})
    )
    return _top(table, "count", n)


def _cameras_per_species(df: pd.DataFrame) -> pd.Series:
    return (
        df.assign(_loc=location_keys(df))
        .groupby(SPECIES_COL, sort=False)["_loc"].nunique()
    )


def species_camera_coverage(df: pd.DataFrame, n: int = TOP_N_SPECIES) -> pd.DataFrame:
    """Top-n species by number of distinct cameras they were detected at."""
    table = (
        _cameras_per_species(df)
        .reset_index()
        .rename(columns={SPECIES_COL: "species", "_loc": "cameras"})
    )
    return _top(table, "cameras", n)


def _format_proportion(cameras: int, total: int) -> str:
    if total == 0:
        return "0.0"
    # half-up: 31.25 -> "31.3"
    share = Decimal(int(cameras) * 100) / Decimal(int(total))
    return str(share.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def array_species_table(df: pd.DataFrame) -> pd.DataFrame:
    """
    Per-species summary of a region/array/date slice. The slice must NOT be
    filtered by species: proportion is the share of all cameras in the slice
    at which the species was detected, as a one-decimal string.
    """
    columns = ["species", "total", "cameras", "proportion"]
    if df.empty:
        return pd.DataFrame(columns=columns)

    total_cameras = camera_count(df)
    totals = df.groupby(SPECIES_COL, sort=False)[GROUP_SIZE_COL].sum()
    cameras = _cameras_per_species(df)
    table = pd.DataFrame({
        "species": totals.index,
        "total": totals.to_numpy(),
        "cameras": cameras.reindex(totals.index).to_numpy(),
    })
    table["proportion"] = [_format_proportion(c, total_cameras) for c in table["cameras"]]
    return (
        table[columns]
        .sort_values("total", ascending=False, kind="stable")
        .reset_index(drop=True)
    )
