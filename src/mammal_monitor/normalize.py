# src/mammal_monitor/normalize.py
import logging
from typing import Iterable, Mapping, Union

import pandas as pd

from .config import DEFAULT_GROUP_SIZE
from .schema import (
    RAW_YEAR, RAW_COMMON_NAME, RAW_START_TIME, RAW_GROUP_SIZE,
    RAW_LATITUDE, RAW_LONGITUDE, PASSTHROUGH, BLANK_SPECIES,
    YEAR_COL, SPECIES_COL, START_COL, GROUP_SIZE_COL, LAT_COL, LON_COL,
    HOUR_COL, MONTH_COL, DETECTION_COLUMNS,
)

logger = logging.getLogger(__name__)

RawRows = Union[pd.DataFrame, Iterable[Mapping[str, str]]]

# Leading-number parsing: "2019x" -> 2019, "42.1N" -> 42.1
_INT_PATTERN = r"^\s*([+-]?\d+)"
_FLOAT_PATTERN = r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
# Trailing offset after a clock time: "10:00-05:00", "10:00:00Z", "10:00 +0100", "10:00 UTC"
_OFFSET_PATTERN = r"(\d{1,2}:\d{2}(?::\d{2}(?:\.\d+)?)?)\s*(?:Z|UTC|GMT|[+-]\d{2}(?::?\d{2})?)$"


def _as_string_frame(rows: RawRows) -> pd.DataFrame:
    raw = rows if isinstance(rows, pd.DataFrame) else pd.DataFrame(list(rows))
    return raw.fillna("").astype(str)


def _column(raw: pd.DataFrame, name: str) -> pd.Series:
    if name in raw.columns:
        return raw[name]
    return pd.Series("", index=raw.index, dtype=object)


def parse_leading_int(values: pd.Series) -> pd.Series:
    """Integer prefix of each string, NaN where there is none."""
    return pd.to_numeric(values.str.extract(_INT_PATTERN, expand=False), errors="coerce")


def parse_leading_float(values: pd.Series) -> pd.Series:
    """Float prefix of each string, NaN where there is none."""
    return pd.to_numeric(values.str.extract(_FLOAT_PATTERN, expand=False), errors="coerce")


def strip_utc_offset(values: pd.Series) -> pd.Series:
    """Drop a trailing UTC offset after the clock time, keeping the time as written."""
    return values.str.strip().str.replace(_OFFSET_PATTERN, r"\1", regex=True, case=False)


def _wall_clock(value) -> pd.Timestamp:
    ts = pd.to_datetime(value, errors="coerce")
    if pd.isna(ts):
        return pd.NaT
    return ts.tz_localize(None) if ts.tzinfo is not None else ts


def parse_timestamps(values: pd.Series) -> pd.Series:
    """Parse start times as wall-clock timestamps; unparseable -> NaT."""
    cleaned = strip_utc_offset(values)
    cleaned = cleaned.where(cleaned != "")
    try:
        ts = pd.to_datetime(cleaned, errors="coerce", format="mixed")
        mixed_zones = not pd.api.types.is_datetime64_any_dtype(ts)
    except ValueError:
        mixed_zones = True
    if mixed_zones:
        # zone names the offset pattern does not cover: one value at a time
        return pd.to_datetime(cleaned.map(_wall_clock))
    if ts.dt.tz is not None:
        ts = ts.dt.tz_localize(None)
    return ts


def has_species(raw: pd.DataFrame) -> pd.Series:
    """Mask of rows whose common name is present and not the 'Blank' sentinel."""
    name = _column(raw, RAW_COMMON_NAME)
    return (name.str.strip() != "") & (name != BLANK_SPECIES)


def normalize_rows(rows: RawRows) -> pd.DataFrame:
    """
    Turn raw string rows into the canonical detection frame.

    Rows without a usable common name, a positive year, or non-zero coordinates
    are dropped. Rows whose start time does not parse are kept with NaT and
    missing hour/month; date-based views exclude them later.
    """
    raw = _as_string_frame(rows)
    total = len(raw)
    raw = raw[has_species(raw)]

    start = parse_timestamps(_column(raw, RAW_START_TIME))
    group_size = parse_leading_int(_column(raw, RAW_GROUP_SIZE))
    # 0 counts as unparseable, like a missing value
    group_size = group_size.where(group_size.notna() & (group_size != 0), DEFAULT_GROUP_SIZE)

    out = pd.DataFrame({
        YEAR_COL: parse_leading_int(_column(raw, RAW_YEAR)).fillna(0).astype("int64"),
        SPECIES_COL: _column(raw, RAW_COMMON_NAME),
        START_COL: start,
        GROUP_SIZE_COL: group_size.astype("int64"),
        LAT_COL: parse_leading_float(_column(raw, RAW_LATITUDE)).fillna(0.0).astype("float64"),
        LON_COL: parse_leading_float(_column(raw, RAW_LONGITUDE)).fillna(0.0).astype("float64"),
        HOUR_COL: start.dt.hour.astype("Int64"),
        MONTH_COL: (start.dt.month - 1).astype("Int64"),
    }, index=raw.index)
    for raw_name, col in PASSTHROUGH.items():
        out[col] = _column(raw, raw_name)

    keep = (out[YEAR_COL] > 0) & (out[LAT_COL] != 0) & (out[LON_COL] != 0)
    out = out.loc[keep, DETECTION_COLUMNS].reset_index(drop=True)

    logger.info("Normalized %d of %d rows (%d dropped)", len(out), total, total - len(out))
    return out
