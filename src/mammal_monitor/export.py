# src/mammal_monitor/export.py
import re
from typing import Iterable

import pandas as pd

from .config import EXPORT_PREFIX
from .schema import START_COL

_WHITESPACE = re.compile(r"\s+")


def _underscore(text: str) -> str:
    return _WHITESPACE.sub("_", text)


def _join(labels: Iterable[str]) -> str:
    return "_".join(labels)


def detections_filename(species: Iterable[str], start_label: str, end_label: str) -> str:
    """e.g. Michigan_Mammal_White-tailed_Deer_Jan_2017-Jun_2025.csv"""
    return _underscore(f"{EXPORT_PREFIX}_{_join(species)}_{start_label}-{end_label}.csv")


def array_table_filename(regions: Iterable[str], arrays: Iterable[str],
                         start_label: str, end_label: str) -> str:
    return _underscore(
        f"{EXPORT_PREFIX}_Array_Species_{_join(regions)}_{_join(arrays)}_{start_label}-{end_label}.csv"
    )


def chart_filename(view: str, species: Iterable[str], start_label: str, end_label: str) -> str:
    """Base name of the activity chart PNG; plotly appends the extension."""
    return _underscore(f"{EXPORT_PREFIX}_Activity_{view}_{_join(species)}_{start_label}-{end_label}")


def detections_to_csv(df: pd.DataFrame) -> str:
    """CSV text of the filtered detections; start times in ISO format, NaT as empty."""
    out = df.copy()
    out[START_COL] = out[START_COL].dt.strftime("%Y-%m-%dT%H:%M:%S")
    return out.to_csv(index=False)


def array_table_to_csv(table: pd.DataFrame) -> str:
    return table.to_csv(index=False)
