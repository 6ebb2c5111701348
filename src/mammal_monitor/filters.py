# src/mammal_monitor/filters.py
from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterable, List, Optional, Tuple

import pandas as pd

from .config import ALL, DEFAULT_BASE_YEAR
from .schema import SPECIES_COL, REGION_COL, ARRAY_COL, START_COL, MONTH_NAMES


@dataclass(frozen=True)
class Restriction:
    """One multi-select dimension: either unrestricted or restricted to a set of values."""
    values: Optional[FrozenSet[str]] = None

    @classmethod
    def unrestricted(cls) -> "Restriction":
        return cls(None)

    @classmethod
    def restricted_to(cls, values: Iterable[str]) -> "Restriction":
        # an empty selection never means "exclude everything"
        values = frozenset(values)
        return cls(values) if values else cls(None)

    @classmethod
    def from_selection(cls, selected: Optional[Iterable[str]]) -> "Restriction":
        """Map a UI multiselect value (with its 'All' sentinel) to a restriction."""
        selected = list(selected or [])
        if not selected or ALL in selected:
            return cls.unrestricted()
        return cls.restricted_to(selected)

    @property
    def is_unrestricted(self) -> bool:
        return self.values is None

    def mask(self, column: pd.Series) -> pd.Series:
        if self.values is None:
            return pd.Series(True, index=column.index)
        return column.isin(self.values)

    def labels(self) -> List[str]:
        return [ALL] if self.values is None else sorted(self.values)


@dataclass(frozen=True)
class FilterSelection:
    """
    Conjunction of the four filter dimensions. month_range is a closed
    interval of month indices counted from January of base_year; None on
    either end leaves that side open.
    """
    species: Restriction = field(default_factory=Restriction.unrestricted)
    regions: Restriction = field(default_factory=Restriction.unrestricted)
    array_names: Restriction = field(default_factory=Restriction.unrestricted)
    month_range: Tuple[Optional[int], Optional[int]] = (None, None)
    base_year: int = DEFAULT_BASE_YEAR

    def without_species(self) -> "FilterSelection":
        """Same selection with the species dimension opened up (array table slice)."""
        return replace(self, species=Restriction.unrestricted())


# ---------- Multiselect helpers ----------
def resolve_selection(previous: List[str], current: List[str]) -> List[str]:
    """
    Next multiselect value after a user edit. Picking a value replaces 'All',
    picking 'All' again (or clearing everything) resets to ['All'].
    """
    if not current:
        return [ALL]
    if ALL in current and ALL not in previous:
        return [ALL]
    if ALL in current and len(current) > 1:
        return [v for v in current if v != ALL]
    return list(current)


def selection_labels(selected: Optional[Iterable[str]]) -> List[str]:
    """Selected values in pick order for display and filenames; ['All'] when unrestricted."""
    selected = list(selected or [])
    if not selected or ALL in selected:
        return [ALL]
    return selected


# ---------- Month index helpers ----------
def month_index(ts: pd.Timestamp, base_year: int) -> int:
    """(year - base_year) * 12 + zero-based month."""
    return (ts.year - base_year) * 12 + (ts.month - 1)


def month_index_series(start: pd.Series, base_year: int) -> pd.Series:
    """Vectorized month_index; missing where the timestamp is NaT."""
    idx = (start.dt.year - base_year) * 12 + (start.dt.month - 1)
    return idx.astype("Int64")


def base_year(df: pd.DataFrame) -> int:
    """Earliest calendar year among parseable start times."""
    years = df[START_COL].dropna().dt.year
    if years.empty:
        return DEFAULT_BASE_YEAR
    return int(years.min())


def month_index_bounds(df: pd.DataFrame, base: int) -> Tuple[int, int]:
    idx = month_index_series(df[START_COL], base).dropna()
    if idx.empty:
        return 0, 0
    return 0, max(int(idx.max()), 0)


def month_label(index: int, base: int) -> str:
    year, month = divmod(index, 12)
    return f"{MONTH_NAMES[month]} {base + year}"


def month_labels(base: int, end_index: int) -> List[str]:
    return [month_label(i, base) for i in range(end_index + 1)]


# ---------- Filtering ----------
def date_mask(df: pd.DataFrame, selection: FilterSelection) -> pd.Series:
    """Valid start time inside the selected month range."""
    idx = month_index_series(df[START_COL], selection.base_year)
    keep = idx.notna()
    lo, hi = selection.month_range
    if lo is not None:
        keep &= idx >= lo
    if hi is not None:
        keep &= idx <= hi
    return keep.fillna(False).astype(bool)


def filter_detections(df: pd.DataFrame, selection: FilterSelection) -> pd.DataFrame:
    """
    Records matching every dimension of the selection (AND across dimensions,
    OR within one). Pure: always a new frame, order preserved.
    """
    keep = (
        selection.species.mask(df[SPECIES_COL])
        & selection.regions.mask(df[REGION_COL])
        & selection.array_names.mask(df[ARRAY_COL])
        & date_mask(df, selection)
    )
    return df.loc[keep].reset_index(drop=True)
