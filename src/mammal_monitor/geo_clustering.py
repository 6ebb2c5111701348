# src/mammal_monitor/geo_clustering.py
import math
from dataclasses import dataclass, field
from typing import Dict, List

import pandas as pd

from .config import (
    PALETTE, NEUTRAL_COLOR, ALL_SPECIES_LABEL,
    RADIUS_COLOR_MODE, RADIUS_AGGREGATE_MODE,
)
from .schema import LAT_COL, LON_COL, SPECIES_COL, GROUP_SIZE_COL


@dataclass
class SpeciesSlice:
    species: str
    count: int
    color: str


@dataclass
class MapPoint:
    """One camera location with its per-species breakdown (or a single aggregate entry)."""
    lat: float
    lng: float
    species: List[SpeciesSlice] = field(default_factory=list)
    total_count: int = 0
    show_colors: bool = False

    @property
    def key(self) -> str:
        return location_key(self.lat, self.lng)

    @property
    def radius(self) -> float:
        return marker_radius(self.total_count, self.show_colors)

    @property
    def is_pie(self) -> bool:
        """Multi-slice rendering only for colour mode with 2+ species."""
        return self.show_colors and len(self.species) > 1


# ---------- Location keys ----------
def format_coordinate(x: float) -> str:
    """Shortest round-trip text for a coordinate; integral values lose the '.0'."""
    if x.is_integer() and abs(x) < 1e21:
        return str(int(x))
    return repr(x)


def location_key(lat: float, lng: float) -> str:
    return f"{format_coordinate(float(lat))},{format_coordinate(float(lng))}"


def location_keys(df: pd.DataFrame) -> pd.Series:
    """'lat,lng' key per record."""
    if df.empty:
        return pd.Series([], index=df.index, dtype=object)
    return pd.Series(
        [location_key(lat, lng) for lat, lng in zip(df[LAT_COL], df[LON_COL])],
        index=df.index, dtype=object,
    )


# ---------- Colours ----------
def _to_int32(n: int) -> int:
    n &= 0xFFFFFFFF
    return n - (1 << 32) if n >= (1 << 31) else n


def species_hash(name: str) -> int:
    """hash = code + int32(hash << 5) - hash over UTF-16 code units."""
    h = 0
    units = name.encode("utf-16-le")
    for i in range(0, len(units), 2):
        code = units[i] | (units[i + 1] << 8)
        h = code + _to_int32(_to_int32(h) << 5) - h
    return h


def palette_index(name: str) -> int:
    return abs(species_hash(name)) % len(PALETTE)


def species_color(name: str) -> str:
    """Deterministic palette colour for a species; collisions are expected."""
    return PALETTE[palette_index(name)]


# ---------- Clustering ----------
def marker_radius(total_count: int, show_colors: bool) -> float:
    base, factor, cap = RADIUS_COLOR_MODE if show_colors else RADIUS_AGGREGATE_MODE
    return min(base + math.log(total_count + 1) * factor, cap)


def cluster_points(df: pd.DataFrame, show_colors: bool) -> List[MapPoint]:
    """
    One MapPoint per exact 'lat,lng' pair, in first-seen order. Colour mode
    keeps every species (first-seen order, group sizes summed); otherwise the
    location collapses to a single 'All Species' entry.
    """
    if df.empty:
        return []

    keyed = df.assign(_loc=location_keys(df))
    per_species = keyed.groupby(["_loc", SPECIES_COL], sort=False)[GROUP_SIZE_COL].sum()

    slices: Dict[str, List[SpeciesSlice]] = {}
    for (loc, name), count in per_species.items():
        slices.setdefault(loc, []).append(SpeciesSlice(name, int(count), species_color(name)))

    points = []
    firsts = keyed.drop_duplicates("_loc")
    for loc, lat, lng in zip(firsts["_loc"], firsts[LAT_COL], firsts[LON_COL]):
        entries = slices[loc]
        total = sum(s.count for s in entries)
        if not show_colors:
            entries = [SpeciesSlice(ALL_SPECIES_LABEL, total, NEUTRAL_COLOR)]
        points.append(MapPoint(float(lat), float(lng), entries, total, show_colors))
    return points


def show_colors_for(selection) -> bool:
    """Per-species colours only when the species dimension is restricted."""
    return not selection.species.is_unrestricted
