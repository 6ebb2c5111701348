# src/mammal_monitor/dimensions.py
from typing import List

import pandas as pd

from .schema import DIMENSIONS, SPECIES_COL


def unique_values(df: pd.DataFrame, dimension: str) -> List[str]:
    """
    Sorted distinct values of a filter dimension ('species', 'region', 'array').
    Empty strings are dropped for region/array; species never has empties here.
    The caller prepends the 'All' option.
    """
    if dimension not in DIMENSIONS:
        raise ValueError(f"Unknown dimension {dimension!r}; expected one of {sorted(DIMENSIONS)}")
    col = DIMENSIONS[dimension]
    values = df[col].dropna().astype(str)
    if col != SPECIES_COL:
        values = values[values != ""]
    return sorted(values.unique().tolist())


def unique_species(df: pd.DataFrame) -> List[str]:
    return unique_values(df, "species")


def unique_regions(df: pd.DataFrame) -> List[str]:
    return unique_values(df, "region")


def unique_array_names(df: pd.DataFrame) -> List[str]:
    return unique_values(df, "array")
