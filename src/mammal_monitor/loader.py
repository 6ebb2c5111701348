# src/mammal_monitor/loader.py
import io
import logging
import os

import pandas as pd
import requests

from .config import HTTP_TIMEOUT_S
from .normalize import normalize_rows
from .schema import RAW_COLUMNS

logger = logging.getLogger(__name__)


class DataLoadError(RuntimeError):
    """The detection source could not be fetched or parsed as a whole."""


def _is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def _fetch_text(url: str, timeout: float) -> str:
    headers = {"User-Agent": "MammalMonitorDashboard/1.0"}
    try:
        r = requests.get(url, headers=headers, timeout=timeout)
        r.raise_for_status()
    except requests.RequestException as exc:
        raise DataLoadError(f"Could not fetch {url}: {exc}") from exc
    return r.text


def load_raw_rows(source: str, timeout: float = HTTP_TIMEOUT_S) -> pd.DataFrame:
    """
    Read the detections CSV (local path or http(s) URL) as untyped string rows.
    Every recognized column is present afterwards; absent ones are empty strings.
    """
    logger.info("Loading detections from %s", source)
    if _is_url(source):
        handle = io.StringIO(_fetch_text(source, timeout))
    elif os.path.exists(source):
        handle = source
    else:
        raise DataLoadError(f"CSV not found at {source}")

    try:
        raw = pd.read_csv(handle, dtype=str, keep_default_na=False,
                          skip_blank_lines=True, low_memory=False)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise DataLoadError(f"Could not parse {source}: {exc}") from exc

    for col in RAW_COLUMNS:
        if col not in raw.columns:
            raw[col] = ""
    logger.info("Read %d rows, %d columns", len(raw), len(raw.columns))
    return raw


def load_detections(source: str, timeout: float = HTTP_TIMEOUT_S) -> pd.DataFrame:
    """Load and normalize the full detection collection (built once per session)."""
    return normalize_rows(load_raw_rows(source, timeout=timeout))
