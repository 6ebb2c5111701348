# src/mammal_monitor/config.py
import os

# ---------- Data source ----------
DEFAULT_CSV = os.path.join("data", "All Michigan Mammal Monitoring Detections.csv")
DATA_SOURCE = os.environ.get("MAMMAL_MONITOR_DATA", DEFAULT_CSV)
HTTP_TIMEOUT_S = 30        # remote CSV fetch

# ---------- Filters ----------
ALL = "All"                # multi-select sentinel for "no restriction"
DEFAULT_BASE_YEAR = 2017   # month index 0 = January of this year when no dates parse

# ---------- Aggregates ----------
TOP_N_SPECIES = 15
DEFAULT_GROUP_SIZE = 1

# ---------- Map ----------
ALL_SPECIES_LABEL = "All Species"
NEUTRAL_COLOR = "#4A90E2"
MARKER_STROKE = "#357ABD"
MAP_DEFAULT_CENTER = (44.3, -85.6)   # Michigan, used when nothing matches

# Fixed palette for species slices; index = abs(name hash) % len(PALETTE)
PALETTE = [
    "#e41a1c", "#377eb8", "#4daf4a", "#984ea3", "#ff7f00",
    "#a65628", "#f781bf", "#999999", "#66c2a5", "#8da0cb",
    "#e78ac3", "#a6d854", "#ffd92f", "#e5c494", "#b3b3b3"
]

# (base, log factor, cap) for marker radius
RADIUS_COLOR_MODE = (10.0, 3.0, 25.0)
RADIUS_AGGREGATE_MODE = (6.0, 1.5, 15.0)

# ---------- Export ----------
EXPORT_PREFIX = "Michigan_Mammal"
