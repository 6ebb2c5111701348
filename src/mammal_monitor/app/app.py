# src/mammal_monitor/app/app.py
import logging

import streamlit as st
import pandas as pd
import plotly.express as px
from streamlit_folium import st_folium

from mammal_monitor.config import DATA_SOURCE, ALL, TOP_N_SPECIES
from mammal_monitor.loader import load_detections, DataLoadError
from mammal_monitor.dimensions import unique_species, unique_regions, unique_array_names
from mammal_monitor.filters import (
    FilterSelection, Restriction, filter_detections,
    base_year, month_index_bounds, month_labels,
    resolve_selection, selection_labels,
)
from mammal_monitor.aggregate import (
    total_detections, camera_count, hourly_activity, monthly_activity,
    species_frequency, species_camera_coverage, array_species_table,
)
from mammal_monitor.geo_clustering import cluster_points, show_colors_for
from mammal_monitor.map_view import build_map
from mammal_monitor.export import (
    detections_filename, array_table_filename, chart_filename,
    detections_to_csv, array_table_to_csv,
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

st.set_page_config(page_title="Michigan Mammal Monitoring", layout="wide")
st.title("Michigan Mammal Monitoring Project")
st.caption("Wildlife Camera Trap Detection Dashboard")


# ==============================
# Load CSV (once per session)
# ==============================
@st.cache_data(show_spinner=False)
def load_data(source: str) -> pd.DataFrame:
    return load_detections(source)


try:
    with st.spinner("Loading detection data…"):
        df = load_data(DATA_SOURCE)
except DataLoadError as exc:
    st.error(f"Failed to load data: {exc}")
    st.stop()

BASE_YEAR = base_year(df)
MIN_IDX, MAX_IDX = month_index_bounds(df, BASE_YEAR)
DATE_LABELS = month_labels(BASE_YEAR, MAX_IDX)

SELECT_KEYS = {"species": "sel_species", "region": "sel_regions", "array": "sel_arrays"}
for _key in SELECT_KEYS.values():
    st.session_state.setdefault(_key, [ALL])


def _prev_key(key: str) -> str:
    return f"{key}_prev"


def _clear(key: str):
    st.session_state[key] = [ALL]
    st.session_state[_prev_key(key)] = [ALL]
    if key == SELECT_KEYS["species"]:
        st.session_state["species_search"] = ""


def _resolve(key: str):
    previous = st.session_state.get(_prev_key(key), [ALL])
    st.session_state[key] = resolve_selection(previous, st.session_state[key])
    st.session_state[_prev_key(key)] = st.session_state[key]


def multiselect_filter(label: str, options: list, key: str):
    st.multiselect(label, options=options, key=key, on_change=_resolve, args=(key,))
    st.button("Clear Selection", key=f"clear_{key}", on_click=_clear, args=(key,))
    return st.session_state[key]


# ==============================
# Sidebar filters
# ==============================
with st.sidebar:
    st.header("Filters")

    search = st.text_input("Species of Interest", key="species_search", placeholder="Search species...")
    species_opts = [ALL] + unique_species(df)
    if search:
        keep = set(st.session_state[SELECT_KEYS["species"]])
        species_opts = [s for s in species_opts if search.lower() in s.lower() or s in keep]
    sel_species = multiselect_filter("Species", species_opts, SELECT_KEYS["species"])

    sel_regions = multiselect_filter("Region", [ALL] + unique_regions(df), SELECT_KEYS["region"])
    sel_arrays = multiselect_filter("Array Name", [ALL] + unique_array_names(df), SELECT_KEYS["array"])

    st.markdown("**Date Range**")
    if MAX_IDX > MIN_IDX:
        date_range = st.select_slider(
            "Date Range",
            options=list(range(MIN_IDX, MAX_IDX + 1)),
            value=(MIN_IDX, MAX_IDX),
            format_func=lambda i: DATE_LABELS[i],
            label_visibility="collapsed",
        )
    else:
        date_range = (MIN_IDX, MAX_IDX)
    start_label, end_label = DATE_LABELS[date_range[0]], DATE_LABELS[date_range[1]]
    st.caption(f"{start_label} - {end_label}")

selection = FilterSelection(
    species=Restriction.from_selection(sel_species),
    regions=Restriction.from_selection(sel_regions),
    array_names=Restriction.from_selection(sel_arrays),
    month_range=tuple(date_range),
    base_year=BASE_YEAR,
)
filtered = filter_detections(df, selection)
species_labels = selection_labels(sel_species)

with st.sidebar:
    st.download_button(
        "⬇ Download Dataset",
        data=detections_to_csv(filtered),
        file_name=detections_filename(species_labels, start_label, end_label),
        mime="text/csv",
        use_container_width=True,
    )


# ==============================
# Summary cards
# ==============================
c1, c2, c3, c4 = st.columns(4)
c1.metric("Total Detections", f"{total_detections(filtered):,}")
c2.metric("Species Selected", ", ".join(species_labels))
c3.metric("Date Range", f"{start_label} - {end_label}")
c4.metric("Camera Locations", camera_count(filtered))


# ==============================
# Detection map
# ==============================
st.subheader("📍 Detection Map")
points = cluster_points(filtered, show_colors=show_colors_for(selection))
if not points:
    st.info("No location data available for selected filters")
else:
    st_folium(build_map(points), use_container_width=True, height=520, returned_objects=[])


# ==============================
# Activity
# ==============================
st.subheader("📊 Animal Activity")
view = st.radio("View", ["by Hour", "by Month"], horizontal=True, label_visibility="collapsed")
if view == "by Hour":
    activity = hourly_activity(filtered).rename(columns={"label": "x"})
    blurb = ("Detection patterns throughout the day. Each point is the number of "
             "detections during that hour across all selected dates.")
else:
    activity = monthly_activity(filtered).rename(columns={"month_name": "x"})
    blurb = ("Detection patterns throughout the year. Each point is the number of "
             "detections during that month across all selected years.")

fig = px.line(activity, x="x", y="count", markers=True,
              labels={"x": "", "count": "Detections"})
fig.update_traces(line=dict(color="#4A90E2", width=3), marker=dict(color="#357ABD", size=8))
fig.update_layout(height=400, template="plotly_white")
st.plotly_chart(
    fig, use_container_width=True,
    config={"toImageButtonOptions": {
        "format": "png", "scale": 2,
        "filename": chart_filename(view.split()[-1].lower(), species_labels, start_label, end_label),
    }},
)
st.caption(blurb)


# ==============================
# Species rankings
# ==============================
left, right = st.columns(2)
with left:
    st.subheader(f"Top {TOP_N_SPECIES} Species by Detections")
    freq = species_frequency(filtered)
    if freq.empty:
        st.info("No detections for the current filters.")
    else:
        fig = px.bar(freq, x="count", y="species", orientation="h",
                     labels={"count": "Detections", "species": ""})
        fig.update_layout(height=450, yaxis=dict(autorange="reversed"), template="plotly_white")
        st.plotly_chart(fig, use_container_width=True)
with right:
    st.subheader(f"Top {TOP_N_SPECIES} Species by Cameras")
    cover = species_camera_coverage(filtered)
    if cover.empty:
        st.info("No detections for the current filters.")
    else:
        fig = px.bar(cover, x="cameras", y="species", orientation="h",
                     labels={"cameras": "Cameras", "species": ""})
        fig.update_layout(height=450, yaxis=dict(autorange="reversed"), template="plotly_white")
        st.plotly_chart(fig, use_container_width=True)


# ==============================
# Array species table (not filtered by species)
# ==============================
st.subheader("📷 Species by Array")
array_slice = filter_detections(df, selection.without_species())
table = array_species_table(array_slice)
st.caption(f"{camera_count(array_slice)} cameras in the selected region/array/date range. "
           "Proportion = share of those cameras that detected the species.")
st.dataframe(
    table.rename(columns={"species": "Species", "total": "Total Detections",
                          "cameras": "Cameras", "proportion": "Proportion (%)"}),
    use_container_width=True, hide_index=True,
)
st.download_button(
    "⬇ Download Table",
    data=array_table_to_csv(table),
    file_name=array_table_filename(selection_labels(sel_regions), selection_labels(sel_arrays),
                                   start_label, end_label),
    mime="text/csv",
)
