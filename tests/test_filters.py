import pandas as pd

from mammal_monitor.filters import (
    FilterSelection, Restriction, filter_detections,
    month_index, month_index_series, base_year, month_index_bounds,
    month_label, month_labels, resolve_selection, selection_labels,
)


def test_unrestricted_selection_returns_input_unchanged(dated):
    out = filter_detections(dated, FilterSelection())
    pd.testing.assert_frame_equal(out, dated)


def test_invalid_start_time_never_passes_date_gate(detections):
    out = filter_detections(detections, FilterSelection())
    assert "Raccoon" not in out["common_name"].tolist()
    assert len(out) == 5
    # still part of the base collection
    assert "Raccoon" in detections["common_name"].tolist()


def test_species_restriction_is_or_within_dimension(detections):
    sel = FilterSelection(species=Restriction.restricted_to(["Deer", "Fox"]))
    out = filter_detections(detections, sel)
    assert sorted(out["common_name"].unique()) == ["Deer", "Fox"]
    assert len(out) == 4


def test_dimensions_combine_with_and(detections):
    sel = FilterSelection(
        species=Restriction.restricted_to(["Deer"]),
        regions=Restriction.restricted_to(["South"]),
    )
    out = filter_detections(detections, sel)
    assert len(out) == 1
    assert out.loc[0, "array_name"] == "B2"


def test_array_restriction(detections):
    sel = FilterSelection(array_names=Restriction.restricted_to(["A1"]))
    out = filter_detections(detections, sel)
    assert set(out["array_name"]) == {"A1"}
    assert len(out) == 3


def test_empty_restriction_means_unrestricted(detections):
    assert Restriction.restricted_to([]).is_unrestricted
    sel = FilterSelection(species=Restriction.restricted_to([]))
    assert len(filter_detections(detections, sel)) == 5


def test_all_sentinel_from_ui_selection():
    assert Restriction.from_selection(["All"]).is_unrestricted
    assert Restriction.from_selection(["All", "Deer"]).is_unrestricted
    assert Restriction.from_selection([]).is_unrestricted
    assert Restriction.from_selection(None).is_unrestricted
    assert Restriction.from_selection(["Deer"]).values == frozenset({"Deer"})


def test_restriction_labels():
    assert Restriction.unrestricted().labels() == ["All"]
    assert Restriction.restricted_to(["Fox", "Deer"]).labels() == ["Deer", "Fox"]


def test_month_index_example():
    assert month_index(pd.Timestamp("2019-03-10 12:00"), 2017) == 26


def test_month_range_is_closed_interval(detections):
    sel = FilterSelection(month_range=(26, 26), base_year=2017)
    out = filter_detections(detections, sel)
    assert sorted(out["common_name"]) == ["Coyote", "Deer"]

    sel = FilterSelection(month_range=(0, 5), base_year=2017)
    out = filter_detections(detections, sel)
    assert len(out) == 3  # Jan (2) + Jun (1)

    sel = FilterSelection(month_range=(6, 25), base_year=2017)
    assert filter_detections(detections, sel).empty


def test_open_ended_month_range(detections):
    sel = FilterSelection(month_range=(6, None), base_year=2017)
    out = filter_detections(detections, sel)
    assert len(out) == 2


def test_filtering_is_idempotent(detections):
    sel = FilterSelection(
        species=Restriction.restricted_to(["Deer", "Coyote"]),
        month_range=(0, 30),
        base_year=2017,
    )
    once = filter_detections(detections, sel)
    twice = filter_detections(once, sel)
    pd.testing.assert_frame_equal(once, twice)


def test_filtering_does_not_mutate_source(detections):
    before = detections.copy()
    filter_detections(detections, FilterSelection(species=Restriction.restricted_to(["Fox"])))
    pd.testing.assert_frame_equal(detections, before)


def test_without_species_keeps_other_dimensions():
    sel = FilterSelection(
        species=Restriction.restricted_to(["Deer"]),
        regions=Restriction.restricted_to(["South"]),
        month_range=(3, 9),
        base_year=2018,
    )
    opened = sel.without_species()
    assert opened.species.is_unrestricted
    assert opened.regions == sel.regions
    assert opened.month_range == (3, 9)
    assert opened.base_year == 2018


def test_base_year_and_bounds(detections):
    assert base_year(detections) == 2017
    assert month_index_bounds(detections, 2017) == (0, 26)
    idx = month_index_series(detections["start_time"], 2017)
    assert idx.iloc[3] == 26
    assert pd.isna(idx.iloc[5])


def test_base_year_falls_back_without_dates(detections):
    assert base_year(detections.iloc[5:]) == 2017
    assert month_index_bounds(detections.iloc[5:], 2017) == (0, 0)


def test_month_labels():
    labels = month_labels(2017, 101)
    assert len(labels) == 102
    assert labels[0] == "Jan 2017"
    assert labels[26] == "Mar 2019"
    assert labels[101] == "Jun 2025"
    assert month_label(11, 2017) == "Dec 2017"


def test_picking_a_value_replaces_all():
    assert resolve_selection(["All"], ["All", "Deer"]) == ["Deer"]
    assert resolve_selection(["Deer"], ["Deer", "Fox"]) == ["Deer", "Fox"]


def test_picking_all_again_or_clearing_resets():
    assert resolve_selection(["Deer", "Fox"], ["Deer", "Fox", "All"]) == ["All"]
    assert resolve_selection(["Deer"], []) == ["All"]


def test_resolved_selection_restricts_filter(detections):
    picked = resolve_selection(["All"], ["All", "Fox"])
    out = filter_detections(detections, FilterSelection(species=Restriction.from_selection(picked)))
    assert out["common_name"].tolist() == ["Fox"]


def test_selection_labels_keep_pick_order():
    assert selection_labels(["Red Fox", "Coyote"]) == ["Red Fox", "Coyote"]
    assert selection_labels(["All"]) == ["All"]
    assert selection_labels([]) == ["All"]
