import pytest

from mammal_monitor.dimensions import (
    unique_values, unique_species, unique_regions, unique_array_names,
)


def test_species_sorted_and_distinct(detections):
    assert unique_species(detections) == ["Coyote", "Deer", "Fox", "Raccoon"]


def test_regions(detections):
    assert unique_regions(detections) == ["North", "South"]


def test_array_names_skip_empty(detections):
    assert unique_array_names(detections) == ["A1", "B2"]


def test_unknown_dimension(detections):
    with pytest.raises(ValueError):
        unique_values(detections, "habitat")
