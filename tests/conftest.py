import pytest

from mammal_monitor.normalize import normalize_rows

BASE_ROW = {
    "Year": "2019",
    "identified_by": "volunteer",
    "common_name": "White-tailed Deer",
    "start_time": "2019-03-15 14:30:00",
    "end_time": "2019-03-15 14:31:00",
    "group_size": "1",
    "age": "Adult",
    "sex": "Unknown",
    "Latitude": "42.1",
    "Longitude": "-84.5",
    "Region": "North",
    "Array Name": "A1",
    "sequence_id": "seq-1",
    "deployment_id": "dep-1",
}


def _make_row(**fields):
    row = dict(BASE_ROW)
    if "array" in fields:
        row["Array Name"] = fields.pop("array")
    row.update(fields)
    return row


@pytest.fixture
def make_row():
    return _make_row


@pytest.fixture
def raw_rows():
    return [
        _make_row(Year="2017", common_name="Deer", start_time="2017-01-10 06:15:00", group_size="2"),
        _make_row(Year="2017", common_name="Deer", start_time="2017-01-11 06:45:00", group_size="3"),
        _make_row(Year="2017", common_name="Fox", start_time="2017-06-02 22:00:00", group_size="1"),
        _make_row(common_name="Deer", start_time="2019-03-05 07:00:00", group_size="1",
                  Latitude="43.0", Longitude="-85.0", Region="South", array="B2"),
        _make_row(common_name="Coyote", start_time="2019-03-20 23:10:00", group_size="4",
                  Latitude="43.0", Longitude="-85.0", Region="South", array="B2"),
        _make_row(Year="2020", common_name="Raccoon", start_time="garbled", group_size="1",
                  Latitude="44.5", Longitude="-86.25", Region="South", array=""),
    ]


@pytest.fixture
def detections(raw_rows):
    """Six normalized records; the last one has an unparseable start time."""
    return normalize_rows(raw_rows)


@pytest.fixture
def dated(detections):
    """The five records with valid start times."""
    return detections.iloc[:5]
