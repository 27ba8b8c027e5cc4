"""Tests for grouped aggregation."""

from datetime import date
from decimal import Decimal

import pytest

from crash_analysis.core.analysis import Aggregator, Dimension, Metric, sort_rows
from crash_analysis.core.analysis.metrics import round_ratio
from crash_analysis.core.exceptions import CrashAnalysisError, InvalidDimension, InvalidMetric


@pytest.fixture
def aggregator():
    return Aggregator()


def test_single_group_fatality_rate(aggregator, make_record):
    records = [make_record(road_surface_condition="Ice", fatalities=f) for f in (1, 0, 2)]

    rows = aggregator.aggregate(
        records,
        [Dimension.ROAD_SURFACE_CONDITION],
        [Metric.COUNT, Metric.SUM_FATALITIES, Metric.FATALITY_RATE],
    )

    assert len(rows) == 1
    row = rows[0]
    assert row.value("road_surface_condition") == "Ice"
    assert row.crash_count == 3
    assert row.total_fatalities == 3
    assert row.fatality_rate == Decimal("100.00")
    assert str(row.fatality_rate) == "100.00"


def test_empty_input_returns_empty_list(aggregator):
    assert aggregator.aggregate([], ["road_surface_condition"]) == []
    assert aggregator.aggregate([], ["year", "month"], ["risk_score"], min_count=2) == []


def test_partition_covers_every_record(aggregator, sample_records):
    for dimension in Dimension:
        rows = aggregator.aggregate(sample_records, [dimension])
        assert sum(row.crash_count for row in rows) == len(sample_records)
        assert all(row.total_fatalities >= 0 and row.total_injuries >= 0 for row in rows)


def test_null_values_form_their_own_group(aggregator, make_record):
    records = [
        make_record(road_surface_condition=None),
        make_record(road_surface_condition=None),
        make_record(road_surface_condition="Dry"),
    ]

    rows = aggregator.aggregate(records, ["road_surface_condition"])
    by_key = {row.key: row.crash_count for row in rows}

    assert by_key == {(None,): 2, ("Dry",): 1}


def test_multi_dimension_keys(aggregator, sample_records):
    rows = aggregator.aggregate(sample_records, ["year", "month"])
    keys = {row.key for row in rows}

    assert keys == {(2023, 1), (2023, 2), (2022, 12)}


def test_average_severity_ignores_null_weights(aggregator, make_record):
    records = [
        make_record(severity_weight=1),
        make_record(severity_weight=2),
        make_record(severity_weight=2),
        make_record(severity_weight=None),
    ]

    row = aggregator.aggregate(records, ["weather_condition"], ["avg_severity"])[0]

    assert row.avg_severity == Decimal("1.67")
    assert row.crash_count == 4


def test_risk_score_divides_by_crash_count(aggregator, make_record):
    records = [
        make_record(severity_weight=2, time_weight=3),
        make_record(severity_weight=4, time_weight=1),
        make_record(severity_weight=5, time_weight=None),
    ]

    row = aggregator.aggregate(records, ["road_surface_condition"], ["risk_score"])[0]

    assert row.risk_score == Decimal("3.33")


def test_casualties_metric(aggregator, sample_records):
    rows = aggregator.aggregate(sample_records, ["weather_condition"], ["sum_casualties"])
    totals = {row.key[0]: row.total_casualties for row in rows}

    assert totals == {"Snow": 4, "Clear": 0, "Rain": 5}


def test_ratio_metrics_have_two_decimals(aggregator, sample_records):
    rows = aggregator.aggregate(
        sample_records, ["light_condition"], ["avg_severity", "fatality_rate", "risk_score"]
    )

    for row in rows:
        for value in (row.avg_severity, row.fatality_rate, row.risk_score):
            if value is not None:
                assert isinstance(value, Decimal)
                assert value.as_tuple().exponent == -2


def test_round_ratio_rounds_half_away_from_zero():
    assert round_ratio(1, 8) == Decimal("0.13")
    assert round_ratio(-1, 8) == Decimal("-0.13")
    assert round_ratio(5, 2, places=0) == Decimal("3")
    assert str(round_ratio(3, 1)) == "3.00"
    assert round_ratio(1, 0) is None


def test_min_count_filters_small_groups(aggregator, make_record):
    records = [
        make_record(road_surface_condition="Ice"),
        make_record(road_surface_condition="Ice"),
        make_record(road_surface_condition="Wet"),
    ]

    rows = aggregator.aggregate(records, ["road_surface_condition"], min_count=2)

    assert [row.key for row in rows] == [("Ice",)]


def test_sql_style_metric_names(aggregator, make_record):
    rows = aggregator.aggregate(
        [make_record(fatalities=1, injuries=2)],
        ["road"],
        ["count(*)", "sum(fatalities)", "sum(injuries)", "avg(severity_weight)"],
    )

    assert rows[0].as_dict() == {
        "road_surface_condition": "Dry",
        "crash_count": 1,
        "total_fatalities": 1,
        "total_injuries": 2,
        "avg_severity": Decimal("1.00"),
    }


def test_unknown_dimension_raises(aggregator, make_record):
    with pytest.raises(InvalidDimension):
        aggregator.aggregate([make_record()], ["vehicle_color"])


def test_unknown_metric_raises_before_reading_records(aggregator):
    def exploding_records():
        raise AssertionError("records must not be read")
        yield  # pragma: no cover

    with pytest.raises(InvalidMetric):
        aggregator.aggregate(exploding_records(), ["road"], ["median(severity)"])


def test_errors_share_a_base_class():
    assert issubclass(InvalidDimension, CrashAnalysisError)
    assert issubclass(InvalidMetric, ValueError)


def test_sort_rows(aggregator, make_record):
    records = [
        make_record(road_surface_condition="Wet", fatalities=1),
        make_record(road_surface_condition="Dry"),
        make_record(road_surface_condition="Dry"),
        make_record(road_surface_condition=None),
    ]
    rows = aggregator.aggregate(records, ["road"], ["count", "fatality_rate"])

    by_count = sort_rows(rows, by="crash_count")
    by_rate = sort_rows(rows, by="fatality_rate")
    by_key = sort_rows(rows, by="key")

    assert [r.key[0] for r in by_count] == ["Dry", "Wet", None]
    assert by_rate[0].key == ("Wet",)
    assert [r.key[0] for r in by_key] == ["Dry", "Wet", None]


def test_sort_rows_rejects_unknown_field(aggregator):
    with pytest.raises(InvalidMetric):
        sort_rows([], by="severity")


def test_mapping_records(aggregator):
    records = [
        {"report_date": date(2024, 3, 1), "weather_condition": "Fog", "fatalities": 1},
        {"report_date": date(2024, 3, 9), "weather_condition": "Fog", "fatalities": None},
    ]

    row = aggregator.aggregate(records, ["month", "weather"])[0]

    assert row.key == (3, "Fog")
    assert row.total_fatalities == 1


def test_sort_rows_by_key_descending_keeps_nulls_last(aggregator, make_record):
    records = [
        make_record(road_surface_condition=None),
        make_record(road_surface_condition="Dry"),
        make_record(road_surface_condition="Wet"),
    ]
    rows = aggregator.aggregate(records, ["road"])

    by_key = sort_rows(rows, by="key", descending=True)

    assert [r.key[0] for r in by_key] == ["Wet", "Dry", None]


def test_sort_rows_by_multi_part_key(aggregator, make_record):
    records = [
        make_record(report_date=None),
        make_record(report_date=date(2023, 2, 1)),
        make_record(report_date=date(2022, 12, 1)),
        make_record(report_date=date(2023, 1, 1)),
    ]
    rows = aggregator.aggregate(records, ["year", "month"])

    ascending = sort_rows(rows, by="key")
    descending = sort_rows(rows, by="key", descending=True)

    assert [r.key for r in ascending] == [(2022, 12), (2023, 1), (2023, 2), (None, None)]
    assert [r.key for r in descending] == [(2023, 2), (2023, 1), (2022, 12), (None, None)]
