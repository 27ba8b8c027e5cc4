"""Tests for conditional cross-tabulation."""

from crash_analysis.core.analysis import Dimension, cross_tabulate
from crash_analysis.core.analysis.crosstab import field_contains


def test_daylight_and_dark_counts_per_road_condition(sample_records):
    rows = cross_tabulate(sample_records)
    by_road = {row.value: row for row in rows}

    assert by_road["Ice"].counts == {"daylight_crashes": 1, "dark_crashes": 1}
    assert by_road["Ice"].total == 2
    assert by_road["Wet"].counts == {"daylight_crashes": 0, "dark_crashes": 1}
    assert by_road[None].counts == {"daylight_crashes": 0, "dark_crashes": 0}
    assert by_road[None].total == 1


def test_rows_ordered_by_total(sample_records):
    totals = [row.total for row in cross_tabulate(sample_records)]
    assert totals == sorted(totals, reverse=True)
    assert sum(totals) == len(sample_records)


def test_substring_match_is_case_sensitive(make_record):
    records = [
        make_record(light_condition="dark"),
        make_record(light_condition="Dark - Lighted"),
        make_record(light_condition=None),
    ]

    row = cross_tabulate(records)[0]

    assert row.counts["dark_crashes"] == 1
    assert row.counts["daylight_crashes"] == 0


def test_each_record_is_visited_once(make_record):
    calls = []

    def counting(record):
        calls.append(record)
        return True

    records = [make_record(road_surface_condition=r) for r in ("Dry", "Wet", "Dry", "Ice")]
    cross_tabulate(records, Dimension.ROAD_SURFACE_CONDITION, [("all", counting)])

    assert len(calls) == len(records)


def test_custom_dimension_and_predicates(make_record):
    records = [
        make_record(weather_condition="Rain", trafficway_desc="Two-Way, Divided"),
        make_record(weather_condition="Rain", trafficway_desc="One-Way"),
    ]

    rows = cross_tabulate(
        records, "weather", [("divided", field_contains("trafficway_desc", "Divided"))]
    )

    assert rows[0].as_dict() == {"weather_condition": "Rain", "divided": 1, "total_crashes": 2}
