"""Tests for free-text normalization."""

from crash_analysis.core.analysis import Aggregator, normalize_text_fields
from crash_analysis.core.analysis.normalizer import normalize_text


def test_normalize_text_replaces_line_breaks():
    assert normalize_text("Dark -\nNot Lighted") == "Dark - Not Lighted"
    assert normalize_text("Two-Way,\r\nDivided") == "Two-Way, Divided"
    assert normalize_text("Rain\n") == "Rain"


def test_normalize_text_passes_through_non_strings():
    assert normalize_text(None) is None
    assert normalize_text(3) == 3


def test_trailing_newline_groups_with_clean_value(make_record):
    records = [
        make_record(weather_condition="Rain\n"),
        make_record(weather_condition="Rain"),
    ]

    normalize_text_fields(records)
    rows = Aggregator().aggregate(records, ["weather_condition"])

    assert len(rows) == 1
    assert rows[0].key == ("Rain",)
    assert rows[0].crash_count == 2


def test_normalization_is_idempotent(make_record):
    records = [make_record(light_condition="Dark -\n\nLighted", trafficway_desc="One\nWay")]

    normalize_text_fields(records)
    once = (records[0].light_condition, records[0].trafficway_desc)
    normalize_text_fields(records)

    assert (records[0].light_condition, records[0].trafficway_desc) == once
    assert once == ("Dark - Lighted", "One Way")


def test_mapping_records_and_missing_fields():
    records = [{"weather_condition": "Snow\n"}, {"road_surface_condition": None}]

    normalize_text_fields(records)

    assert records[0] == {"weather_condition": "Snow"}
    assert records[1] == {"road_surface_condition": None}


def test_values_without_line_breaks_are_untouched():
    assert normalize_text("  Dry  ") == "  Dry  "
    assert normalize_text("Dark  -  Lighted") == "Dark  -  Lighted"
    assert normalize_text("") == ""


def test_line_break_runs_collapse_to_one_space():
    assert normalize_text("Dark - \t\r\n\n  Lighted") == "Dark - Lighted"
    assert normalize_text("\nSnow\n") == "Snow"
