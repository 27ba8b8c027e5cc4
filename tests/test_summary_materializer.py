"""Tests for the crash_summary materializer and the record store."""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from crash_analysis.core.exceptions import InvalidRecord
from crash_analysis.models.crash_record import CrashRecord
from crash_analysis.models.crash_summary import CrashSummary
from crash_analysis.services.record_store import CrashRecordStore
from crash_analysis.services.summary_materializer import SummaryMaterializer


@pytest.fixture
def store():
    return CrashRecordStore()


@pytest.fixture
def populated_session(db_session, store, sample_records):
    store.add_records(db_session, sample_records)
    return db_session


def summary_snapshot(db_session):
    return [row.as_tuple() for row in SummaryMaterializer().load_summary(db_session)]


def test_materialize_writes_one_row_per_group(populated_session):
    written = SummaryMaterializer().materialize(populated_session)

    rows = summary_snapshot(populated_session)
    assert written == len(rows) == 5
    assert sum(row[5] for row in rows) == 5


def test_summary_rows_in_natural_key_order(populated_session):
    SummaryMaterializer().materialize(populated_session)

    rows = summary_snapshot(populated_session)

    assert rows[0] == (2022, 12, "Wet", "Rain", "Dark - Lighted", 1, 2, 0, 3.0)
    assert [(r[0], r[1]) for r in rows] == [(2022, 12), (2023, 1), (2023, 1), (2023, 2), (2023, 2)]
    # Null road condition sorts after named ones within the same month
    assert rows[-1][2] is None
    assert rows[-1][8] is None


def test_rerun_is_idempotent(populated_session):
    materializer = SummaryMaterializer()

    materializer.materialize(populated_session)
    first = summary_snapshot(populated_session)
    materializer.materialize(populated_session)
    second = summary_snapshot(populated_session)

    assert first == second
    assert populated_session.query(CrashSummary).count() == len(first)


def test_rerun_replaces_previous_content(populated_session, store, make_record):
    materializer = SummaryMaterializer()
    materializer.materialize(populated_session)

    store.add_records(
        populated_session,
        [make_record(report_date=date(2024, 6, 1), road_surface_condition="Ice")],
    )
    written = materializer.materialize(populated_session)

    rows = summary_snapshot(populated_session)
    assert written == len(rows) == 6
    assert sum(row[5] for row in rows) == 6


def test_materialize_empty_store(db_session):
    assert SummaryMaterializer().materialize(db_session) == 0
    assert summary_snapshot(db_session) == []


def test_materialize_from_given_records(db_session, make_record):
    records = [make_record(), make_record()]

    written = SummaryMaterializer().materialize(db_session, records=records)

    assert written == 1
    assert summary_snapshot(db_session)[0][5] == 2


def test_store_normalizes_stored_text(db_session, store, make_record):
    store.add_records(
        db_session,
        [
            make_record(weather_condition="Rain\n"),
            make_record(weather_condition="Rain", light_condition="Dark -\nLighted"),
            make_record(weather_condition="Rain"),
        ],
    )

    assert store.normalize_text(db_session) == 2
    assert store.normalize_text(db_session) == 0

    records = store.load_records(db_session)
    assert {r.weather_condition for r in records} == {"Rain"}
    assert records[1].light_condition == "Dark - Lighted"


def test_store_counts_and_fatal_records(populated_session, store):
    assert store.count(populated_session) == 5
    fatal = store.load_fatal_records(populated_session)
    assert [r.report_number for r in fatal] == ["R1", "R4"]
    assert all(isinstance(r, CrashRecord) for r in fatal)


def test_stored_avg_severity_keeps_two_decimals(populated_session):
    SummaryMaterializer().materialize(populated_session)
    populated_session.expire_all()

    stored = [row[8] for row in summary_snapshot(populated_session) if row[8] is not None]

    assert stored
    assert stored[0] == Decimal("3.00")
    assert all(value.as_tuple().exponent == -2 for value in stored)


def test_store_rejects_negative_outcome_counts(db_session, store, make_record):
    with pytest.raises(InvalidRecord, match="fatalities"):
        store.add_records(db_session, [make_record(), make_record(fatalities=-3)])
    with pytest.raises(InvalidRecord, match="injuries"):
        store.add_records(db_session, [make_record(injuries=-1)])

    assert store.count(db_session) == 0


def test_database_rejects_negative_outcome_counts(db_session, make_record):
    db_session.add(make_record(fatalities=-1))

    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()
