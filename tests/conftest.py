"""Shared fixtures for crash analysis tests."""

import os

# Settings are cached on first use, so point them at SQLite before any import
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite://")
os.environ.setdefault("LOG_FILE_PATH", "")
os.environ.setdefault("ENVIRONMENT", "test")

from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from crash_analysis.models.base import init_db
from crash_analysis.models.crash_record import CrashRecord


@pytest.fixture
def make_record():
    """Factory for transient CrashRecord objects with sensible defaults."""

    def _make(**overrides) -> CrashRecord:
        values = {
            "report_number": "MD0000001",
            "report_seq_no": 1,
            "report_date": date(2023, 1, 15),
            "fatalities": 0,
            "injuries": 0,
            "road_surface_condition": "Dry",
            "weather_condition": "Clear",
            "light_condition": "Daylight",
            "citation_issued": "No",
            "trafficway_desc": "Two-Way, Not Divided",
            "access_control_desc": "No Control",
            "severity_weight": 1,
            "time_weight": 1,
        }
        values.update(overrides)
        return CrashRecord(**values)

    return _make


@pytest.fixture
def sample_records(make_record):
    """A small mixed record set covering every report."""
    return [
        make_record(report_number="R1", report_date=date(2023, 1, 3), fatalities=1, injuries=2,
                    road_surface_condition="Ice", weather_condition="Snow",
                    light_condition="Dark - Not Lighted", severity_weight=2, time_weight=3),
        make_record(report_number="R2", report_date=date(2023, 1, 20), fatalities=0, injuries=1,
                    road_surface_condition="Ice", weather_condition="Snow",
                    light_condition="Daylight", severity_weight=4, time_weight=1),
        make_record(report_number="R3", report_date=date(2023, 2, 7), fatalities=0, injuries=0,
                    road_surface_condition="Dry", weather_condition="Clear",
                    light_condition="Daylight", severity_weight=1, time_weight=1,
                    citation_issued="Yes"),
        make_record(report_number="R4", report_date=date(2022, 12, 30), fatalities=2, injuries=0,
                    road_surface_condition="Wet", weather_condition="Rain",
                    light_condition="Dark - Lighted", severity_weight=3, time_weight=2),
        make_record(report_number="R5", report_date=date(2023, 2, 11), fatalities=0, injuries=3,
                    road_surface_condition=None, weather_condition="Rain",
                    light_condition="Dawn", severity_weight=None, time_weight=2),
    ]


@pytest.fixture
def db_session():
    """In-memory SQLite session with all tables created."""
    engine = create_engine("sqlite://")
    init_db(engine)
    session = Session(engine)
    try:
        yield session
    finally:
        session.close()
        engine.dispose()
