"""
Pydantic schemas for API request/response models.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


# Report schemas
class ConditionReportRow(BaseModel):
    """One condition in a ROAD/WEATHER/LIGHT breakdown."""

    condition: str
    crash_count: int
    fatalities: int
    injuries: int
    avg_severity: Optional[float] = None


class ConditionReportResponse(BaseModel):
    """Category breakdown response."""

    category: str
    rows: List[ConditionReportRow]


class MonthlyTrendPoint(BaseModel):
    """Crash totals for one calendar month."""

    year: Optional[int] = None
    month: Optional[int] = None
    total_crashes: int
    total_fatalities: int
    total_injuries: int


class ConditionRiskRow(BaseModel):
    """Weighted risk score for a road + weather combination."""

    condition_combo: str
    crash_count: int
    total_casualties: int
    risk_score: float


class RoadLightRow(BaseModel):
    """Daylight and dark crash counts for one road condition."""

    road_condition: str
    daylight_crashes: int
    dark_crashes: int
    total_crashes: int


class RiskFactorResponse(BaseModel):
    """Prevalence and fatality share of a risk factor."""

    factor: str
    matching_crashes: int
    prevalence: float
    fatality_proportion: float


class DataQualityResponse(BaseModel):
    """Missing-value audit."""

    total_records: int
    missing_report_numbers: int
    missing_dates: int
    missing_trafficway: int
    missing_road_conditions: int


# Summary schemas
class CrashSummaryResponse(BaseModel):
    """Materialized summary row."""

    model_config = ConfigDict(from_attributes=True)

    year: Optional[int] = None
    month: Optional[int] = None
    road_condition: Optional[str] = None
    weather_condition: Optional[str] = None
    light_condition: Optional[str] = None
    crash_count: int
    fatalities: int
    injuries: int
    avg_severity: Optional[float] = None


class SummaryRefreshResponse(BaseModel):
    """Result of rebuilding the summary table."""

    rows_written: int
    refreshed_at: datetime


# Health check
class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    database: str
    version: str
