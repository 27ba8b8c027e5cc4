"""
FastAPI application main module.

Provides REST API endpoints for crash condition reports, trends, risk
rankings and the materialized visualization summary.
"""

from dataclasses import asdict
from datetime import datetime
from typing import Any, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, status
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from crash_analysis.api.dependencies import (
    get_async_db_session,
    get_crash_records,
    verify_token,
)
from crash_analysis.api.schemas import (
    ConditionReportResponse,
    ConditionReportRow,
    ConditionRiskRow,
    CrashSummaryResponse,
    DataQualityResponse,
    HealthResponse,
    MonthlyTrendPoint,
    RiskFactorResponse,
    RoadLightRow,
    SummaryRefreshResponse,
)
from crash_analysis.core.config import get_settings
from crash_analysis.core.exceptions import UnknownCategory
from crash_analysis.models.crash_record import CrashRecord
from crash_analysis.models.crash_summary import CrashSummary
from crash_analysis.services.crash_reporter import ConditionCategory, CrashReporter, condition_combo
from crash_analysis.services.summary_materializer import SummaryMaterializer

settings = get_settings()
reporter = CrashReporter()
materializer = SummaryMaterializer()

app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    description="API for crash condition reports and visualization summaries",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _label(value: Any) -> str:
    return settings.unknown_label if value is None else str(value)


# Health check endpoint (no auth required)
@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(db: AsyncSession = Depends(get_async_db_session)):
    """
    Health check endpoint.

    Returns system status and database connectivity.
    """
    try:
        await db.execute(select(1))
        db_status = "connected"
    except Exception:
        db_status = "disconnected"

    return HealthResponse(
        status="healthy" if db_status == "connected" else "unhealthy",
        timestamp=datetime.now(),
        database=db_status,
        version=settings.api_version,
    )


# Report endpoints
@app.get(
    "/api/reports/conditions/{category}",
    response_model=ConditionReportResponse,
    dependencies=[Depends(verify_token)],
    tags=["Reports"],
)
async def get_condition_report(
    category: str,
    records: List[CrashRecord] = Depends(get_crash_records),
):
    """Crash breakdown by ROAD, WEATHER or LIGHT condition."""
    try:
        parsed = ConditionCategory.parse(category)
    except UnknownCategory as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    rows = reporter.report_by_category(records, parsed)
    return ConditionReportResponse(
        category=parsed.value,
        rows=[
            ConditionReportRow(
                condition=_label(row.key[0]),
                crash_count=row.crash_count,
                fatalities=row.total_fatalities,
                injuries=row.total_injuries,
                avg_severity=row.avg_severity,
            )
            for row in rows
        ],
    )


@app.get(
    "/api/reports/monthly",
    response_model=List[MonthlyTrendPoint],
    dependencies=[Depends(verify_token)],
    tags=["Reports"],
)
async def get_monthly_trends(records: List[CrashRecord] = Depends(get_crash_records)):
    """Crash totals per calendar month."""
    return [
        MonthlyTrendPoint(
            year=row.key[0],
            month=row.key[1],
            total_crashes=row.crash_count,
            total_fatalities=row.total_fatalities,
            total_injuries=row.total_injuries,
        )
        for row in reporter.monthly_trends(records)
    ]


@app.get(
    "/api/reports/risk-ranking",
    response_model=List[ConditionRiskRow],
    dependencies=[Depends(verify_token)],
    tags=["Reports"],
)
async def get_risk_ranking(
    limit: int = Query(25, ge=1, le=500, description="Maximum number of results"),
    records: List[CrashRecord] = Depends(get_crash_records),
):
    """Road + weather combinations ranked by weighted risk score."""
    rows = reporter.condition_risk_ranking(records)[:limit]
    return [
        ConditionRiskRow(
            condition_combo=condition_combo(row, settings.unknown_label),
            crash_count=row.crash_count,
            total_casualties=row.total_casualties,
            risk_score=row.risk_score,
        )
        for row in rows
    ]


@app.get(
    "/api/reports/road-light",
    response_model=List[RoadLightRow],
    dependencies=[Depends(verify_token)],
    tags=["Reports"],
)
async def get_road_light_crosstab(records: List[CrashRecord] = Depends(get_crash_records)):
    """Daylight versus dark crashes per road surface condition."""
    return [
        RoadLightRow(
            road_condition=_label(row.value),
            daylight_crashes=row.counts["daylight_crashes"],
            dark_crashes=row.counts["dark_crashes"],
            total_crashes=row.total,
        )
        for row in reporter.road_light_crosstab(records)
    ]


@app.get(
    "/api/reports/risk-factors",
    response_model=List[RiskFactorResponse],
    dependencies=[Depends(verify_token)],
    tags=["Reports"],
)
async def get_risk_factors(records: List[CrashRecord] = Depends(get_crash_records)):
    """Prevalence and fatality proportion of each configured risk factor."""
    return [
        RiskFactorResponse(
            factor=row.factor,
            matching_crashes=row.matching_crashes,
            prevalence=row.prevalence,
            fatality_proportion=row.fatality_proportion,
        )
        for row in reporter.risk_factor_prevalence(records)
    ]


@app.get(
    "/api/reports/data-quality",
    response_model=DataQualityResponse,
    dependencies=[Depends(verify_token)],
    tags=["Reports"],
)
async def get_data_quality(records: List[CrashRecord] = Depends(get_crash_records)):
    """Missing-value counts for the fields the reports depend on."""
    report = reporter.data_quality(records)
    return DataQualityResponse(**asdict(report))


# Summary endpoints
@app.get(
    "/api/summary",
    response_model=List[CrashSummaryResponse],
    dependencies=[Depends(verify_token)],
    tags=["Summary"],
)
async def list_summary(
    year: Optional[int] = Query(None, description="Filter by year"),
    limit: int = Query(1000, ge=1, le=10000),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_async_db_session),
):
    """List materialized summary rows."""
    stmt = select(CrashSummary)
    if year is not None:
        stmt = stmt.where(CrashSummary.year == year)

    stmt = stmt.order_by(CrashSummary.id).limit(limit).offset(offset)

    result = await db.execute(stmt)
    return result.scalars().all()


@app.post(
    "/api/summary/refresh",
    response_model=SummaryRefreshResponse,
    dependencies=[Depends(verify_token)],
    tags=["Summary"],
)
async def refresh_summary(db: AsyncSession = Depends(get_async_db_session)):
    """Rebuild the summary table from the current crash records."""
    rows_written = await db.run_sync(lambda session: materializer.materialize(session))
    return SummaryRefreshResponse(rows_written=rows_written, refreshed_at=datetime.now())


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
