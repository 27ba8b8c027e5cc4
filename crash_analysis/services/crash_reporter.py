"""
Crash reporting service.

Named analyses over a snapshot of crash records: condition breakdowns,
monthly trends, citation analysis, combined-condition risk ranking,
light-condition cross-tabulation and risk-factor prevalence.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from crash_analysis.core.analysis import (
    DEFAULT_RISK_FACTORS,
    AggregateRow,
    Aggregator,
    CrossTabRow,
    Dimension,
    Metric,
    RiskFactor,
    cross_tabulate,
    risk_factor_report,
    sort_rows,
)
from crash_analysis.core.analysis.dimensions import field_value
from crash_analysis.core.analysis.risk_factors import RiskFactorRow
from crash_analysis.core.config import get_settings
from crash_analysis.core.exceptions import UnknownCategory
from crash_analysis.core.logging import setup_logging

logger = setup_logging("crash_reporter")


class ConditionCategory(str, Enum):
    """Condition families a category report can break down by."""

    ROAD = "ROAD"
    WEATHER = "WEATHER"
    LIGHT = "LIGHT"

    @property
    def dimension(self) -> Dimension:
        return CATEGORY_DIMENSIONS[self]

    @classmethod
    def parse(cls, value: Union["ConditionCategory", str]) -> "ConditionCategory":
        """
        Resolve a category name, case-insensitively.

        Raises:
            UnknownCategory: For anything outside ROAD, WEATHER and LIGHT
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value.strip().upper() in cls.__members__:
            return cls[value.strip().upper()]
        raise UnknownCategory(value)


CATEGORY_DIMENSIONS: Dict[ConditionCategory, Dimension] = {
    ConditionCategory.ROAD: Dimension.ROAD_SURFACE_CONDITION,
    ConditionCategory.WEATHER: Dimension.WEATHER_CONDITION,
    ConditionCategory.LIGHT: Dimension.LIGHT_CONDITION,
}

CATEGORY_METRICS = (
    Metric.COUNT,
    Metric.SUM_FATALITIES,
    Metric.SUM_INJURIES,
    Metric.AVG_SEVERITY,
)


@dataclass(frozen=True)
class DataQualityReport:
    """Missing-value audit of the record set."""

    total_records: int
    missing_report_numbers: int
    missing_dates: int
    missing_trafficway: int
    missing_road_conditions: int


def report_by_category(
    records: Iterable[Any],
    category: Union[ConditionCategory, str],
    aggregator: Optional[Aggregator] = None,
) -> List[AggregateRow]:
    """
    Break crashes down by one condition family.

    Args:
        records: CrashRecord-shaped objects or mappings
        category: ROAD, WEATHER or LIGHT (enum member or name)
        aggregator: Aggregator to use; a default one if None

    Returns:
        Rows with crash_count, total_fatalities, total_injuries and
        avg_severity, ordered by crash_count descending

    Raises:
        UnknownCategory: If the category is not recognized
    """
    category = ConditionCategory.parse(category)
    aggregator = aggregator or Aggregator()
    rows = aggregator.aggregate(records, [category.dimension], CATEGORY_METRICS)
    return sort_rows(rows, by="crash_count")


def fatal_crashes(records: Iterable[Any]) -> List[Any]:
    """Records with at least one fatality."""
    return [r for r in records if (field_value(r, "fatalities") or 0) > 0]


def condition_combo(row: AggregateRow, unknown_label: str = "Unknown") -> str:
    """Label a (road, weather) row as "road + weather"."""
    return " + ".join(unknown_label if value is None else str(value) for value in row.key)


class CrashReporter:
    """
    Service bundling the exploratory crash analyses.
    """

    def __init__(
        self,
        aggregator: Optional[Aggregator] = None,
        risk_min_crash_count: Optional[int] = None,
        risk_factors: Sequence[RiskFactor] = DEFAULT_RISK_FACTORS,
    ):
        """
        Initialize crash reporter.

        Args:
            aggregator: Aggregator to use; a default one if None
            risk_min_crash_count: Minimum group size for the risk ranking
            risk_factors: Factors measured by the prevalence report
        """
        self.settings = get_settings()
        self.aggregator = aggregator or Aggregator()
        self.risk_min_crash_count = (
            risk_min_crash_count
            if risk_min_crash_count is not None
            else self.settings.risk_min_crash_count
        )
        self.risk_factors = tuple(risk_factors)

        logger.debug(
            f"CrashReporter initialized (risk_min_crash_count={self.risk_min_crash_count}, "
            f"factors={len(self.risk_factors)})"
        )

    def report_by_category(
        self, records: Iterable[Any], category: Union[ConditionCategory, str]
    ) -> List[AggregateRow]:
        """Per-condition breakdown for ROAD, WEATHER or LIGHT."""
        rows = report_by_category(records, category, self.aggregator)
        logger.info(f"Category report {ConditionCategory.parse(category).value}: {len(rows)} groups")
        return rows

    def monthly_trends(self, records: Iterable[Any]) -> List[AggregateRow]:
        """Crashes, fatalities and injuries per (year, month), in calendar order."""
        rows = self.aggregator.aggregate(records, [Dimension.YEAR, Dimension.MONTH])
        return sort_rows(rows, by="key")

    def road_condition_impact(self, records: Iterable[Any]) -> List[AggregateRow]:
        """Outcomes and mean severity per road surface condition."""
        rows = self.aggregator.aggregate(
            records, [Dimension.ROAD_SURFACE_CONDITION], CATEGORY_METRICS
        )
        return sort_rows(rows, by="crash_count")

    def light_condition_severity(self, records: Iterable[Any]) -> List[AggregateRow]:
        """Fatality rate per light condition, highest first."""
        rows = self.aggregator.aggregate(
            records,
            [Dimension.LIGHT_CONDITION],
            [Metric.COUNT, Metric.SUM_FATALITIES, Metric.SUM_INJURIES, Metric.FATALITY_RATE],
        )
        return sort_rows(rows, by="fatality_rate")

    def citation_analysis(self, records: Iterable[Any]) -> List[AggregateRow]:
        """Outcomes per citation status."""
        rows = self.aggregator.aggregate(
            records,
            [Dimension.CITATION_ISSUED],
            [Metric.COUNT, Metric.SUM_FATALITIES, Metric.AVG_SEVERITY],
        )
        return sort_rows(rows, by="crash_count")

    def crashes_by_conditions(self, records: Iterable[Any]) -> List[AggregateRow]:
        """Outcomes per (road surface, weather) pair."""
        return self.aggregator.aggregate(
            records, [Dimension.ROAD_SURFACE_CONDITION, Dimension.WEATHER_CONDITION]
        )

    def condition_risk_ranking(self, records: Iterable[Any]) -> List[AggregateRow]:
        """
        Rank (road surface, weather) pairs by weighted risk score.

        Groups smaller than risk_min_crash_count are left out.

        Args:
            records: CrashRecord-shaped objects or mappings

        Returns:
            Rows with crash_count, total_casualties and risk_score, highest
            risk first
        """
        rows = self.aggregator.aggregate(
            records,
            [Dimension.ROAD_SURFACE_CONDITION, Dimension.WEATHER_CONDITION],
            [Metric.COUNT, Metric.SUM_CASUALTIES, Metric.RISK_SCORE],
            min_count=self.risk_min_crash_count,
        )
        return sort_rows(rows, by="risk_score")

    def road_light_crosstab(self, records: Iterable[Any]) -> List[CrossTabRow]:
        """Daylight and dark crash counts per road surface condition."""
        return cross_tabulate(records, Dimension.ROAD_SURFACE_CONDITION)

    def risk_factor_prevalence(self, records: Iterable[Any]) -> List[RiskFactorRow]:
        """Prevalence and fatality share of each configured risk factor."""
        return risk_factor_report(records, self.risk_factors)

    def data_quality(self, records: Iterable[Any]) -> DataQualityReport:
        """
        Count missing values in the fields the analyses depend on.

        Args:
            records: CrashRecord-shaped objects or mappings

        Returns:
            DataQualityReport with per-field missing counts
        """
        total = missing_numbers = missing_dates = missing_trafficway = missing_road = 0
        for record in records:
            total += 1
            if field_value(record, "report_number") is None:
                missing_numbers += 1
            if field_value(record, "report_date") is None:
                missing_dates += 1
            if field_value(record, "trafficway_desc") is None:
                missing_trafficway += 1
            if field_value(record, "road_surface_condition") is None:
                missing_road += 1

        if missing_dates:
            logger.warning(f"{missing_dates} records have no report date")

        return DataQualityReport(
            total_records=total,
            missing_report_numbers=missing_numbers,
            missing_dates=missing_dates,
            missing_trafficway=missing_trafficway,
            missing_road_conditions=missing_road,
        )
