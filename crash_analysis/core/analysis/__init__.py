"""In-memory analysis components for crash records."""

from crash_analysis.core.analysis.aggregator import AggregateRow, Aggregator, sort_rows
from crash_analysis.core.analysis.crosstab import CrossTabRow, cross_tabulate
from crash_analysis.core.analysis.dimensions import Dimension
from crash_analysis.core.analysis.metrics import Metric
from crash_analysis.core.analysis.normalizer import normalize_text_fields
from crash_analysis.core.analysis.risk_factors import (
    DEFAULT_RISK_FACTORS,
    RiskFactor,
    risk_factor_report,
)

__all__ = [
    "AggregateRow",
    "Aggregator",
    "CrossTabRow",
    "DEFAULT_RISK_FACTORS",
    "Dimension",
    "Metric",
    "RiskFactor",
    "cross_tabulate",
    "normalize_text_fields",
    "risk_factor_report",
    "sort_rows",
]
