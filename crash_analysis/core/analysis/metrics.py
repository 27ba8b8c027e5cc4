"""
Derived metrics computed per group of crash records.

Ratio metrics are Decimals rounded half away from zero to exactly two
decimal places.
"""

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Dict, Optional, Union

from crash_analysis.core.exceptions import InvalidMetric


class Metric(str, Enum):
    """Supported per-group metrics."""

    COUNT = "count"
    SUM_FATALITIES = "sum_fatalities"
    SUM_INJURIES = "sum_injuries"
    SUM_CASUALTIES = "sum_casualties"
    AVG_SEVERITY = "avg_severity"
    FATALITY_RATE = "fatality_rate"
    RISK_SCORE = "risk_score"

    @property
    def field(self) -> str:
        """Attribute name of this metric on an AggregateRow."""
        return METRIC_FIELDS[self]


METRIC_FIELDS: Dict[Metric, str] = {
    Metric.COUNT: "crash_count",
    Metric.SUM_FATALITIES: "total_fatalities",
    Metric.SUM_INJURIES: "total_injuries",
    Metric.SUM_CASUALTIES: "total_casualties",
    Metric.AVG_SEVERITY: "avg_severity",
    Metric.FATALITY_RATE: "fatality_rate",
    Metric.RISK_SCORE: "risk_score",
}

# SQL-style spellings used in reports
METRIC_ALIASES: Dict[str, Metric] = {
    "count(*)": Metric.COUNT,
    "crash_count": Metric.COUNT,
    "sum(fatalities)": Metric.SUM_FATALITIES,
    "total_fatalities": Metric.SUM_FATALITIES,
    "sum(injuries)": Metric.SUM_INJURIES,
    "total_injuries": Metric.SUM_INJURIES,
    "sum(fatalities + injuries)": Metric.SUM_CASUALTIES,
    "total_casualties": Metric.SUM_CASUALTIES,
    "avg(severity_weight)": Metric.AVG_SEVERITY,
}


def resolve_metric(name: Union[Metric, str]) -> Metric:
    """
    Turn a metric name into a Metric.

    Raises:
        InvalidMetric: If the name is not a supported metric
    """
    if isinstance(name, Metric):
        return name
    if isinstance(name, str):
        key = name.strip().lower()
        try:
            return Metric(key)
        except ValueError:
            pass
        if key in METRIC_ALIASES:
            return METRIC_ALIASES[key]
    raise InvalidMetric(name)


def round_ratio(
    numerator: Union[int, float],
    denominator: Union[int, float],
    places: int = 2,
) -> Optional[Decimal]:
    """
    Divide and round half away from zero.

    Args:
        numerator: Dividend
        denominator: Divisor
        places: Decimal places to keep

    Returns:
        The quotient quantized to exactly `places` digits, or None when
        the denominator is zero
    """
    if not denominator:
        return None
    quotient = Decimal(numerator) / Decimal(denominator)
    exponent = Decimal(1).scaleb(-places)
    return quotient.quantize(exponent, rounding=ROUND_HALF_UP)
