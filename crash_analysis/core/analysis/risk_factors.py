"""
Prevalence and fatality share of named risk factors.

Each factor is a labelled predicate over a crash record. Ratios are taken
over the whole record set, not per group.
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Sequence

from crash_analysis.core.analysis.crosstab import Predicate, field_contains, field_equals
from crash_analysis.core.analysis.dimensions import field_value
from crash_analysis.core.analysis.metrics import round_ratio

# Four decimal places, as the division results were reported in the source queries
RATIO_PLACES = 4


@dataclass(frozen=True)
class RiskFactor:
    """A named condition to measure against the full record set."""

    name: str
    predicate: Predicate
    description: str = ""


DEFAULT_RISK_FACTORS: Sequence[RiskFactor] = (
    RiskFactor(
        name="Ice Road Conditions",
        predicate=field_equals("road_surface_condition", "Ice"),
        description="Road surface condition is exactly 'Ice'",
    ),
    RiskFactor(
        name="Dark Conditions",
        predicate=field_contains("light_condition", "Dark"),
        description="Light condition mentions 'Dark'",
    ),
)


@dataclass(frozen=True)
class RiskFactorRow:
    """
    Result for one risk factor.

    Attributes:
        factor: Factor name
        matching_crashes: Records satisfying the predicate
        matching_fatalities: Fatalities among those records
        prevalence: matching_crashes / all records
        fatality_proportion: matching_fatalities / all fatalities
    """

    factor: str
    matching_crashes: int
    matching_fatalities: int
    prevalence: float
    fatality_proportion: float


def _proportion(part: int, whole: int) -> float:
    ratio = round_ratio(part, whole, RATIO_PLACES)
    return float(ratio) if ratio is not None else 0.0


def risk_factor_report(
    records: Iterable[Any],
    factors: Sequence[RiskFactor] = DEFAULT_RISK_FACTORS,
) -> List[RiskFactorRow]:
    """
    Measure every factor against the full record set in one pass.

    Zero records or zero total fatalities yield 0.0 for the affected ratio.

    Args:
        records: CrashRecord-shaped objects or mappings
        factors: Factors to evaluate, reported in this order

    Returns:
        One row per factor
    """
    total_crashes = 0
    total_fatalities = 0
    matched = [0] * len(factors)
    matched_fatalities = [0] * len(factors)

    for record in records:
        fatalities = field_value(record, "fatalities") or 0
        total_crashes += 1
        total_fatalities += fatalities
        for i, factor in enumerate(factors):
            if factor.predicate(record):
                matched[i] += 1
                matched_fatalities[i] += fatalities

    return [
        RiskFactorRow(
            factor=factor.name,
            matching_crashes=matched[i],
            matching_fatalities=matched_fatalities[i],
            prevalence=_proportion(matched[i], total_crashes),
            fatality_proportion=_proportion(matched_fatalities[i], total_fatalities),
        )
        for i, factor in enumerate(factors)
    ]
