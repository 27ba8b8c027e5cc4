"""
Grouped aggregation over crash records.

Records are partitioned by the values of one or more dimensions and each
group is reduced to an AggregateRow in a single pass. Null dimension values
form their own group; they are never dropped or replaced by a sentinel.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from crash_analysis.core.analysis.dimensions import Dimension, field_value, resolve_dimension
from crash_analysis.core.analysis.metrics import Metric, resolve_metric, round_ratio
from crash_analysis.core.exceptions import InvalidMetric

DimensionSelector = Union[Dimension, str]
MetricSelector = Union[Metric, str]

DEFAULT_METRICS: Tuple[Metric, ...] = (
    Metric.COUNT,
    Metric.SUM_FATALITIES,
    Metric.SUM_INJURIES,
)


@dataclass(frozen=True)
class AggregateRow:
    """
    Summary of one group of crash records.

    Attributes:
        dimensions: Dimensions the group was keyed by, in order
        key: Values of those dimensions for this group
        metrics: Metrics requested for this row
        crash_count: Number of records in the group (always filled)
        total_fatalities: Sum of fatalities
        total_injuries: Sum of injuries
        total_casualties: Sum of fatalities plus injuries
        avg_severity: Mean severity weight, 2 dp
        fatality_rate: Fatalities per 100 crashes, 2 dp
        risk_score: Mean of severity weight x time weight, 2 dp
    """

    dimensions: Tuple[Dimension, ...]
    key: Tuple[Any, ...]
    metrics: Tuple[Metric, ...]
    crash_count: int
    total_fatalities: Optional[int] = None
    total_injuries: Optional[int] = None
    total_casualties: Optional[int] = None
    avg_severity: Optional[Decimal] = None
    fatality_rate: Optional[Decimal] = None
    risk_score: Optional[Decimal] = None

    def value(self, dimension: DimensionSelector) -> Any:
        """Return the group's value for one of its dimensions."""
        return self.key[self.dimensions.index(resolve_dimension(dimension))]

    def as_dict(self) -> Dict[str, Any]:
        """Flatten into {dimension: value, metric field: value}."""
        data = {dimension.value: value for dimension, value in zip(self.dimensions, self.key)}
        data["crash_count"] = self.crash_count
        for metric in self.metrics:
            data[metric.field] = getattr(self, metric.field)
        return data


@dataclass
class _GroupTotals:
    """Running sums for one group."""

    count: int = 0
    fatalities: int = 0
    injuries: int = 0
    severity_sum: int = 0
    severity_n: int = 0
    weighted_sum: int = 0

    def add(self, record: Any) -> None:
        self.count += 1
        self.fatalities += field_value(record, "fatalities") or 0
        self.injuries += field_value(record, "injuries") or 0

        severity = field_value(record, "severity_weight")
        if severity is not None:
            self.severity_sum += severity
            self.severity_n += 1
            time_weight = field_value(record, "time_weight")
            if time_weight is not None:
                self.weighted_sum += severity * time_weight


class Aggregator:
    """
    Group crash records and compute derived metrics per group.
    """

    def __init__(self, default_metrics: Sequence[MetricSelector] = DEFAULT_METRICS):
        """
        Initialize aggregator.

        Args:
            default_metrics: Metrics computed when a call does not name any
        """
        self.default_metrics = tuple(resolve_metric(m) for m in default_metrics)

    def aggregate(
        self,
        records: Iterable[Any],
        group_by: Sequence[DimensionSelector],
        metrics: Optional[Iterable[MetricSelector]] = None,
        min_count: Optional[int] = None,
    ) -> List[AggregateRow]:
        """
        Aggregate records by the given dimensions.

        Args:
            records: CrashRecord-shaped objects or mappings
            group_by: Ordered dimension selectors
            metrics: Metric selectors; defaults to count and outcome sums
            min_count: Drop groups with fewer records than this

        Returns:
            One AggregateRow per group, in first-seen order. Empty input
            gives an empty list.

        Raises:
            InvalidDimension: If a selector does not name a known field
            InvalidMetric: If a metric name is not supported
        """
        dimensions = tuple(resolve_dimension(d) for d in group_by)
        requested = self.default_metrics if metrics is None else self._resolve_metrics(metrics)

        groups: Dict[Tuple[Any, ...], _GroupTotals] = {}
        for record in records:
            key = tuple(dimension.value_of(record) for dimension in dimensions)
            totals = groups.get(key)
            if totals is None:
                totals = groups[key] = _GroupTotals()
            totals.add(record)

        rows = []
        for key, totals in groups.items():
            if min_count is not None and totals.count < min_count:
                continue
            rows.append(self._build_row(dimensions, key, requested, totals))
        return rows

    @staticmethod
    def _resolve_metrics(metrics: Iterable[MetricSelector]) -> Tuple[Metric, ...]:
        resolved: List[Metric] = []
        for name in metrics:
            metric = resolve_metric(name)
            if metric not in resolved:
                resolved.append(metric)
        return tuple(resolved)

    @staticmethod
    def _build_row(
        dimensions: Tuple[Dimension, ...],
        key: Tuple[Any, ...],
        metrics: Tuple[Metric, ...],
        totals: _GroupTotals,
    ) -> AggregateRow:
        values: Dict[str, Any] = {}
        for metric in metrics:
            if metric is Metric.SUM_FATALITIES:
                values["total_fatalities"] = totals.fatalities
            elif metric is Metric.SUM_INJURIES:
                values["total_injuries"] = totals.injuries
            elif metric is Metric.SUM_CASUALTIES:
                values["total_casualties"] = totals.fatalities + totals.injuries
            elif metric is Metric.AVG_SEVERITY:
                values["avg_severity"] = round_ratio(totals.severity_sum, totals.severity_n)
            elif metric is Metric.FATALITY_RATE:
                values["fatality_rate"] = round_ratio(totals.fatalities * 100, totals.count)
            elif metric is Metric.RISK_SCORE:
                values["risk_score"] = round_ratio(totals.weighted_sum, totals.count)

        return AggregateRow(
            dimensions=dimensions,
            key=key,
            metrics=metrics,
            crash_count=totals.count,
            **values,
        )


SORT_FIELDS = ("crash_count", "fatality_rate", "risk_score", "key")


def _sort_nulls_last(rows: List[AggregateRow], value, descending: bool) -> List[AggregateRow]:
    present = [row for row in rows if value(row) is not None]
    missing = [row for row in rows if value(row) is None]
    return sorted(present, key=value, reverse=descending) + missing


def sort_rows(
    rows: Iterable[AggregateRow],
    by: str = "crash_count",
    descending: Optional[bool] = None,
) -> List[AggregateRow]:
    """
    Order aggregate rows.

    Rows whose sort value is None go last in either direction. For "key",
    that holds for each key component.

    Args:
        rows: Rows produced by Aggregator.aggregate
        by: "crash_count", "fatality_rate", "risk_score" or "key"
        descending: Defaults to True for metrics and False for "key"

    Returns:
        A new sorted list; ties keep their incoming order
    """
    if by not in SORT_FIELDS:
        raise InvalidMetric(by)

    rows = list(rows)

    if by == "key":
        width = max((len(row.key) for row in rows), default=0)
        # Stable sorts from the last component to the first give lexicographic order
        for i in reversed(range(width)):
            rows = _sort_nulls_last(rows, lambda row, i=i: row.key[i], bool(descending))
        return rows

    if descending is None:
        descending = True
    return _sort_nulls_last(rows, lambda row: getattr(row, by), descending)
