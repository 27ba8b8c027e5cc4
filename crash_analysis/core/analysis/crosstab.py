"""
Conditional counts per group.

One pass partitions the records by a dimension and bumps every matching
predicate counter for the record's group, so the cost stays linear in the
number of records however many predicates are requested.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Sequence, Tuple, Union

from crash_analysis.core.analysis.dimensions import Dimension, field_value, resolve_dimension

Predicate = Callable[[Any], bool]


def field_contains(field: str, substring: str) -> Predicate:
    """
    Build a case-sensitive substring predicate on a text field.

    Null or missing fields never match.
    """

    def predicate(record: Any) -> bool:
        value = field_value(record, field)
        return isinstance(value, str) and substring in value

    return predicate


def field_equals(field: str, expected: Any) -> Predicate:
    """Build an equality predicate on a record field."""

    def predicate(record: Any) -> bool:
        return field_value(record, field) == expected

    return predicate


# Daylight versus dark split of the light condition field
LIGHT_SPLITS: Tuple[Tuple[str, Predicate], ...] = (
    ("daylight_crashes", field_contains("light_condition", "Daylight")),
    ("dark_crashes", field_contains("light_condition", "Dark")),
)


@dataclass(frozen=True)
class CrossTabRow:
    """Conditional counts for one group."""

    dimension: Dimension
    value: Any
    counts: Dict[str, int]
    total: int

    def as_dict(self) -> Dict[str, Any]:
        data = {self.dimension.value: self.value}
        data.update(self.counts)
        data["total_crashes"] = self.total
        return data


def cross_tabulate(
    records: Iterable[Any],
    dimension: Union[Dimension, str] = Dimension.ROAD_SURFACE_CONDITION,
    predicates: Sequence[Tuple[str, Predicate]] = LIGHT_SPLITS,
) -> List[CrossTabRow]:
    """
    Count predicate matches per group alongside each group's total.

    Args:
        records: CrashRecord-shaped objects or mappings
        dimension: Primary grouping dimension
        predicates: (label, predicate) pairs, evaluated for every record

    Returns:
        Rows ordered by total descending, ties in first-seen order
    """
    dimension = resolve_dimension(dimension)
    labels = [label for label, _ in predicates]

    totals: Dict[Any, int] = {}
    counts: Dict[Any, List[int]] = {}
    for record in records:
        value = dimension.value_of(record)
        if value not in totals:
            totals[value] = 0
            counts[value] = [0] * len(predicates)
        totals[value] += 1
        group_counts = counts[value]
        for i, (_, predicate) in enumerate(predicates):
            if predicate(record):
                group_counts[i] += 1

    rows = [
        CrossTabRow(
            dimension=dimension,
            value=value,
            counts=dict(zip(labels, counts[value])),
            total=total,
        )
        for value, total in totals.items()
    ]
    return sorted(rows, key=lambda row: row.total, reverse=True)
