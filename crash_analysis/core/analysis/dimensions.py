"""
Group-by dimensions for crash records.

A dimension names a categorical value that can be read off a record: either a
stored text column or a date part of ``report_date``.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, Dict, Union

from crash_analysis.core.exceptions import InvalidDimension


def field_value(record: Any, field: str) -> Any:
    """
    Read a field from an ORM object, plain object or mapping.

    Missing fields read as None.
    """
    if isinstance(record, Mapping):
        return record.get(field)
    return getattr(record, field, None)


class Dimension(str, Enum):
    """Known grouping dimensions. Values are the record field they read."""

    YEAR = "year"
    MONTH = "month"
    ROAD_SURFACE_CONDITION = "road_surface_condition"
    WEATHER_CONDITION = "weather_condition"
    LIGHT_CONDITION = "light_condition"
    CITATION_ISSUED = "citation_issued"
    TRAFFICWAY = "trafficway_desc"
    ACCESS_CONTROL = "access_control_desc"
    REPORT_STATE = "report_state"

    def value_of(self, record: Any) -> Any:
        """
        Extract this dimension's value from a record.

        Args:
            record: CrashRecord-shaped object or mapping

        Returns:
            The grouping value, or None when the source field is empty
        """
        if self in (Dimension.YEAR, Dimension.MONTH):
            report_date = field_value(record, "report_date")
            if report_date is None:
                return None
            return report_date.year if self is Dimension.YEAR else report_date.month
        return field_value(record, self.value)


# Short names accepted alongside the enum names and field names
DIMENSION_ALIASES: Dict[str, Dimension] = {
    "road": Dimension.ROAD_SURFACE_CONDITION,
    "road_condition": Dimension.ROAD_SURFACE_CONDITION,
    "weather": Dimension.WEATHER_CONDITION,
    "light": Dimension.LIGHT_CONDITION,
    "citation": Dimension.CITATION_ISSUED,
    "trafficway": Dimension.TRAFFICWAY,
    "access_control": Dimension.ACCESS_CONTROL,
    "state": Dimension.REPORT_STATE,
}


def resolve_dimension(selector: Union[Dimension, str]) -> Dimension:
    """
    Turn a selector into a Dimension.

    Args:
        selector: Dimension member, field name, enum name or alias

    Returns:
        The matching Dimension

    Raises:
        InvalidDimension: If the selector does not name a known field
    """
    if isinstance(selector, Dimension):
        return selector
    if isinstance(selector, str):
        key = selector.strip()
        try:
            return Dimension(key.lower())
        except ValueError:
            pass
        if key.upper() in Dimension.__members__:
            return Dimension[key.upper()]
        if key.lower() in DIMENSION_ALIASES:
            return DIMENSION_ALIASES[key.lower()]
    raise InvalidDimension(selector)
