"""Free-text cleanup applied to crash records before grouping."""

import re
from collections.abc import MutableMapping
from typing import Any, Iterable, Optional, Sequence

TEXT_FIELDS: Sequence[str] = (
    "trafficway_desc",
    "access_control_desc",
    "road_surface_condition",
    "weather_condition",
    "light_condition",
    "citation_issued",
)

_LINE_BREAKS = re.compile(r"[ \t]*(?:\r\n|\r|\n)+[ \t]*")


def normalize_text(value: Optional[str]) -> Optional[str]:
    """
    Collapse embedded line breaks into single spaces.

    A run of line breaks, with any spaces or tabs around it, becomes one
    space and the result is stripped, so "Rain\\n" becomes "Rain". Values
    without a line break, and non-string values, pass through untouched.
    """
    if not isinstance(value, str) or ("\n" not in value and "\r" not in value):
        return value
    return _LINE_BREAKS.sub(" ", value).strip()


def normalize_text_fields(records: Iterable[Any], fields: Sequence[str] = TEXT_FIELDS) -> None:
    """
    Normalize free-text fields of every record in place.

    Running it twice leaves the records as after the first run. Records
    lacking a field are skipped for that field.

    Args:
        records: CrashRecord objects or mutable mappings
        fields: Names of the text fields to clean
    """
    for record in records:
        is_mapping = isinstance(record, MutableMapping)
        for field in fields:
            if is_mapping:
                if field not in record:
                    continue
                current = record[field]
            else:
                if not hasattr(record, field):
                    continue
                current = getattr(record, field)

            cleaned = normalize_text(current)
            if cleaned == current:
                continue

            if is_mapping:
                record[field] = cleaned
            else:
                setattr(record, field, cleaned)
