"""
CSV import of crash exports.

The export uses the upper-case headers of the source extract
(REPORT_NUMBER, REPORT_DATE, ROAD_SURFACE_CONDITION_DESC, ...). Rows are
loaded with pandas, renamed onto CrashRecord attributes, and blank cells
become None.
"""

from pathlib import Path
from typing import Dict, List, Sequence, Union

import pandas as pd

from crash_analysis.core.logging import setup_logging
from crash_analysis.models.crash_record import CrashRecord
from crash_analysis.services.record_store import validate_record

logger = setup_logging("csv_import")

# CSV header -> CrashRecord attribute
COLUMN_MAP: Dict[str, str] = {
    "REPORT_NUMBER": "report_number",
    "REPORT_SEQ_NO": "report_seq_no",
    "DOT_NUMBER": "dot_number",
    "REPORT_DATE": "report_date",
    "REPORT_STATE": "report_state",
    "FATALITIES": "fatalities",
    "INJURIES": "injuries",
    "TOW_AWAY": "tow_away",
    "HAZMAT_RELEASED": "hazmat_released",
    "TRAFFICWAY_DESC": "trafficway_desc",
    "ACCESS_CONTROL_DESC": "access_control_desc",
    "ROAD_SURFACE_CONDITION_DESC": "road_surface_condition",
    "WEATHER_CONDITION_DESC": "weather_condition",
    "LIGHT_CONDITION_DESC": "light_condition",
    "VEHICLE_ID_NUMBER": "vehicle_id_number",
    "VEHICLE_LICENSE_NUMBER": "vehicle_license_number",
    "VEHICLE_LICENSE_STATE": "vehicle_license_state",
    "SEVERITY_WEIGHT": "severity_weight",
    "TIME_WEIGHT": "time_weight",
    "CITATION_ISSUED_DESC": "citation_issued",
    "SEQ_NUM": "seq_num",
    "NOT_PREVENTABLE": "not_preventable",
}

INT_COLUMNS: Sequence[str] = (
    "report_seq_no",
    "fatalities",
    "injuries",
    "severity_weight",
    "time_weight",
    "seq_num",
)


def read_crash_csv(path: Union[str, Path]) -> pd.DataFrame:
    """
    Read a crash export with every cell as text.

    Only empty cells count as missing, so codes such as "NA" survive.
    Columns outside COLUMN_MAP are ignored.
    """
    df = pd.read_csv(
        path,
        dtype=str,
        keep_default_na=False,
        na_values=[""],
        usecols=lambda column: column in COLUMN_MAP,
    )
    logger.info(f"Read {len(df)} rows from {path}")
    return df


def frame_to_records(df: pd.DataFrame) -> List[CrashRecord]:
    """
    Convert a frame with export headers into CrashRecord objects.

    Args:
        df: Frame as returned by read_crash_csv

    Returns:
        One transient CrashRecord per row

    Raises:
        ValueError: If a count or date cannot be parsed, or
            fatalities/injuries is negative
        TypeError: If a count is not a whole number
    """
    df = df.rename(columns=COLUMN_MAP).reindex(columns=list(COLUMN_MAP.values())).astype(object)
    df = df.replace(r"^\s*$", pd.NA, regex=True)

    for column in INT_COLUMNS:
        df[column] = pd.to_numeric(df[column]).astype("Int64")
    df["fatalities"] = df["fatalities"].fillna(0)
    df["injuries"] = df["injuries"].fillna(0)
    df["report_date"] = pd.to_datetime(df["report_date"], format="mixed").dt.date

    df = df.astype(object).where(pd.notnull(df), None)
    return [validate_record(CrashRecord(**row)) for row in df.to_dict("records")]


def load_crash_csv(path: Union[str, Path]) -> List[CrashRecord]:
    """Read a crash export and convert it into CrashRecord objects."""
    return frame_to_records(read_crash_csv(path))
