"""Services that read crash records and produce reports."""

from crash_analysis.services.crash_reporter import (
    ConditionCategory,
    CrashReporter,
    report_by_category,
)
from crash_analysis.services.csv_import import load_crash_csv
from crash_analysis.services.record_store import CrashRecordStore
from crash_analysis.services.summary_materializer import SummaryMaterializer

__all__ = [
    "ConditionCategory",
    "CrashRecordStore",
    "CrashReporter",
    "SummaryMaterializer",
    "load_crash_csv",
    "report_by_category",
]
