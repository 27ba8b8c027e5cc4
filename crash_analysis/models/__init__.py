"""Database models for the crash analysis project."""

from crash_analysis.models.crash_record import CrashRecord
from crash_analysis.models.crash_summary import CrashSummary

__all__ = ["CrashRecord", "CrashSummary"]
