#!/usr/bin/env python3
"""
Print crash analysis reports from the database.

Usage:
    # Breakdown by road surface condition
    python scripts/run_analysis.py category ROAD

    # Any named report
    python scripts/run_analysis.py monthly
    python scripts/run_analysis.py risk-ranking
    python scripts/run_analysis.py road-light
    python scripts/run_analysis.py risk-factors
    python scripts/run_analysis.py quality

    # Every report in sequence
    python scripts/run_analysis.py all
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from crash_analysis.core.config import get_settings
from crash_analysis.core.exceptions import UnknownCategory
from crash_analysis.models.base import get_sync_db
from crash_analysis.services.crash_reporter import ConditionCategory, CrashReporter, condition_combo
from crash_analysis.services.record_store import CrashRecordStore

REPORTS = [
    "category",
    "monthly",
    "road-impact",
    "light-severity",
    "citations",
    "risk-ranking",
    "road-light",
    "risk-factors",
    "quality",
    "all",
]


def print_table(title: str, rows: List[Dict[str, Any]]) -> None:
    """Print rows as a fixed-width table."""
    print("\n" + "=" * 80)
    print(title)
    print("=" * 80)

    if not rows:
        print("(no rows)")
        return

    columns = list(rows[0].keys())
    widths = {
        c: max(len(c), *(len(str(r.get(c))) for r in rows)) for c in columns
    }
    print("  ".join(c.ljust(widths[c]) for c in columns))
    print("  ".join("-" * widths[c] for c in columns))
    for row in rows:
        print("  ".join(str(row.get(c)).ljust(widths[c]) for c in columns))


def labelled(rows, unknown_label: str) -> List[Dict[str, Any]]:
    """Flatten aggregate rows, labelling null group values."""
    out = []
    for row in rows:
        data = row.as_dict()
        for dimension in row.dimensions:
            if data[dimension.value] is None:
                data[dimension.value] = unknown_label
        out.append(data)
    return out


def run_report(name: str, reporter: CrashReporter, records, category: str, unknown: str) -> None:
    if name == "category":
        parsed = ConditionCategory.parse(category)
        print_table(
            f"CRASHES BY {parsed.value} CONDITION",
            labelled(reporter.report_by_category(records, parsed), unknown),
        )
    elif name == "monthly":
        print_table("MONTHLY CRASH TRENDS", labelled(reporter.monthly_trends(records), unknown))
    elif name == "road-impact":
        print_table(
            "ROAD SURFACE CONDITION IMPACT",
            labelled(reporter.road_condition_impact(records), unknown),
        )
    elif name == "light-severity":
        print_table(
            "LIGHT CONDITION SEVERITY",
            labelled(reporter.light_condition_severity(records), unknown),
        )
    elif name == "citations":
        print_table("CITATION ANALYSIS", labelled(reporter.citation_analysis(records), unknown))
    elif name == "risk-ranking":
        rows = [
            {
                "condition_combo": condition_combo(row, unknown),
                "crash_count": row.crash_count,
                "total_casualties": row.total_casualties,
                "risk_score": row.risk_score,
            }
            for row in reporter.condition_risk_ranking(records)
        ]
        print_table("ROAD + WEATHER RISK RANKING", rows)
    elif name == "road-light":
        rows = []
        for row in reporter.road_light_crosstab(records):
            data = row.as_dict()
            if row.value is None:
                data[row.dimension.value] = unknown
            rows.append(data)
        print_table("ROAD CONDITION x LIGHT", rows)
    elif name == "risk-factors":
        rows = [r.__dict__ for r in reporter.risk_factor_prevalence(records)]
        print_table("RISK FACTOR PREVALENCE", rows)
    elif name == "quality":
        print_table("DATA QUALITY", [reporter.data_quality(records).__dict__])


def main():
    parser = argparse.ArgumentParser(description="Print crash analysis reports")
    parser.add_argument("report", choices=REPORTS, help="Report to print")
    parser.add_argument(
        "category",
        nargs="?",
        default="ROAD",
        help="ROAD, WEATHER or LIGHT (for the category report)",
    )
    args = parser.parse_args()

    settings = get_settings()
    reporter = CrashReporter()

    db_gen = get_sync_db()
    db = next(db_gen)
    try:
        records = CrashRecordStore().load_records(db)
        names = [r for r in REPORTS if r != "all"] if args.report == "all" else [args.report]
        for name in names:
            run_report(name, reporter, records, args.category, settings.unknown_label)
    except UnknownCategory as e:
        print(f"❌ {e}")
        sys.exit(2)
    finally:
        try:
            next(db_gen)
        except StopIteration:
            pass


if __name__ == "__main__":
    main()
