#!/usr/bin/env python3
"""
Import a crash CSV export into the crash_records table.

The CSV uses the upper-case column headers of the source extract
(REPORT_NUMBER, REPORT_DATE, ROAD_SURFACE_CONDITION_DESC, ...). Tables are
created if missing and line breaks in text fields are cleaned after import.

Usage:
    python scripts/import_crashes.py --csv data/crash_data.csv

    # Replace existing rows and rebuild the summary table
    python scripts/import_crashes.py --csv data/crash_data.csv --replace --summarize
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import delete

from crash_analysis.models.base import get_sync_db, init_db
from crash_analysis.models.crash_record import CrashRecord
from crash_analysis.services.csv_import import load_crash_csv
from crash_analysis.services.record_store import CrashRecordStore
from crash_analysis.services.summary_materializer import SummaryMaterializer


def main():
    parser = argparse.ArgumentParser(description="Import crash CSV into the database")
    parser.add_argument("--csv", type=Path, required=True, help="Path to crash CSV export")
    parser.add_argument(
        "--replace", action="store_true", help="Delete existing crash records first"
    )
    parser.add_argument(
        "--summarize", action="store_true", help="Rebuild crash_summary after import"
    )
    args = parser.parse_args()

    if not args.csv.exists():
        print(f"❌ CSV not found: {args.csv}")
        sys.exit(1)

    init_db()

    try:
        records = load_crash_csv(args.csv)
    except (TypeError, ValueError) as e:
        print(f"❌ Could not read {args.csv}: {e}")
        sys.exit(1)
    print(f"Read {len(records)} rows from {args.csv}")

    store = CrashRecordStore()
    db_gen = get_sync_db()
    db = next(db_gen)
    try:
        if args.replace:
            db.execute(delete(CrashRecord))
        store.add_records(db, records)
        store.normalize_text(db)
        if args.summarize:
            rows = SummaryMaterializer(record_store=store).materialize(db)
            print(f"✅ Summary rebuilt with {rows} rows")
    finally:
        try:
            next(db_gen)
        except StopIteration:
            pass

    print(f"✅ Imported {len(records)} crash records")


if __name__ == "__main__":
    main()
