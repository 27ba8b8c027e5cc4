"""
Summary materialization service.

Rebuilds the crash_summary table from the current crash records, keyed by
year, month and the road, weather and light conditions. Every run replaces
the previous contents in a single transaction.
"""

import argparse
from typing import Any, Iterable, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from crash_analysis.core.analysis import Aggregator, Dimension, Metric, sort_rows
from crash_analysis.core.logging import setup_logging
from crash_analysis.models.base import get_sync_db
from crash_analysis.models.crash_summary import CrashSummary
from crash_analysis.services.record_store import CrashRecordStore

logger = setup_logging("summary_materializer")

SUMMARY_DIMENSIONS = (
    Dimension.YEAR,
    Dimension.MONTH,
    Dimension.ROAD_SURFACE_CONDITION,
    Dimension.WEATHER_CONDITION,
    Dimension.LIGHT_CONDITION,
)

SUMMARY_METRICS = (
    Metric.COUNT,
    Metric.SUM_FATALITIES,
    Metric.SUM_INJURIES,
    Metric.AVG_SEVERITY,
)


class SummaryMaterializer:
    """
    Service for rebuilding the visualization summary table.
    """

    def __init__(
        self,
        aggregator: Optional[Aggregator] = None,
        record_store: Optional[CrashRecordStore] = None,
    ):
        """
        Initialize summary materializer.

        Args:
            aggregator: Aggregator to use; a default one if None
            record_store: Record store to read crashes from
        """
        self.aggregator = aggregator or Aggregator()
        self.record_store = record_store or CrashRecordStore()

    def build_rows(self, records: Iterable[Any]) -> List[CrashSummary]:
        """
        Aggregate records into unsaved CrashSummary rows in natural key order.

        Args:
            records: CrashRecord-shaped objects or mappings

        Returns:
            List of CrashSummary objects
        """
        rows = self.aggregator.aggregate(records, SUMMARY_DIMENSIONS, SUMMARY_METRICS)
        return [
            CrashSummary(
                year=row.key[0],
                month=row.key[1],
                road_condition=row.key[2],
                weather_condition=row.key[3],
                light_condition=row.key[4],
                crash_count=row.crash_count,
                fatalities=row.total_fatalities,
                injuries=row.total_injuries,
                avg_severity=row.avg_severity,
            )
            for row in sort_rows(rows, by="key")
        ]

    def materialize(self, db: Session, records: Optional[Iterable[Any]] = None) -> int:
        """
        Replace the summary table with a fresh aggregation.

        Args:
            db: Database session
            records: Records to summarize; loaded from the store if None

        Returns:
            Number of summary rows written
        """
        if records is None:
            records = self.record_store.load_records(db)

        summaries = self.build_rows(records)

        try:
            deleted = db.execute(delete(CrashSummary)).rowcount
            db.add_all(summaries)
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Error materializing crash summary: {e}")
            raise

        logger.info(
            f"Crash summary rebuilt: {len(summaries)} rows written, {deleted} previous rows removed"
        )
        return len(summaries)

    def load_summary(self, db: Session) -> List[CrashSummary]:
        """Read the materialized summary in natural key order."""
        stmt = select(CrashSummary).order_by(CrashSummary.id)
        return list(db.execute(stmt).scalars().all())


def main():
    """Main entry point for the summary materializer."""
    parser = argparse.ArgumentParser(description="Rebuild the crash_summary table")
    parser.add_argument(
        "--normalize",
        action="store_true",
        help="Clean line breaks in stored text fields before summarizing",
    )
    args = parser.parse_args()

    materializer = SummaryMaterializer()

    db_gen = get_sync_db()
    db = next(db_gen)
    try:
        if args.normalize:
            materializer.record_store.normalize_text(db)
        materializer.materialize(db)
    finally:
        try:
            next(db_gen)
        except StopIteration:
            pass


if __name__ == "__main__":
    main()
