"""
Record store access.

Loads crash records from the database as an immutable snapshot for one
analysis run, and applies the one-time text cleanup to stored rows.
"""

from typing import Iterable, List

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from crash_analysis.core.analysis.normalizer import TEXT_FIELDS, normalize_text
from crash_analysis.core.exceptions import InvalidRecord
from crash_analysis.core.logging import setup_logging
from crash_analysis.models.crash_record import CrashRecord

logger = setup_logging("record_store")

OUTCOME_FIELDS = ("fatalities", "injuries")


def validate_record(record: CrashRecord) -> CrashRecord:
    """
    Check outcome counts before a record is stored.

    Raises:
        InvalidRecord: If fatalities or injuries is negative
    """
    for field in OUTCOME_FIELDS:
        value = getattr(record, field)
        if value is not None and value < 0:
            raise InvalidRecord(record.report_number, f"{field} must be >= 0, got {value}")
    return record


class CrashRecordStore:
    """
    Read and clean crash records in the database.
    """

    def load_records(self, db: Session) -> List[CrashRecord]:
        """
        Load every crash record.

        Args:
            db: Database session

        Returns:
            List of CrashRecord objects
        """
        stmt = select(CrashRecord).order_by(CrashRecord.id)
        records = list(db.execute(stmt).scalars().all())
        logger.info(f"Loaded {len(records)} crash records")
        return records

    def load_fatal_records(self, db: Session) -> List[CrashRecord]:
        """Load records with at least one fatality."""
        stmt = select(CrashRecord).where(CrashRecord.fatalities > 0).order_by(CrashRecord.id)
        return list(db.execute(stmt).scalars().all())

    def count(self, db: Session) -> int:
        """Count stored crash records."""
        return db.execute(select(func.count(CrashRecord.id))).scalar() or 0

    def add_records(self, db: Session, records: Iterable[CrashRecord]) -> int:
        """
        Insert crash records and commit.

        Args:
            db: Database session
            records: New CrashRecord objects

        Returns:
            Number of records inserted

        Raises:
            InvalidRecord: If any record has a negative outcome count;
                nothing is inserted in that case
        """
        records = [validate_record(record) for record in records]
        try:
            db.add_all(records)
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to insert crash records: {e}")
            raise

        logger.info(f"Inserted {len(records)} crash records")
        return len(records)

    def normalize_text(self, db: Session) -> int:
        """
        Replace embedded line breaks in stored free-text fields.

        Safe to run repeatedly; rows that are already clean are left alone.

        Args:
            db: Database session

        Returns:
            Number of records changed
        """
        changed = 0
        try:
            for record in db.execute(select(CrashRecord)).scalars():
                dirty = False
                for field in TEXT_FIELDS:
                    current = getattr(record, field)
                    cleaned = normalize_text(current)
                    if cleaned != current:
                        setattr(record, field, cleaned)
                        dirty = True
                if dirty:
                    changed += 1
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Text normalization failed: {e}")
            raise

        logger.info(f"Normalized text fields on {changed} crash records")
        return changed
