"""Crash summary model for the materialized visualization table."""

from decimal import Decimal
from typing import Optional

from sqlalchemy import Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from crash_analysis.models.base import Base


class CrashSummary(Base):
    """
    Crash summary row keyed by year, month and the three condition fields.

    The table is rebuilt wholesale by the summary materializer, so it carries
    no timestamps.

    Attributes:
        id: Unique identifier
        year: Report year
        month: Report month (1-12)
        road_condition: Road surface condition (None for unknown)
        weather_condition: Weather condition (None for unknown)
        light_condition: Light condition (None for unknown)
        crash_count: Number of crashes in the group
        fatalities: Total fatalities in the group
        injuries: Total injuries in the group
        avg_severity: Mean severity weight, exactly 2 decimal places
    """

    __tablename__ = "crash_summary"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    month: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    road_condition: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    weather_condition: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    light_condition: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    crash_count: Mapped[int] = mapped_column(Integer, nullable=False)
    fatalities: Mapped[int] = mapped_column(Integer, nullable=False)
    injuries: Mapped[int] = mapped_column(Integer, nullable=False)
    avg_severity: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)

    def as_tuple(self) -> tuple:
        """Column values without the surrogate key, in table order."""
        return (
            self.year,
            self.month,
            self.road_condition,
            self.weather_condition,
            self.light_condition,
            self.crash_count,
            self.fatalities,
            self.injuries,
            self.avg_severity,
        )

    def __repr__(self) -> str:
        return (
            f"<CrashSummary({self.year}-{self.month}, road='{self.road_condition}', "
            f"crashes={self.crash_count})>"
        )
