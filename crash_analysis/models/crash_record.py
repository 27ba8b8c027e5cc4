"""Crash record model for storing cleaned crash incidents."""

from datetime import date
from typing import Optional

from sqlalchemy import CheckConstraint, Date, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from crash_analysis.models.base import Base, TimestampMixin


class CrashRecord(Base, TimestampMixin):
    """
    Crash record model representing one reported incident.

    Attributes:
        id: Surrogate primary key
        report_number: Report number (natural key, with report_seq_no)
        report_seq_no: Report sequence number
        report_date: Date the crash was reported
        fatalities: Number of fatalities (never negative)
        injuries: Number of injuries (never negative)
        tow_away: "Y"/"N" flag for a tow-away crash
        hazmat_released: "Y"/"N" flag for a hazardous material release
        trafficway_desc: Trafficway description
        access_control_desc: Access control description
        road_surface_condition: Road surface condition description
        weather_condition: Weather condition description
        light_condition: Light condition description
        citation_issued: Citation issued description
        severity_weight: Source-assigned severity score
        time_weight: Source-assigned time score
        created_at: Record creation timestamp
        updated_at: Record update timestamp
    """

    __tablename__ = "crash_records"
    __table_args__ = (
        CheckConstraint("fatalities >= 0", name="ck_crash_records_fatalities_nonneg"),
        CheckConstraint("injuries >= 0", name="ck_crash_records_injuries_nonneg"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    report_number: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    report_seq_no: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    dot_number: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    report_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True, index=True)
    report_state: Mapped[Optional[str]] = mapped_column(String(2), nullable=True)

    # Outcomes
    fatalities: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    injuries: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    tow_away: Mapped[Optional[str]] = mapped_column(String(1), nullable=True)
    hazmat_released: Mapped[Optional[str]] = mapped_column(String(1), nullable=True)

    # Conditions
    trafficway_desc: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    access_control_desc: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    road_surface_condition: Mapped[Optional[str]] = mapped_column(
        String(50), nullable=True, index=True
    )
    weather_condition: Mapped[Optional[str]] = mapped_column(
        String(50), nullable=True, index=True
    )
    light_condition: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # Vehicle
    vehicle_id_number: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    vehicle_license_number: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    vehicle_license_state: Mapped[Optional[str]] = mapped_column(String(2), nullable=True)

    # Weights
    severity_weight: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    time_weight: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    citation_issued: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    seq_num: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    not_preventable: Mapped[Optional[str]] = mapped_column(String(1), nullable=True)

    def __repr__(self) -> str:
        return (
            f"<CrashRecord(report_number='{self.report_number}', "
            f"seq={self.report_seq_no}, date={self.report_date})>"
        )
