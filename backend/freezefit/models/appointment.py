"""Appointment ORM - a booked treatment slot at an institute.

Invariants:
    - status defaults to "pending"
    - institute_name/therapist_name are denormalized copies taken at booking time
"""

from datetime import datetime

from sqlalchemy import DateTime, Float, String
from sqlalchemy.orm import Mapped, mapped_column

from freezefit.core.domain_types import AppointmentStatus
from freezefit.db.base import Base, new_id, utcnow


class Appointment(Base):
    __tablename__ = "appointments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    institute_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    therapist_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    therapist_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    institute_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    service_name: Mapped[str] = mapped_column(String(255), nullable=False)
    # ISO date (YYYY-MM-DD) and wall-clock time (HH:MM) as entered by the customer
    appointment_date: Mapped[str] = mapped_column(String(10), nullable=False)
    appointment_time: Mapped[str] = mapped_column(String(8), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=AppointmentStatus.PENDING.value,
    )
    price: Mapped[float | None] = mapped_column(Float, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
