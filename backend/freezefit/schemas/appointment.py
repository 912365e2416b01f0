"""Appointment Schemas - date as YYYY-MM-DD, time as HH:MM[:SS]."""

from pydantic import BaseModel, Field

from freezefit.core.domain_types import AppointmentStatus
from freezefit.schemas.common import UpdateSchema

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
TIME_PATTERN = r"^\d{2}:\d{2}(:\d{2})?$"


class AppointmentCreate(BaseModel):
    user_id: str = Field(min_length=1)
    institute_id: str = Field(min_length=1)
    service_name: str = Field(min_length=1)
    appointment_date: str = Field(min_length=1, pattern=DATE_PATTERN)
    appointment_time: str = Field(min_length=1, pattern=TIME_PATTERN)
    therapist_id: str | None = None
    therapist_name: str | None = None
    institute_name: str | None = None
    status: AppointmentStatus | None = None
    price: float | None = Field(None, ge=0)


class AppointmentStatusUpdate(BaseModel):
    status: AppointmentStatus


class AppointmentUpdate(UpdateSchema):
    institute_id: str | None = Field(None, min_length=1)
    service_name: str | None = Field(None, min_length=1)
    appointment_date: str | None = Field(None, pattern=DATE_PATTERN)
    appointment_time: str | None = Field(None, pattern=TIME_PATTERN)
    therapist_id: str | None = None
    therapist_name: str | None = None
    institute_name: str | None = None
    status: AppointmentStatus | None = None
    price: float | None = Field(None, ge=0)
