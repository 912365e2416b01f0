"""Appointments - booking, provider order management, status changes.

Invariants:
    - status defaults to "pending" on create
    - Listings are ordered by appointment_date desc, then appointment_time desc
    - User listing carries the current institute and therapist names (LEFT JOIN),
      falling back to the names copied at booking time
    - Institute listing carries the customer's user_name and user_email
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from freezefit.api.envelope import created, ok, serialize_row, serialize_rows
from freezefit.core.domain_types import AppointmentStatus
from freezefit.db import crud
from freezefit.infrastructure.database import get_db
from freezefit.models.appointment import Appointment
from freezefit.models.institute import Institute
from freezefit.models.profile import Profile
from freezefit.models.therapist import Therapist
from freezefit.schemas.appointment import (
    AppointmentCreate, AppointmentStatusUpdate, AppointmentUpdate,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/appointments", tags=["appointments"])

RESOURCE = "Appointment"
_NEWEST_FIRST = (
    Appointment.appointment_date.desc(), Appointment.appointment_time.desc(),
)


@router.get("")
async def list_appointments(db: AsyncSession = Depends(get_db)):
    rows = await crud.fetch_all(db, Appointment, order_by=_NEWEST_FIRST)
    return ok(serialize_rows(rows))


@router.get("/user/{user_id}")
async def list_user_appointments(user_id: str, db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(
            Appointment,
            Institute.institute_name.label("joined_institute_name"),
            Therapist.name.label("joined_therapist_name"),
        )
        .outerjoin(Institute, Appointment.institute_id == Institute.id)
        .outerjoin(Therapist, Appointment.therapist_id == Therapist.id)
        .where(Appointment.user_id == user_id)
        .order_by(*_NEWEST_FIRST),
    )
    data = []
    for appointment, institute_name, therapist_name in result.all():
        row = serialize_row(appointment)
        row["institute_name"] = institute_name or row["institute_name"]
        row["therapist_name"] = therapist_name or row["therapist_name"]
        data.append(row)
    return ok(data)


@router.get("/institute/{institute_id}")
async def list_institute_appointments(
    institute_id: str, db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(Appointment, Profile.full_name, Profile.email)
        .outerjoin(Profile, Appointment.user_id == Profile.id)
        .where(Appointment.institute_id == institute_id)
        .order_by(*_NEWEST_FIRST),
    )
    data = [
        {**serialize_row(appointment), "user_name": full_name, "user_email": email}
        for appointment, full_name, email in result.all()
    ]
    return ok(data)


@router.get("/{appointment_id}")
async def get_appointment(appointment_id: str, db: AsyncSession = Depends(get_db)):
    return ok(await crud.fetch_by_id_or_404(db, Appointment, appointment_id, RESOURCE))


@router.post("")
async def create_appointment(
    body: AppointmentCreate, db: AsyncSession = Depends(get_db),
):
    values = body.model_dump(mode="json")
    values["status"] = (body.status or AppointmentStatus.PENDING).value
    appointment = await crud.insert_returning(db, Appointment, values)
    await db.commit()
    logger.info(
        f"Appointment booked for {appointment.appointment_date} {appointment.appointment_time}",
        extra={"resource": RESOURCE, "record_id": appointment.id},
    )
    return created(appointment)


@router.put("/{appointment_id}/status")
async def update_appointment_status(
    appointment_id: str,
    body: AppointmentStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    appointment = await crud.update_returning(
        db, Appointment, appointment_id, {"status": body.status.value}, RESOURCE,
    )
    await db.commit()
    return ok(appointment)


@router.put("/{appointment_id}")
async def update_appointment(
    appointment_id: str,
    body: AppointmentUpdate,
    db: AsyncSession = Depends(get_db),
):
    appointment = await crud.update_returning(
        db, Appointment, appointment_id, body.updatable(), RESOURCE,
    )
    await db.commit()
    return ok(appointment)


@router.delete("/{appointment_id}")
async def delete_appointment(appointment_id: str, db: AsyncSession = Depends(get_db)):
    deleted = await crud.delete_by_id(db, Appointment, appointment_id)
    await db.commit()
    return ok({"deleted": deleted})
