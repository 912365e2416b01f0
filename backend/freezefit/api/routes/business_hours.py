"""Business Hours - weekly opening schedule per institute.

Invariants:
    - Institute listing ordered by day_of_week (0 = Sunday)
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from freezefit.api.envelope import created, ok, serialize_rows
from freezefit.db import crud
from freezefit.infrastructure.database import get_db
from freezefit.models.business_hours import BusinessHours
from freezefit.schemas.provider import BusinessHoursCreate, BusinessHoursUpdate

router = APIRouter(prefix="/business-hours", tags=["business-hours"])

RESOURCE = "Business hours"


@router.get("")
async def list_business_hours(db: AsyncSession = Depends(get_db)):
    rows = await crud.fetch_all(
        db, BusinessHours,
        order_by=[BusinessHours.institute_id, BusinessHours.day_of_week],
    )
    return ok(serialize_rows(rows))


@router.get("/institute/{institute_id}")
async def list_institute_business_hours(
    institute_id: str, db: AsyncSession = Depends(get_db),
):
    rows = await crud.fetch_all(
        db, BusinessHours, BusinessHours.institute_id == institute_id,
        order_by=[BusinessHours.day_of_week],
    )
    return ok(serialize_rows(rows))


@router.get("/{hours_id}")
async def get_business_hours(hours_id: str, db: AsyncSession = Depends(get_db)):
    return ok(await crud.fetch_by_id_or_404(db, BusinessHours, hours_id, RESOURCE))


@router.post("")
async def create_business_hours(
    body: BusinessHoursCreate, db: AsyncSession = Depends(get_db),
):
    hours = await crud.insert_returning(db, BusinessHours, body.model_dump())
    await db.commit()
    return created(hours)


@router.put("/{hours_id}")
async def update_business_hours(
    hours_id: str, body: BusinessHoursUpdate, db: AsyncSession = Depends(get_db),
):
    hours = await crud.update_returning(
        db, BusinessHours, hours_id, body.updatable(), RESOURCE,
    )
    await db.commit()
    return ok(hours)


@router.delete("/{hours_id}")
async def delete_business_hours(hours_id: str, db: AsyncSession = Depends(get_db)):
    deleted = await crud.delete_by_id(db, BusinessHours, hours_id)
    await db.commit()
    return ok({"deleted": deleted})
