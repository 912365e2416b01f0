"""Workshops - scheduled group sessions.

Invariants:
    - Listings show active workshops only, ordered by workshop_date, then
      workshop_time (soonest first)
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from freezefit.api.envelope import created, ok, serialize_rows
from freezefit.db import crud
from freezefit.infrastructure.database import get_db
from freezefit.models.workshop import Workshop
from freezefit.schemas.workshop import WorkshopCreate, WorkshopUpdate

router = APIRouter(prefix="/workshops", tags=["workshops"])

RESOURCE = "Workshop"
_SOONEST_FIRST = (Workshop.workshop_date, Workshop.workshop_time)


@router.get("")
async def list_workshops(db: AsyncSession = Depends(get_db)):
    rows = await crud.fetch_all(
        db, Workshop, Workshop.is_active.is_(True), order_by=_SOONEST_FIRST,
    )
    return ok(serialize_rows(rows))


@router.get("/institute/{institute_id}")
async def list_institute_workshops(
    institute_id: str, db: AsyncSession = Depends(get_db),
):
    rows = await crud.fetch_all(
        db, Workshop,
        Workshop.institute_id == institute_id, Workshop.is_active.is_(True),
        order_by=_SOONEST_FIRST,
    )
    return ok(serialize_rows(rows))


@router.get("/{workshop_id}")
async def get_workshop(workshop_id: str, db: AsyncSession = Depends(get_db)):
    return ok(await crud.fetch_by_id_or_404(db, Workshop, workshop_id, RESOURCE))


@router.post("")
async def create_workshop(body: WorkshopCreate, db: AsyncSession = Depends(get_db)):
    workshop = await crud.insert_returning(db, Workshop, body.model_dump())
    await db.commit()
    return created(workshop)


@router.put("/{workshop_id}")
async def update_workshop(
    workshop_id: str, body: WorkshopUpdate, db: AsyncSession = Depends(get_db),
):
    workshop = await crud.update_returning(
        db, Workshop, workshop_id, body.updatable(), RESOURCE,
    )
    await db.commit()
    return ok(workshop)


@router.delete("/{workshop_id}")
async def delete_workshop(workshop_id: str, db: AsyncSession = Depends(get_db)):
    deleted = await crud.delete_by_id(db, Workshop, workshop_id)
    await db.commit()
    return ok({"deleted": deleted})
