"""Therapists - institute staff.

Invariants:
    - Institute listing hides inactive therapists unless /include-inactive
    - Institute listing ordered active first, then by name
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from freezefit.api.envelope import created, ok, serialize_rows
from freezefit.db import crud
from freezefit.infrastructure.database import get_db
from freezefit.models.therapist import Therapist
from freezefit.schemas.provider import TherapistCreate, TherapistUpdate

router = APIRouter(prefix="/therapists", tags=["therapists"])

RESOURCE = "Therapist"


@router.get("")
async def list_therapists(db: AsyncSession = Depends(get_db)):
    rows = await crud.fetch_all(db, Therapist, order_by=[Therapist.name])
    return ok(serialize_rows(rows))


@router.get("/institute/{institute_id}")
async def list_institute_therapists(
    institute_id: str, db: AsyncSession = Depends(get_db),
):
    return ok(await _institute_therapists(db, institute_id, include_inactive=False))


@router.get("/institute/{institute_id}/include-inactive")
async def list_all_institute_therapists(
    institute_id: str, db: AsyncSession = Depends(get_db),
):
    return ok(await _institute_therapists(db, institute_id, include_inactive=True))


@router.get("/{therapist_id}")
async def get_therapist(therapist_id: str, db: AsyncSession = Depends(get_db)):
    return ok(await crud.fetch_by_id_or_404(db, Therapist, therapist_id, RESOURCE))


@router.post("")
async def create_therapist(body: TherapistCreate, db: AsyncSession = Depends(get_db)):
    therapist = await crud.insert_returning(db, Therapist, body.model_dump())
    await db.commit()
    return created(therapist)


@router.put("/{therapist_id}")
async def update_therapist(
    therapist_id: str, body: TherapistUpdate, db: AsyncSession = Depends(get_db),
):
    therapist = await crud.update_returning(
        db, Therapist, therapist_id, body.updatable(), RESOURCE,
    )
    await db.commit()
    return ok(therapist)


@router.delete("/{therapist_id}")
async def delete_therapist(therapist_id: str, db: AsyncSession = Depends(get_db)):
    deleted = await crud.delete_by_id(db, Therapist, therapist_id)
    await db.commit()
    return ok({
        "deleted": deleted,
        "message": "Therapist deleted successfully" if deleted else "Therapist not found",
    })


async def _institute_therapists(
    db: AsyncSession, institute_id: str, include_inactive: bool,
) -> list[dict]:
    criteria = [Therapist.institute_id == institute_id]
    if not include_inactive:
        criteria.append(Therapist.is_active.is_(True))
    rows = await crud.fetch_all(
        db, Therapist, *criteria,
        order_by=[Therapist.is_active.desc(), Therapist.name],
    )
    return serialize_rows(rows)
