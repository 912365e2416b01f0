"""Services - treatments an institute offers, ordered by name."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from freezefit.api.envelope import created, ok, serialize_rows
from freezefit.db import crud
from freezefit.infrastructure.database import get_db
from freezefit.models.service import Service
from freezefit.schemas.provider import ServiceCreate, ServiceUpdate

router = APIRouter(prefix="/services", tags=["services"])

RESOURCE = "Service"


@router.get("")
async def list_services(db: AsyncSession = Depends(get_db)):
    rows = await crud.fetch_all(db, Service, order_by=[Service.name])
    return ok(serialize_rows(rows))


@router.get("/institute/{institute_id}")
async def list_institute_services(
    institute_id: str, db: AsyncSession = Depends(get_db),
):
    rows = await crud.fetch_all(
        db, Service, Service.institute_id == institute_id, order_by=[Service.name],
    )
    return ok(serialize_rows(rows))


@router.get("/{service_id}")
async def get_service(service_id: str, db: AsyncSession = Depends(get_db)):
    return ok(await crud.fetch_by_id_or_404(db, Service, service_id, RESOURCE))


@router.post("")
async def create_service(body: ServiceCreate, db: AsyncSession = Depends(get_db)):
    service = await crud.insert_returning(db, Service, body.model_dump())
    await db.commit()
    return created(service)


@router.put("/{service_id}")
async def update_service(
    service_id: str, body: ServiceUpdate, db: AsyncSession = Depends(get_db),
):
    service = await crud.update_returning(
        db, Service, service_id, body.updatable(), RESOURCE,
    )
    await db.commit()
    return ok(service)


@router.delete("/{service_id}")
async def delete_service(service_id: str, db: AsyncSession = Depends(get_db)):
    deleted = await crud.delete_by_id(db, Service, service_id)
    await db.commit()
    return ok({"deleted": deleted})
