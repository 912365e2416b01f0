"""Gallery - institute photo gallery, newest first."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from freezefit.api.envelope import created, ok, serialize_rows
from freezefit.db import crud
from freezefit.infrastructure.database import get_db
from freezefit.models.gallery_image import GalleryImage
from freezefit.schemas.provider import GalleryImageCreate, GalleryImageUpdate

router = APIRouter(prefix="/gallery", tags=["gallery"])

RESOURCE = "Gallery image"


@router.get("")
async def list_gallery_images(db: AsyncSession = Depends(get_db)):
    rows = await crud.fetch_all(
        db, GalleryImage, order_by=[GalleryImage.created_at.desc()],
    )
    return ok(serialize_rows(rows))


@router.get("/institute/{institute_id}")
async def list_institute_gallery(
    institute_id: str, db: AsyncSession = Depends(get_db),
):
    rows = await crud.fetch_all(
        db, GalleryImage, GalleryImage.institute_id == institute_id,
        order_by=[GalleryImage.created_at.desc()],
    )
    return ok(serialize_rows(rows))


@router.get("/{image_id}")
async def get_gallery_image(image_id: str, db: AsyncSession = Depends(get_db)):
    return ok(await crud.fetch_by_id_or_404(db, GalleryImage, image_id, RESOURCE))


@router.post("")
async def create_gallery_image(
    body: GalleryImageCreate, db: AsyncSession = Depends(get_db),
):
    image = await crud.insert_returning(db, GalleryImage, body.model_dump())
    await db.commit()
    return created(image)


@router.put("/{image_id}")
async def update_gallery_image(
    image_id: str, body: GalleryImageUpdate, db: AsyncSession = Depends(get_db),
):
    image = await crud.update_returning(
        db, GalleryImage, image_id, body.updatable(), RESOURCE,
    )
    await db.commit()
    return ok(image)


@router.delete("/{image_id}")
async def delete_gallery_image(image_id: str, db: AsyncSession = Depends(get_db)):
    deleted = await crud.delete_by_id(db, GalleryImage, image_id)
    await db.commit()
    return ok({"deleted": deleted})
