"""Institutes - provider businesses.

Invariants:
    - Listing ordered by institute_name
    - DELETE removes dependent rows (appointments, reviews, services,
      workshops, business hours, gallery images, therapists) before the
      institute, committed together
    - /detailed pages by ?limit/?offset in name order; review_count is 0 and
      average_rating null for an institute without reviews
"""

import logging
from collections import defaultdict

from fastapi import APIRouter, Depends, Query
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from freezefit.api.envelope import created, ok, serialize_row, serialize_rows
from freezefit.db import crud
from freezefit.infrastructure.database import get_db
from freezefit.models.appointment import Appointment
from freezefit.models.business_hours import BusinessHours
from freezefit.models.gallery_image import GalleryImage
from freezefit.models.institute import Institute
from freezefit.models.review import Review
from freezefit.models.service import Service
from freezefit.models.therapist import Therapist
from freezefit.models.workshop import Workshop
from freezefit.schemas.institute import InstituteCreate, InstituteUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/institutes", tags=["institutes"])

RESOURCE = "Institute"

# Rows keyed by institute_id, deleted before the institute itself
DEPENDENT_MODELS = (
    Appointment, Review, Service, Workshop, BusinessHours, GalleryImage, Therapist,
)

DETAILED_PAGE_SIZE = 5
MAX_DETAILED_PAGE_SIZE = 50
_THERAPIST_SUMMARY_FIELDS = ("id", "name", "experience", "bio", "image_url")
_HOURS_SUMMARY_FIELDS = ("day_of_week", "open_time", "close_time", "is_open")


@router.get("")
async def list_institutes(db: AsyncSession = Depends(get_db)):
    rows = await crud.fetch_all(db, Institute, order_by=[Institute.institute_name])
    return ok(serialize_rows(rows))


@router.get("/owner/{owner_id}")
async def list_owner_institutes(owner_id: str, db: AsyncSession = Depends(get_db)):
    rows = await crud.fetch_all(
        db, Institute, Institute.owner_id == owner_id,
        order_by=[Institute.institute_name],
    )
    return ok(serialize_rows(rows))


@router.get("/detailed")
async def list_institutes_detailed(
    limit: int = Query(DETAILED_PAGE_SIZE, ge=1, le=MAX_DETAILED_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
):
    """Search listing: one page of institutes with review stats, staff and hours."""
    review_stats = (
        select(
            Review.institute_id,
            func.count(Review.id).label("review_count"),
            func.avg(Review.rating).label("average_rating"),
        )
        .group_by(Review.institute_id)
        .subquery()
    )
    result = await db.execute(
        select(Institute, review_stats.c.review_count, review_stats.c.average_rating)
        .outerjoin(review_stats, review_stats.c.institute_id == Institute.id)
        .order_by(Institute.institute_name, Institute.id)
        .limit(limit)
        .offset(offset),
    )
    page = result.all()
    total = await db.scalar(select(func.count()).select_from(Institute))

    ids = [institute.id for institute, _, _ in page]
    therapists = defaultdict(list)
    hours = defaultdict(list)
    if ids:
        for therapist in await crud.fetch_all(
            db, Therapist, Therapist.institute_id.in_(ids), order_by=[Therapist.name],
        ):
            therapists[therapist.institute_id].append(
                {key: getattr(therapist, key) for key in _THERAPIST_SUMMARY_FIELDS},
            )
        for day in await crud.fetch_all(
            db, BusinessHours, BusinessHours.institute_id.in_(ids),
            order_by=[BusinessHours.day_of_week],
        ):
            hours[day.institute_id].append(
                {key: getattr(day, key) for key in _HOURS_SUMMARY_FIELDS},
            )

    institutes = [
        {
            **serialize_row(institute),
            "therapists": therapists[institute.id],
            "review_count": review_count or 0,
            "average_rating": float(average_rating) if average_rating is not None else None,
            "business_hours": hours[institute.id],
        }
        for institute, review_count, average_rating in page
    ]
    return ok({
        "institutes": institutes,
        "pagination": {
            "limit": limit,
            "offset": offset,
            "total": total,
            "hasMore": offset + limit < total,
        },
    })


@router.get("/{institute_id}")
async def get_institute(institute_id: str, db: AsyncSession = Depends(get_db)):
    return ok(await crud.fetch_by_id_or_404(db, Institute, institute_id, RESOURCE))


@router.post("")
async def create_institute(body: InstituteCreate, db: AsyncSession = Depends(get_db)):
    institute = await crud.insert_returning(db, Institute, body.model_dump())
    await db.commit()
    logger.info(
        f"Institute created: {institute.institute_name}",
        extra={"resource": RESOURCE, "record_id": institute.id},
    )
    return created(institute)


@router.put("/{institute_id}")
async def update_institute(
    institute_id: str, body: InstituteUpdate, db: AsyncSession = Depends(get_db),
):
    institute = await crud.update_returning(
        db, Institute, institute_id, body.updatable(), RESOURCE,
    )
    await db.commit()
    return ok(institute)


@router.delete("/{institute_id}")
async def delete_institute(institute_id: str, db: AsyncSession = Depends(get_db)):
    for model in DEPENDENT_MODELS:
        removed = await crud.delete_where(db, model, model.institute_id == institute_id)
        if removed:
            logger.info(
                f"Removed {removed} {model.__tablename__} row(s)",
                extra={"resource": RESOURCE, "record_id": institute_id},
            )
    deleted = await crud.delete_by_id(db, Institute, institute_id)
    await db.commit()
    return ok({"deleted": deleted})
