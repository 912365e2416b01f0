"""Reviews - customer ratings of institutes.

Invariants:
    - review_date defaults to today (UTC)
    - Listings ordered by review_date, newest first
    - Institute listing includes the reviewer's name as user_name
"""

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from freezefit.api.envelope import created, ok, serialize_row, serialize_rows
from freezefit.db import crud
from freezefit.infrastructure.database import get_db
from freezefit.models.profile import Profile
from freezefit.models.review import Review
from freezefit.schemas.review import ReviewCreate, ReviewUpdate

router = APIRouter(prefix="/reviews", tags=["reviews"])

RESOURCE = "Review"
_NEWEST_FIRST = (Review.review_date.desc(), Review.created_at.desc())


@router.get("")
async def list_reviews(db: AsyncSession = Depends(get_db)):
    rows = await crud.fetch_all(db, Review, order_by=_NEWEST_FIRST)
    return ok(serialize_rows(rows))


@router.get("/institute/{institute_id}")
async def list_institute_reviews(
    institute_id: str, db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(Review, Profile.full_name)
        .outerjoin(Profile, Review.user_id == Profile.id)
        .where(Review.institute_id == institute_id)
        .order_by(*_NEWEST_FIRST),
    )
    return ok([
        {**serialize_row(review), "user_name": full_name}
        for review, full_name in result.all()
    ])


@router.get("/user/{user_id}")
async def list_user_reviews(user_id: str, db: AsyncSession = Depends(get_db)):
    rows = await crud.fetch_all(
        db, Review, Review.user_id == user_id, order_by=_NEWEST_FIRST,
    )
    return ok(serialize_rows(rows))


@router.get("/{review_id}")
async def get_review(review_id: str, db: AsyncSession = Depends(get_db)):
    return ok(await crud.fetch_by_id_or_404(db, Review, review_id, RESOURCE))


@router.post("")
async def create_review(body: ReviewCreate, db: AsyncSession = Depends(get_db)):
    review = await crud.insert_returning(
        db, Review, body.model_dump(exclude_none=True),
    )
    await db.commit()
    return created(review)


@router.put("/{review_id}")
async def update_review(
    review_id: str, body: ReviewUpdate, db: AsyncSession = Depends(get_db),
):
    review = await crud.update_returning(
        db, Review, review_id, body.updatable(), RESOURCE,
    )
    await db.commit()
    return ok(review)


@router.delete("/{review_id}")
async def delete_review(review_id: str, db: AsyncSession = Depends(get_db)):
    deleted = await crud.delete_by_id(db, Review, review_id)
    await db.commit()
    return ok({"deleted": deleted})
