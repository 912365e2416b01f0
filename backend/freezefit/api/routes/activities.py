"""Activities - feed of what happened at an institute or to a customer.

Invariants:
    - Feeds are ordered by created_at, newest first, and capped by ?limit
      (20 for institute and user feeds, 50 for the global feed)
    - Institute feed carries user_name; user feed carries institute_name;
      the global feed carries both (LEFT JOIN, null when unmatched)
"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from freezefit.api.envelope import created, ok, serialize_row
from freezefit.db import crud
from freezefit.infrastructure.database import get_db
from freezefit.models.activity import Activity
from freezefit.models.institute import Institute
from freezefit.models.profile import Profile
from freezefit.schemas.activity import ActivityCreate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/activities", tags=["activities"])

RESOURCE = "Activity"
FEED_LIMIT = 20
GLOBAL_FEED_LIMIT = 50
MAX_FEED_LIMIT = 200


@router.get("")
async def list_recent_activities(
    limit: int = Query(GLOBAL_FEED_LIMIT, ge=1, le=MAX_FEED_LIMIT),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(Activity, Profile.full_name, Institute.institute_name)
        .outerjoin(Profile, Activity.user_id == Profile.id)
        .outerjoin(Institute, Activity.institute_id == Institute.id)
        .order_by(Activity.created_at.desc())
        .limit(limit),
    )
    return ok([
        {**serialize_row(activity), "user_name": user_name,
         "institute_name": institute_name}
        for activity, user_name, institute_name in result.all()
    ])


@router.get("/institute/{institute_id}")
async def list_institute_activities(
    institute_id: str,
    limit: int = Query(FEED_LIMIT, ge=1, le=MAX_FEED_LIMIT),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(Activity, Profile.full_name)
        .outerjoin(Profile, Activity.user_id == Profile.id)
        .where(Activity.institute_id == institute_id)
        .order_by(Activity.created_at.desc())
        .limit(limit),
    )
    return ok([
        {**serialize_row(activity), "user_name": user_name}
        for activity, user_name in result.all()
    ])


@router.get("/user/{user_id}")
async def list_user_activities(
    user_id: str,
    limit: int = Query(FEED_LIMIT, ge=1, le=MAX_FEED_LIMIT),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(Activity, Institute.institute_name)
        .outerjoin(Institute, Activity.institute_id == Institute.id)
        .where(Activity.user_id == user_id)
        .order_by(Activity.created_at.desc())
        .limit(limit),
    )
    return ok([
        {**serialize_row(activity), "institute_name": institute_name}
        for activity, institute_name in result.all()
    ])


@router.post("")
async def create_activity(body: ActivityCreate, db: AsyncSession = Depends(get_db)):
    values = body.model_dump(exclude={"metadata"})
    values["activity_metadata"] = body.metadata
    activity = await crud.insert_returning(db, Activity, values)
    await db.commit()
    logger.info(
        f"Activity recorded: {activity.activity_type}",
        extra={"resource": RESOURCE, "record_id": activity.id},
    )
    return created(activity)


@router.delete("/{activity_id}")
async def delete_activity(activity_id: str, db: AsyncSession = Depends(get_db)):
    deleted = await crud.delete_by_id(db, Activity, activity_id)
    await db.commit()
    return ok({"deleted": deleted})
