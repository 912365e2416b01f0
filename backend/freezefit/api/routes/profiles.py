"""Profiles - customer and provider accounts.

Invariants:
    - role defaults to "customer" on create
    - Listings are ordered by full_name
    - DELETE never orphans history: a profile that owns appointments or
      reviews is deactivated (is_active=false, deactivated_at=now) instead
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from freezefit.api.envelope import created, ok, serialize_rows
from freezefit.core.domain_types import UserRole
from freezefit.core.errors import ResourceNotFoundError
from freezefit.db import crud
from freezefit.db.base import utcnow
from freezefit.infrastructure.database import get_db
from freezefit.models.appointment import Appointment
from freezefit.models.profile import Profile
from freezefit.models.review import Review
from freezefit.schemas.profile import ProfileCreate, ProfileUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/profiles", tags=["profiles"])

RESOURCE = "Profile"


@router.get("")
async def list_profiles(db: AsyncSession = Depends(get_db)):
    rows = await crud.fetch_all(db, Profile, order_by=[Profile.full_name])
    return ok(serialize_rows(rows))


@router.get("/email/{email}")
async def get_profile_by_email(email: str, db: AsyncSession = Depends(get_db)):
    profile = await crud.fetch_one_or_none(
        db, Profile, Profile.email == email.strip().lower(),
    )
    if profile is None:
        raise ResourceNotFoundError(RESOURCE, email)
    return ok(profile)


@router.get("/role/{role}")
async def list_profiles_by_role(role: UserRole, db: AsyncSession = Depends(get_db)):
    rows = await crud.fetch_all(
        db, Profile, Profile.role == role.value, order_by=[Profile.full_name],
    )
    return ok(serialize_rows(rows))


@router.get("/{profile_id}")
async def get_profile(profile_id: str, db: AsyncSession = Depends(get_db)):
    return ok(await crud.fetch_by_id_or_404(db, Profile, profile_id, RESOURCE))


@router.post("")
async def create_profile(body: ProfileCreate, db: AsyncSession = Depends(get_db)):
    values = body.model_dump(mode="json", exclude_none=True)
    values["role"] = (body.role or UserRole.CUSTOMER).value
    profile = await crud.insert_returning(db, Profile, values)
    await db.commit()
    return created(profile)


@router.put("/{profile_id}")
async def update_profile(
    profile_id: str, body: ProfileUpdate, db: AsyncSession = Depends(get_db),
):
    profile = await crud.update_returning(
        db, Profile, profile_id, body.updatable(), RESOURCE,
    )
    await db.commit()
    return ok(profile)


@router.delete("/{profile_id}")
async def delete_profile(profile_id: str, db: AsyncSession = Depends(get_db)):
    has_appointments = await _owns_rows(db, Appointment, profile_id)
    has_reviews = await _owns_rows(db, Review, profile_id)

    if has_appointments or has_reviews:
        deactivated = True
        try:
            await crud.update_returning(
                db, Profile, profile_id,
                {"is_active": False, "deactivated_at": utcnow()}, RESOURCE,
            )
        except ResourceNotFoundError:
            deactivated = False
        await db.commit()
        logger.info(
            "Profile deactivated due to existing data",
            extra={"resource": RESOURCE, "record_id": profile_id},
        )
        return ok({
            "deactivated": deactivated,
            "deleted": False,
            "hasAppointments": has_appointments,
            "hasReviews": has_reviews,
            "message": "Profile deactivated due to existing data",
        })

    deleted = await crud.delete_by_id(db, Profile, profile_id)
    await db.commit()
    return ok({
        "deleted": deleted,
        "deactivated": False,
        "hasAppointments": False,
        "hasReviews": False,
        "message": "Profile deleted successfully" if deleted else "Profile not found",
    })


async def _owns_rows(db: AsyncSession, model, user_id: str) -> bool:
    result = await db.execute(
        select(func.count()).select_from(model).where(model.user_id == user_id),
    )
    return result.scalar_one() > 0
