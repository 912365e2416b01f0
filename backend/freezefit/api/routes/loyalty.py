"""Loyalty - customer club points and gifts. Thin routes over LoyaltyService."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from freezefit.api.envelope import ok, serialize_rows
from freezefit.infrastructure.database import get_db
from freezefit.schemas.loyalty import AddPoints, RedeemGift
from freezefit.services.loyalty import LoyaltyService

router = APIRouter(prefix="/loyalty", tags=["loyalty"])


def get_loyalty_service(db: AsyncSession = Depends(get_db)) -> LoyaltyService:
    return LoyaltyService(db)


@router.get("/user/{user_id}")
async def get_user_loyalty(
    user_id: str, service: LoyaltyService = Depends(get_loyalty_service),
):
    return ok(await service.get_summary(user_id))


@router.get("/gifts")
async def list_gifts(service: LoyaltyService = Depends(get_loyalty_service)):
    return ok(serialize_rows(await service.list_active_gifts()))


@router.get("/transactions/{user_id}")
async def list_transactions(
    user_id: str, service: LoyaltyService = Depends(get_loyalty_service),
):
    return ok(serialize_rows(await service.list_transactions(user_id)))


@router.post("/add-points")
async def add_points(
    body: AddPoints, service: LoyaltyService = Depends(get_loyalty_service),
):
    return ok(await service.add_points(
        body.user_id, body.points, body.source,
        reference_id=body.reference_id, description=body.description,
    ))


@router.post("/redeem-gift")
async def redeem_gift(
    body: RedeemGift, service: LoyaltyService = Depends(get_loyalty_service),
):
    return ok(await service.redeem_gift(body.user_id, body.gift_id))
