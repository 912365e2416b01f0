"""Loyalty Service - balances, earning and gift redemption.

Invariants:
    - A user without a loyalty row gets a zeroed bronze row on first touch
    - Balance changes are single SQL statements evaluated by the database,
      never read-modify-write in Python
    - add_points: one "earned" transaction; an upsert adds to total and
      current; level recomputed from the total that upsert returned
    - redeem_gift: only active gifts; the deduction is a conditional UPDATE
      (current_points >= points_cost), so concurrent redemptions can never
      overdraw; one "spent" transaction and one redemption row per success
    - Spending never lowers total_points, so it never lowers the level
    - Every operation commits once, at the end

Design Decisions:
    - Upserts use the dialect's INSERT ... ON CONFLICT (PostgreSQL and SQLite
      share the same API), keyed on the unique user_id
"""

import logging

from sqlalchemy import Row, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from freezefit.core.domain_types import LoyaltyLevel, TransactionType
from freezefit.core.errors import BusinessRuleError
from freezefit.core.loyalty_rules import build_summary, level_for_points
from freezefit.db import crud
from freezefit.db.base import utcnow
from freezefit.models.loyalty import (
    CustomerLoyalty, GiftRedemption, LoyaltyGift, LoyaltyTransaction,
)

logger = logging.getLogger(__name__)

TRANSACTION_HISTORY_LIMIT = 20
GIFT_REDEMPTION_SOURCE = "gift_redemption"

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

_BALANCE_COLUMNS = (
    CustomerLoyalty.total_points,
    CustomerLoyalty.current_points,
    CustomerLoyalty.loyalty_level,
)


class LoyaltyService:
    """Loyalty operations over one request's session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_summary(self, user_id: str) -> dict:
        await self._ensure_account(user_id)
        result = await self.db.execute(
            select(*_BALANCE_COLUMNS).where(CustomerLoyalty.user_id == user_id),
        )
        balance = result.one()
        await self.db.commit()
        return _summary(balance)

    async def list_active_gifts(self) -> list[LoyaltyGift]:
        return await crud.fetch_all(
            self.db, LoyaltyGift, LoyaltyGift.is_active.is_(True),
            order_by=[LoyaltyGift.points_cost.asc()],
        )

    async def list_transactions(self, user_id: str) -> list[LoyaltyTransaction]:
        return await crud.fetch_all(
            self.db, LoyaltyTransaction, LoyaltyTransaction.user_id == user_id,
            order_by=[LoyaltyTransaction.created_at.desc()],
            limit=TRANSACTION_HISTORY_LIMIT,
        )

    async def add_points(
        self,
        user_id: str,
        points: int,
        source: str,
        reference_id: str | None = None,
        description: str | None = None,
    ) -> dict:
        self.db.add(LoyaltyTransaction(
            user_id=user_id,
            transaction_type=TransactionType.EARNED.value,
            points=points,
            source=source,
            reference_id=reference_id,
            description=description,
        ))
        upsert = self._insert().values(
            user_id=user_id,
            total_points=points,
            current_points=points,
            loyalty_level=level_for_points(points).value,
        )
        result = await self.db.execute(
            upsert.on_conflict_do_update(
                index_elements=[CustomerLoyalty.user_id],
                set_={
                    "total_points": CustomerLoyalty.total_points + points,
                    "current_points": CustomerLoyalty.current_points + points,
                    "updated_at": utcnow(),
                },
            ).returning(CustomerLoyalty.total_points),
        )
        total_points = result.scalar_one()

        # The upsert holds the row lock, so total_points is current
        result = await self.db.execute(
            update(CustomerLoyalty)
            .where(CustomerLoyalty.user_id == user_id)
            .values(loyalty_level=level_for_points(total_points).value)
            .returning(*_BALANCE_COLUMNS)
            .execution_options(synchronize_session=False),
        )
        balance = result.one()
        await self.db.commit()
        logger.info(
            f"Added {points} points ({source}); level {balance.loyalty_level}",
            extra={"resource": "Loyalty", "record_id": user_id},
        )
        return _summary(balance)

    async def redeem_gift(self, user_id: str, gift_id: str) -> dict:
        gift = await crud.fetch_one_or_none(
            self.db, LoyaltyGift,
            LoyaltyGift.id == gift_id, LoyaltyGift.is_active.is_(True),
        )
        if gift is None:
            raise BusinessRuleError(
                "Gift not found or not available", "GIFT_UNAVAILABLE",
            )

        result = await self.db.execute(
            update(CustomerLoyalty)
            .where(
                CustomerLoyalty.user_id == user_id,
                CustomerLoyalty.current_points >= gift.points_cost,
            )
            .values(
                current_points=CustomerLoyalty.current_points - gift.points_cost,
                updated_at=utcnow(),
            )
            .returning(*_BALANCE_COLUMNS)
            .execution_options(synchronize_session=False),
        )
        balance = result.one_or_none()
        if balance is None:
            raise BusinessRuleError("Insufficient points", "INSUFFICIENT_POINTS")

        self.db.add(LoyaltyTransaction(
            user_id=user_id,
            transaction_type=TransactionType.SPENT.value,
            points=gift.points_cost,
            source=GIFT_REDEMPTION_SOURCE,
            reference_id=gift.id,
            description=f"Redeemed: {gift.name}",
        ))
        self.db.add(GiftRedemption(
            user_id=user_id, gift_id=gift.id, points_spent=gift.points_cost,
        ))
        await self.db.commit()
        logger.info(
            f"Redeemed gift '{gift.name}' for {gift.points_cost} points",
            extra={"resource": "Loyalty", "record_id": user_id},
        )
        return _summary(balance)

    async def _ensure_account(self, user_id: str) -> None:
        """Create the zeroed bronze row unless one exists."""
        await self.db.execute(
            self._insert()
            .values(
                user_id=user_id, total_points=0, current_points=0,
                loyalty_level=LoyaltyLevel.BRONZE.value,
            )
            .on_conflict_do_nothing(index_elements=[CustomerLoyalty.user_id]),
        )

    def _insert(self):
        dialect = self.db.get_bind().dialect.name
        return _UPSERT_INSERTS[dialect](CustomerLoyalty)


def _summary(balance: Row) -> dict:
    return build_summary(
        balance.total_points, balance.current_points, balance.loyalty_level,
    )
