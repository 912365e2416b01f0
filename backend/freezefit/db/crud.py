"""Statement Helpers - one parameterized statement per call, shared by every resource router.

Invariants:
    - Each helper issues exactly one SQL statement
    - Helpers never commit; the calling route commits once per request
    - update_returning refreshes updated_at when the model has one
    - Missing rows surface as ResourceNotFoundError, never as None
"""

from typing import Any, Sequence, TypeVar

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from freezefit.core.errors import NoFieldsToUpdateError, ResourceNotFoundError
from freezefit.db.base import Base, utcnow

ModelT = TypeVar("ModelT", bound=Base)

# Never client-writable through a generic update
PROTECTED_COLUMNS = frozenset({"id", "created_at", "updated_at"})


async def fetch_all(
    db: AsyncSession, model: type[ModelT], *criteria, order_by: Sequence = (),
    limit: int | None = None,
) -> list[ModelT]:
    query = select(model).where(*criteria).order_by(*order_by)
    if limit is not None:
        query = query.limit(limit)
    result = await db.execute(query)
    return list(result.scalars().all())


async def fetch_one_or_none(
    db: AsyncSession, model: type[ModelT], *criteria,
) -> ModelT | None:
    result = await db.execute(select(model).where(*criteria))
    return result.scalars().first()


async def fetch_by_id_or_404(
    db: AsyncSession, model: type[ModelT], record_id: str, resource: str,
) -> ModelT:
    row = await fetch_one_or_none(db, model, model.id == record_id)
    if row is None:
        raise ResourceNotFoundError(resource, record_id)
    return row


async def insert_returning(
    db: AsyncSession, model: type[ModelT], values: dict[str, Any],
) -> ModelT:
    """INSERT ... RETURNING *. Column defaults fill id and timestamps."""
    result = await db.execute(insert(model).values(**values).returning(model))
    return result.scalar_one()


async def update_returning(
    db: AsyncSession,
    model: type[ModelT],
    record_id: str,
    values: dict[str, Any],
    resource: str,
) -> ModelT:
    """UPDATE ... WHERE id = :id RETURNING *, or 404 when nothing matched."""
    values = {k: v for k, v in values.items() if k not in PROTECTED_COLUMNS}
    if not values:
        raise NoFieldsToUpdateError()
    if "updated_at" in model.__table__.c:
        values["updated_at"] = utcnow()
    result = await db.execute(
        update(model)
        .where(model.id == record_id)
        .values(**values)
        .returning(model),
    )
    row = result.scalar_one_or_none()
    if row is None:
        raise ResourceNotFoundError(resource, record_id)
    return row


async def delete_where(db: AsyncSession, model: type[Base], *criteria) -> int:
    """DELETE ... WHERE criteria. Returns the number of rows removed."""
    result = await db.execute(delete(model).where(*criteria))
    return result.rowcount or 0


async def delete_by_id(db: AsyncSession, model: type[Base], record_id: str) -> bool:
    return await delete_where(db, model, model.id == record_id) > 0
