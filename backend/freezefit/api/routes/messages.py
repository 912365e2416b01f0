"""Messages - customer/provider correspondence.

Invariants:
    - POST requires user_id, subject, content (else 400); sender_type defaults
      to "customer", is_read to false; id and timestamps are server-assigned
    - PUT /{id}/read is a single UPDATE ... RETURNING; 404 when no row matched
    - Listings are ordered by created_at, newest first
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from freezefit.api.envelope import created, ok, serialize_rows
from freezefit.core.domain_types import MessageType, SenderType
from freezefit.db import crud
from freezefit.infrastructure.database import get_db
from freezefit.models.message import Message
from freezefit.schemas.message import MessageCreate, MessageUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/messages", tags=["messages"])

RESOURCE = "Message"


@router.get("")
async def list_messages(db: AsyncSession = Depends(get_db)):
    rows = await crud.fetch_all(db, Message, order_by=[Message.created_at.desc()])
    return ok(serialize_rows(rows))


@router.get("/user/{user_id}")
async def list_user_messages(user_id: str, db: AsyncSession = Depends(get_db)):
    """A customer's messages, newest first."""
    rows = await crud.fetch_all(
        db, Message, Message.user_id == user_id,
        order_by=[Message.created_at.desc()],
    )
    return ok(serialize_rows(rows))


@router.get("/institute/{institute_id}")
async def list_institute_messages(
    institute_id: str, db: AsyncSession = Depends(get_db),
):
    """Provider inbox: messages addressed to one institute, newest first."""
    rows = await crud.fetch_all(
        db, Message, Message.institute_id == institute_id,
        order_by=[Message.created_at.desc()],
    )
    return ok(serialize_rows(rows))


@router.get("/{message_id}")
async def get_message(message_id: str, db: AsyncSession = Depends(get_db)):
    return ok(await crud.fetch_by_id_or_404(db, Message, message_id, RESOURCE))


@router.post("")
async def create_message(body: MessageCreate, db: AsyncSession = Depends(get_db)):
    message = await crud.insert_returning(db, Message, {
        "user_id": body.user_id,
        "institute_id": body.institute_id or None,
        "subject": body.subject,
        "content": body.content,
        "sender_type": (body.sender_type or SenderType.CUSTOMER).value,
        "message_type": (body.message_type or MessageType.GENERAL).value,
        "is_read": body.is_read,
    })
    await db.commit()
    logger.info(
        "Message created",
        extra={"resource": RESOURCE, "record_id": message.id},
    )
    return created(message)


@router.put("/{message_id}/read")
async def mark_message_read(message_id: str, db: AsyncSession = Depends(get_db)):
    message = await crud.update_returning(
        db, Message, message_id, {"is_read": True}, RESOURCE,
    )
    await db.commit()
    return ok(message)


@router.put("/{message_id}")
async def update_message(
    message_id: str, body: MessageUpdate, db: AsyncSession = Depends(get_db),
):
    message = await crud.update_returning(
        db, Message, message_id, body.updatable(), RESOURCE,
    )
    await db.commit()
    return ok(message)


@router.delete("/{message_id}")
async def delete_message(message_id: str, db: AsyncSession = Depends(get_db)):
    deleted = await crud.delete_by_id(db, Message, message_id)
    await db.commit()
    return ok({"deleted": deleted})
