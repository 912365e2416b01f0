"""Message ORM - customer/institute correspondence.

Invariants:
    - sender_type is non-nullable and defaults to "customer"
    - institute_id is optional (general inquiries have no institute)
    - is_read starts false; only flipped by PUT /messages/{id}/read or an update
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from freezefit.core.domain_types import MessageType, SenderType
from freezefit.db.base import Base, new_id, utcnow


class Message(Base):
    __tablename__ = "messages"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    institute_id: Mapped[str | None] = mapped_column(
        String(64), nullable=True, index=True,
    )
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    sender_type: Mapped[str] = mapped_column(
        String(20), nullable=False, default=SenderType.CUSTOMER.value,
    )
    message_type: Mapped[str] = mapped_column(
        String(20), nullable=False, default=MessageType.GENERAL.value,
    )
    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
