"""Message Schemas - user_id, subject and content are required on create."""

from pydantic import BaseModel, Field

from freezefit.core.domain_types import MessageType, SenderType
from freezefit.schemas.common import UpdateSchema


class MessageCreate(BaseModel):
    user_id: str = Field(min_length=1)
    subject: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    institute_id: str | None = None
    sender_type: SenderType | None = None
    message_type: MessageType | None = None
    is_read: bool = False


class MessageUpdate(UpdateSchema):
    subject: str | None = Field(None, min_length=1, max_length=255)
    content: str | None = Field(None, min_length=1)
    institute_id: str | None = None
    sender_type: SenderType | None = None
    message_type: MessageType | None = None
    is_read: bool | None = None
