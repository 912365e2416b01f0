"""SQLAlchemy Declarative Base - shared base class and column defaults for all ORM models.

Invariants:
    - All models inherit from Base
    - Row ids are UUID strings generated server-side (new_id)
    - Timestamps are timezone-aware UTC (utcnow)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all FreezeFit ORM models."""
    pass
