"""ORM Models - SQLAlchemy declarative models for all persisted rows.

Invariants:
    - All models inherit from Base (db/base.py)
    - No relationship() declarations: joins are written explicitly in queries

Design Decisions:
    - One file per entity; loyalty tables share a file
    - All models imported here so Base.metadata is complete for create_all
"""

from freezefit.models.message import Message  # noqa: F401
from freezefit.models.appointment import Appointment  # noqa: F401
from freezefit.models.profile import Profile  # noqa: F401
from freezefit.models.institute import Institute  # noqa: F401
from freezefit.models.review import Review  # noqa: F401
from freezefit.models.business_hours import BusinessHours  # noqa: F401
from freezefit.models.gallery_image import GalleryImage  # noqa: F401
from freezefit.models.therapist import Therapist  # noqa: F401
from freezefit.models.service import Service  # noqa: F401
from freezefit.models.loyalty import (  # noqa: F401
    CustomerLoyalty, LoyaltyTransaction, LoyaltyGift, GiftRedemption,
)
from freezefit.models.workshop import Workshop  # noqa: F401
from freezefit.models.activity import Activity  # noqa: F401
