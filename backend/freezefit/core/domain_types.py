"""Domain Types - enums for every constrained string column.

Invariants:
    - All valid states encoded as Enums; no raw string matching in routes
    - str Enums: values are what the database stores and the API returns

Design Decisions:
    - Loyalty level values are the Hebrew labels the client renders directly
"""

from enum import Enum


class SenderType(str, Enum):
    """Who authored a message."""
    CUSTOMER = "customer"
    INSTITUTE = "institute"


class MessageType(str, Enum):
    GENERAL = "general"
    BOOKING = "booking"
    SUPPORT = "support"


class AppointmentStatus(str, Enum):
    """Appointment lifecycle: pending -> confirmed -> completed | cancelled."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class UserRole(str, Enum):
    CUSTOMER = "customer"
    PROVIDER = "provider"
    ADMIN = "admin"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class LoyaltyLevel(str, Enum):
    """Loyalty tiers, ordered from lowest to highest."""
    BRONZE = "ברונזה"
    SILVER = "כסף"
    GOLD = "זהב"
    PLATINUM = "פלטינה"
    DIAMOND = "יהלום"


class TransactionType(str, Enum):
    EARNED = "earned"
    SPENT = "spent"
