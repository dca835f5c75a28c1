"""
Closed status/role sets shared by models, schemas and services.
"""
import enum


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    USER = "user"
    BUSINESS = "business"


class UserStatus(str, enum.Enum):
    PENDING = "pending"
    ACTIVE = "active"
    SUSPENDED = "suspended"
    BANNED = "banned"


class BusinessStatus(str, enum.Enum):
    PENDING = "pending"
    ACTIVE = "active"
    REJECTED = "rejected"
    SUSPENDED = "suspended"
    BANNED = "banned"


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COLLECTED = "collected"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


def enum_values(enum_cls):
    """Persist enum values ("admin") rather than member names ("ADMIN")."""
    return [member.value for member in enum_cls]
