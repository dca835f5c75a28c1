from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Enum as SQLEnum

from ..db import Base
from .enums import UserRole, UserStatus, enum_values


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    email = Column(String, unique=True, nullable=False, index=True)
    display_name = Column(String, nullable=False)
    avatar_url = Column(String, nullable=True)
    role = Column(
        SQLEnum(UserRole, native_enum=False, values_callable=enum_values, length=20),
        nullable=False,
        default=UserRole.USER,
    )
    status = Column(
        SQLEnum(UserStatus, native_enum=False, values_callable=enum_values, length=20),
        nullable=False,
        default=UserStatus.ACTIVE,
        index=True,
    )

    address = Column(String, nullable=True)
    # Stored as fixed-point strings, exposed as numbers
    latitude = Column(String, nullable=True)
    longitude = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    national_id = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=True)
