from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship

from ..db import Base
from .enums import BusinessStatus, enum_values


class Business(Base):
    """A storefront owned by exactly one business-role user"""
    __tablename__ = "businesses"

    id = Column(Integer, primary_key=True)
    owner_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False, index=True)
    business_name = Column(String, nullable=False)
    status = Column(
        SQLEnum(BusinessStatus, native_enum=False, values_callable=enum_values, length=20),
        nullable=False,
        default=BusinessStatus.PENDING,
        index=True,
    )

    approved_at = Column(DateTime, nullable=True)
    approved_by = Column(Integer, ForeignKey("users.id"), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=True)

    owner = relationship("User", foreign_keys=[owner_id])
    products = relationship("Product", back_populates="business")
