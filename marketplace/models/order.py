"""
Order models: orders, their line items, and the one-to-one gift metadata
row that turns an order into a gift order.
"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, Numeric, Boolean, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship

from ..db import Base
from .enums import OrderStatus, enum_values


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    business_id = Column(Integer, ForeignKey("businesses.id"), nullable=False, index=True)
    buyer_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    status = Column(
        SQLEnum(OrderStatus, native_enum=False, values_callable=enum_values, length=20),
        nullable=False,
        default=OrderStatus.PENDING,
        index=True,
    )
    total_amount = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="USD")

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=True)

    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan")
    gift_metadata = relationship(
        "GiftOrderMetadata", uselist=False, back_populates="order", cascade="all, delete-orphan"
    )


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)

    order = relationship("Order", back_populates="items")
    product = relationship("Product")


class GiftOrderMetadata(Base):
    """Recipient identity and redemption state for a gift order"""
    __tablename__ = "gift_order_metadata"

    order_id = Column(Integer, ForeignKey("orders.id"), primary_key=True)
    redemption_code = Column(String, nullable=False, index=True)

    # Nullable at the column level; a gift order missing any of these is a
    # data-integrity fault, reported as such on verification.
    recipient_name = Column(String, nullable=True)
    recipient_phone = Column(String, nullable=True)
    recipient_national_id = Column(String, nullable=True)

    sender_name = Column(String, nullable=True)
    sender_phone = Column(String, nullable=True)

    is_redeemed = Column(Boolean, nullable=False, default=False)
    redeemed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    order = relationship("Order", back_populates="gift_metadata")
