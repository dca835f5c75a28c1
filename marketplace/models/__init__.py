"""
Models package - organized by domain
"""
from .enums import UserRole, UserStatus, BusinessStatus, OrderStatus
from .user import User
from .business import Business
from .product import Product
from .order import Order, OrderItem, GiftOrderMetadata

__all__ = [
    "UserRole",
    "UserStatus",
    "BusinessStatus",
    "OrderStatus",
    "User",
    "Business",
    "Product",
    "Order",
    "OrderItem",
    "GiftOrderMetadata",
]
