"""
Schemas for the gift-order verification and redemption API
"""
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from ..models.enums import OrderStatus
from .base import CamelModel


class GiftOrderLookup(CamelModel):
    """Request body for /orders/gift/verify and /orders/gift/redeem"""
    order_id: int = Field(..., gt=0, description="Order ID must be a positive number")
    redemption_code: str = Field(..., min_length=1, description="Redemption code is required")


class GiftProduct(CamelModel):
    id: int
    name: str
    image_url: Optional[str] = None


class GiftOrderItem(CamelModel):
    id: int
    quantity: int
    unit_price: float
    total_price: float
    product: GiftProduct


class GiftRecipient(CamelModel):
    recipient_name: str
    recipient_phone: str
    recipient_national_id: str


class GiftOrderView(CamelModel):
    id: int
    status: OrderStatus
    total_amount: float
    currency: str
    created_at: datetime
    recipient_info: GiftRecipient
    is_gift: Literal[True] = True
    is_redeemed: bool
    # Item order is not guaranteed; compare as a set
    items: List[GiftOrderItem] = []
