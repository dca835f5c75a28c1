"""
Schemas for the admin moderation API
"""
from datetime import datetime
from typing import Optional

from pydantic import Field

from ..models import User, Business
from ..models.enums import UserRole, UserStatus, BusinessStatus
from .base import CamelModel


class UserActionRequest(CamelModel):
    user_id: int = Field(..., gt=0)


class BusinessActionRequest(CamelModel):
    business_id: int = Field(..., gt=0)


def _coordinate(value: Optional[str]) -> Optional[float]:
    return float(value) if value else None


class PublicUser(CamelModel):
    id: int
    email: str
    display_name: str
    avatar_url: Optional[str] = None
    role: UserRole
    status: UserStatus
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    phone: Optional[str] = None
    national_id: Optional[str] = None

    @classmethod
    def from_user(cls, user: User) -> "PublicUser":
        return cls(
            id=user.id,
            email=user.email,
            display_name=user.display_name,
            avatar_url=user.avatar_url,
            role=user.role,
            status=user.status,
            address=user.address,
            latitude=_coordinate(user.latitude),
            longitude=_coordinate(user.longitude),
            phone=user.phone,
            national_id=user.national_id,
        )


class BusinessRow(CamelModel):
    """Full business row, echoed as stored"""
    id: int
    owner_id: int
    business_name: str
    status: BusinessStatus
    approved_at: Optional[datetime] = None
    approved_by: Optional[int] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    @classmethod
    def from_business(cls, business: Business) -> "BusinessRow":
        return cls(
            id=business.id,
            owner_id=business.owner_id,
            business_name=business.business_name,
            status=business.status,
            approved_at=business.approved_at,
            approved_by=business.approved_by,
            created_at=business.created_at,
            updated_at=business.updated_at,
        )


class UserModerationResponse(CamelModel):
    user: PublicUser


class BusinessModerationResponse(CamelModel):
    business: BusinessRow
