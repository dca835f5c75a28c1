"""
Recipient identity collected for a gift order.

Rules: name non-empty; phone at least 10 characters of an optional leading
"+" followed by digits, spaces, parentheses, hyphens or periods; national ID
5-20 letters, digits, hyphens or spaces.
"""
import re

from pydantic import field_validator
from pydantic_core import PydanticCustomError

from .base import CamelModel

PHONE_PATTERN = re.compile(r"^\+?[\d\s().-]{10,}$")
NATIONAL_ID_PATTERN = re.compile(r"^[A-Za-z0-9\-\s]+$")


def _invalid(message: str) -> PydanticCustomError:
    return PydanticCustomError("recipient_info", message)


class RecipientInfo(CamelModel):
    recipient_name: str
    recipient_phone: str
    recipient_national_id: str

    @field_validator("recipient_name")
    @classmethod
    def name_required(cls, value: str) -> str:
        if len(value) < 1:
            raise _invalid("Recipient name is required.")
        return value

    @field_validator("recipient_phone")
    @classmethod
    def phone_shape(cls, value: str) -> str:
        if len(value) < 10:
            raise _invalid("Phone number must be at least 10 digits.")
        if not PHONE_PATTERN.fullmatch(value):
            raise _invalid("Please enter a valid phone number format.")
        return value

    @field_validator("recipient_national_id")
    @classmethod
    def national_id_shape(cls, value: str) -> str:
        if len(value) < 5:
            raise _invalid("National ID must be at least 5 characters.")
        if len(value) > 20:
            raise _invalid("National ID must be no more than 20 characters.")
        if not NATIONAL_ID_PATTERN.fullmatch(value):
            raise _invalid("National ID can only contain letters, numbers, hyphens, and spaces.")
        return value
