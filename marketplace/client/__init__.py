"""
Client-side pieces for businesses collecting gift orders: an HTTP client for
the gift endpoints, mutation state wrappers, and the recipient-info form.
"""
from .api import GiftApiError, GiftOrdersClient
from .mutation import Mutation, MutationStatus, use_redeem_gift, use_verify_gift
from .recipient_form import RecipientInfoForm

__all__ = [
    "GiftApiError",
    "GiftOrdersClient",
    "Mutation",
    "MutationStatus",
    "RecipientInfoForm",
    "use_redeem_gift",
    "use_verify_gift",
]
