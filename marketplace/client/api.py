"""
HTTP client for the gift-order endpoints

Wraps an ``httpx.Client`` whose base_url points at the marketplace API.
"""
import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from ..schemas.gift import GiftOrderLookup, GiftOrderView

logger = logging.getLogger(__name__)

DEFAULT_VERIFY_ERROR = "Failed to verify gift order."
DEFAULT_REDEEM_ERROR = "Failed to redeem gift code."


class GiftApiError(Exception):
    """A gift request failed; ``message`` is safe to show to the user."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class GiftOrdersClient:
    """Gift order API client"""

    def __init__(self, http: httpx.Client, token: Optional[str] = None):
        self.http = http
        self.token = token

    def _get_headers(self):
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def _post(self, path: str, order_id: int, redemption_code: str, default_error: str) -> GiftOrderView:
        try:
            lookup = GiftOrderLookup(order_id=order_id, redemption_code=redemption_code)
        except ValidationError as e:
            first = e.errors()[0]
            raise GiftApiError(first.get("msg") or default_error) from e

        try:
            response = self.http.post(
                path,
                json=lookup.model_dump(by_alias=True),
                headers=self._get_headers(),
            )
        except httpx.HTTPError as e:
            logger.warning(f"Gift request to {path} failed: {e}")
            raise GiftApiError(default_error) from e

        if response.is_error:
            raise GiftApiError(_error_message(response, default_error), response.status_code)

        return GiftOrderView.model_validate(response.json())

    def verify_gift(self, order_id: int, redemption_code: str) -> GiftOrderView:
        """Look up a gift order without redeeming it."""
        return self._post("/orders/gift/verify", order_id, redemption_code, DEFAULT_VERIFY_ERROR)

    def redeem_gift(self, order_id: int, redemption_code: str) -> GiftOrderView:
        """Mark a gift order collected."""
        return self._post("/orders/gift/redeem", order_id, redemption_code, DEFAULT_REDEEM_ERROR)


def _error_message(response: httpx.Response, default: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return default
    if isinstance(body, dict) and isinstance(body.get("error"), str) and body["error"]:
        return body["error"]
    return default
