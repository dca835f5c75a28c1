"""
Gift Order Router

Business-facing endpoints for checking and collecting gift orders by
order ID + redemption code.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..core.errors import MarketplaceError, InternalError
from ..db import get_db
from ..dependencies.auth import get_business_owner
from ..models import Business
from ..schemas.gift import GiftOrderLookup, GiftOrderView
from ..services import gift_redemption_service
from ..utils.log import get_logger

router = APIRouter(prefix="/orders/gift", tags=["gift-orders"])
logger = get_logger(__name__)


@router.post("/verify", response_model=GiftOrderView)
def verify_gift(
    request: GiftOrderLookup,
    business: Business = Depends(get_business_owner),
    db: Session = Depends(get_db)
):
    """
    Verify a gift order for the caller's business without redeeming it.

    Auth: business owner of the order's business
    """
    try:
        return gift_redemption_service.verify_gift_order(
            db, business, request.order_id, request.redemption_code
        )
    except MarketplaceError:
        raise
    except Exception as e:
        logger.error(f"Error verifying gift code for order {request.order_id}: {e}", exc_info=True)
        raise InternalError(str(e) or None)


@router.post("/redeem", response_model=GiftOrderView)
def redeem_gift(
    request: GiftOrderLookup,
    business: Business = Depends(get_business_owner),
    db: Session = Depends(get_db)
):
    """
    Redeem a gift order: marks it collected and the gift as redeemed.

    Auth: business owner of the order's business
    """
    try:
        return gift_redemption_service.redeem_gift_order(
            db, business, request.order_id, request.redemption_code
        )
    except MarketplaceError:
        raise
    except Exception as e:
        logger.error(f"Error redeeming gift code for order {request.order_id}: {e}", exc_info=True)
        raise InternalError(str(e) or None)
