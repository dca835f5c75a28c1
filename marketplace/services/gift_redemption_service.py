"""
Gift Redemption Service

Verifies that a business owner may claim a gift order identified by
(order ID, redemption code), and commits the redemption.

Check order:
1. caller has the business role
2. caller owns a business
3. (order ID, redemption code) matches a gift order
4. that order belongs to the caller's business
5. recipient identity is present on the matched order

Verification is read-only. Redemption flips ``is_redeemed`` with a single
conditional UPDATE so two concurrent redeemers cannot both succeed.
"""
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Tuple

from pydantic import ValidationError
from sqlalchemy.orm import Session

from ..config import settings
from ..core.errors import Conflict, Forbidden, IntegrityFault, InternalError, NotFound
from ..models import Business, GiftOrderMetadata, Order, OrderItem, OrderStatus, Product, User, UserRole
from ..schemas.gift import GiftOrderItem, GiftOrderView, GiftProduct, GiftRecipient
from ..utils.log import get_logger, log_gift_event

logger = get_logger(__name__)

MSG_NOT_BUSINESS_OWNER = "Forbidden: User is not a business owner."
MSG_NO_BUSINESS = "Forbidden: No business associated with this user."
MSG_LOOKUP_MISS = "Invalid Order ID and Redemption Code combination."
MSG_WRONG_BUSINESS = "This gift order does not belong to your business."
MSG_MISSING_RECIPIENT = "Order is missing recipient information."
MSG_ALREADY_REDEEMED = "This gift has already been redeemed."


def to_number(value) -> float:
    """
    Coerce a currency value to a native number.

    Accepts Decimal (Numeric columns), fixed-point strings and plain numbers.
    Raises TypeError for missing values and InvalidOperation for strings that
    are not numbers.
    """
    if value is None or isinstance(value, bool):
        raise TypeError(f"Expected a numeric value, got {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, Decimal):
        return float(value)
    return float(Decimal(str(value).strip()))


def resolve_owned_business(db: Session, user: User) -> Business:
    """Return the business owned by ``user``, or raise Forbidden."""
    if user.role != UserRole.BUSINESS:
        raise Forbidden(MSG_NOT_BUSINESS_OWNER)

    business = db.query(Business).filter(Business.owner_id == user.id).first()
    if not business:
        raise Forbidden(MSG_NO_BUSINESS)
    return business


def find_gift_order(
    db: Session,
    order_id: int,
    redemption_code: str
) -> Optional[Tuple[Order, GiftOrderMetadata]]:
    """
    Find the gift order matching both the order ID and the redemption code.

    Returns None when either part is wrong; callers must not reveal which.
    """
    row = (
        db.query(Order, GiftOrderMetadata)
        .join(GiftOrderMetadata, GiftOrderMetadata.order_id == Order.id)
        .filter(
            Order.id == order_id,
            GiftOrderMetadata.redemption_code == redemption_code,
        )
        .first()
    )
    if row is None:
        return None

    order, gift = row
    # Exact, case-sensitive match regardless of the column collation
    if gift.redemption_code != redemption_code:
        return None
    return order, gift


def parse_item_rows(order_id: int, rows, lenient: Optional[bool] = None) -> List[GiftOrderItem]:
    """
    Turn joined (order item, product) rows into typed items.

    In lenient mode a row that fails to parse is logged and the whole list
    degrades to empty; otherwise the failure surfaces as InternalError.
    """
    if lenient is None:
        lenient = settings.GIFT_ITEMS_LENIENT

    try:
        return [
            GiftOrderItem(
                id=row.id,
                quantity=row.quantity,
                unit_price=to_number(row.unit_price),
                total_price=to_number(row.total_price),
                product=GiftProduct(
                    id=row.product_id,
                    name=row.product_name,
                    image_url=row.product_image_url,
                ),
            )
            for row in rows
        ]
    except (ValidationError, TypeError, ValueError, InvalidOperation) as e:
        if not lenient:
            raise InternalError(f"Failed to load items for order {order_id}.") from e
        logger.error(f"Failed to parse items for order {order_id}: {e}", exc_info=True)
        return []


def load_gift_order_items(db: Session, order_id: int) -> List[GiftOrderItem]:
    """Fetch an order's line items with their product summary."""
    rows = (
        db.query(
            OrderItem.id,
            OrderItem.quantity,
            OrderItem.unit_price,
            OrderItem.total_price,
            Product.id.label("product_id"),
            Product.name.label("product_name"),
            Product.image_url.label("product_image_url"),
        )
        .join(Product, Product.id == OrderItem.product_id)
        .filter(OrderItem.order_id == order_id)
        .order_by(OrderItem.id)
        .all()
    )
    return parse_item_rows(order_id, rows)


def _authorize_gift_order(
    db: Session,
    business: Business,
    order_id: int,
    redemption_code: str
) -> Tuple[Order, GiftOrderMetadata]:
    match = find_gift_order(db, order_id, redemption_code)
    if match is None:
        log_gift_event(logger, "lookup", order_id, business.id, False, {"reason": "no_match"})
        raise NotFound(MSG_LOOKUP_MISS)

    order, gift = match
    if order.business_id != business.id:
        log_gift_event(logger, "lookup", order.id, business.id, False, {"reason": "other_business"})
        raise Forbidden(MSG_WRONG_BUSINESS)

    return order, gift


def _require_recipient(order: Order, gift: GiftOrderMetadata) -> GiftRecipient:
    if not (gift.recipient_name and gift.recipient_phone and gift.recipient_national_id):
        logger.error(f"Missing recipient information for order {order.id}")
        raise IntegrityFault(MSG_MISSING_RECIPIENT)

    return GiftRecipient(
        recipient_name=gift.recipient_name,
        recipient_phone=gift.recipient_phone,
        recipient_national_id=gift.recipient_national_id,
    )


def _build_view(
    order: Order,
    gift: GiftOrderMetadata,
    recipient: GiftRecipient,
    items: List[GiftOrderItem]
) -> GiftOrderView:
    return GiftOrderView(
        id=order.id,
        status=order.status,
        total_amount=to_number(order.total_amount),
        currency=order.currency,
        created_at=order.created_at or datetime.utcnow(),
        recipient_info=recipient,
        is_gift=True,
        is_redeemed=bool(gift.is_redeemed),
        items=items,
    )


def verify_gift_order(
    db: Session,
    business: Business,
    order_id: int,
    redemption_code: str
) -> GiftOrderView:
    """
    Look up a gift order for ``business`` (see resolve_owned_business).

    Read-only: never changes ``is_redeemed`` or the order status.

    Raises:
        Forbidden: the order belongs to another business
        NotFound: no gift order matches the (order ID, code) pair
        IntegrityFault: the matched order has no recipient identity
    """
    order, gift = _authorize_gift_order(db, business, order_id, redemption_code)
    recipient = _require_recipient(order, gift)
    items = load_gift_order_items(db, order.id)

    view = _build_view(order, gift, recipient, items)
    log_gift_event(logger, "verify", order.id, business.id, True, {
        "items": len(items),
        "redeemed": view.is_redeemed,
    })
    return view


def redeem_gift_order(
    db: Session,
    business: Business,
    order_id: int,
    redemption_code: str
) -> GiftOrderView:
    """
    Mark a gift order as collected by the caller's business.

    Same checks as verification, plus:
        Conflict: the gift was already redeemed, including by a concurrent
            request that won the conditional update
    """
    order, gift = _authorize_gift_order(db, business, order_id, redemption_code)

    if gift.is_redeemed:
        log_gift_event(logger, "redeem", order.id, business.id, False, {"reason": "already_redeemed"})
        raise Conflict(MSG_ALREADY_REDEEMED)

    recipient = _require_recipient(order, gift)
    items = load_gift_order_items(db, order.id)
    view = _build_view(order, gift, recipient, items)

    now = datetime.utcnow()
    claimed = (
        db.query(GiftOrderMetadata)
        .filter(
            GiftOrderMetadata.order_id == order.id,
            GiftOrderMetadata.is_redeemed == False,  # noqa: E712
        )
        .update(
            {GiftOrderMetadata.is_redeemed: True, GiftOrderMetadata.redeemed_at: now},
            synchronize_session=False,
        )
    )
    # zero rows: a concurrent redeemer won, nothing was written
    if claimed != 1:
        log_gift_event(logger, "redeem", order.id, business.id, False, {"reason": "lost_race"})
        raise Conflict(MSG_ALREADY_REDEEMED)

    db.query(Order).filter(Order.id == order.id).update(
        {Order.status: OrderStatus.COLLECTED, Order.updated_at: now},
        synchronize_session=False,
    )
    db.commit()

    log_gift_event(logger, "redeem", order.id, business.id, True, {"items": len(items)})
    return view.model_copy(update={"status": OrderStatus.COLLECTED, "is_redeemed": True})
