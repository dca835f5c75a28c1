"""
Moderation Service

Admin-only status transitions on users and businesses. Every transition is a
single UPDATE keyed by primary id; a target that does not exist is reported
as NotFound for both users and businesses.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ..core.errors import Forbidden, InvalidRequest, NotFound
from ..models import Business, BusinessStatus, User, UserRole, UserStatus
from ..utils.log import get_logger

logger = get_logger(__name__)


def _require_admin(admin: User) -> None:
    if admin.role != UserRole.ADMIN:
        raise Forbidden("Forbidden")


def _set_user_status(db: Session, user_id: int, status: UserStatus) -> Optional[User]:
    """Update one user's status; returns the updated row or None."""
    updated = (
        db.query(User)
        .filter(User.id == user_id)
        .update({User.status: status, User.updated_at: datetime.utcnow()}, synchronize_session=False)
    )
    if not updated:
        return None
    db.commit()
    return db.get(User, user_id, populate_existing=True)


def _set_business_status(
    db: Session,
    business_id: int,
    status: BusinessStatus,
    from_status: Optional[BusinessStatus] = None,
    **extra
) -> Optional[Business]:
    """Update one business's status (optionally only from ``from_status``)."""
    query = db.query(Business).filter(Business.id == business_id)
    if from_status is not None:
        query = query.filter(Business.status == from_status)

    values = {Business.status: status, Business.updated_at: datetime.utcnow()}
    values.update({getattr(Business, key): value for key, value in extra.items()})

    updated = query.update(values, synchronize_session=False)
    if not updated:
        return None
    db.commit()
    return db.get(Business, business_id, populate_existing=True)


def ban_user(db: Session, admin: User, user_id: int) -> User:
    _require_admin(admin)
    if user_id == admin.id:
        raise InvalidRequest("Admins cannot ban themselves")

    user = _set_user_status(db, user_id, UserStatus.BANNED)
    if user is None:
        raise NotFound("User not found")

    logger.info(f"Admin {admin.id} banned user {user_id}")
    return user


def suspend_user(db: Session, admin: User, user_id: int) -> User:
    _require_admin(admin)
    if user_id == admin.id:
        raise InvalidRequest("Admins cannot suspend themselves")

    user = _set_user_status(db, user_id, UserStatus.SUSPENDED)
    if user is None:
        raise NotFound("User not found")

    logger.info(f"Admin {admin.id} suspended user {user_id}")
    return user


def reactivate_user(db: Session, admin: User, user_id: int) -> User:
    _require_admin(admin)

    user = _set_user_status(db, user_id, UserStatus.ACTIVE)
    if user is None:
        raise NotFound("User not found")

    logger.info(f"Admin {admin.id} reactivated user {user_id}")
    return user


def suspend_business(db: Session, admin: User, business_id: int) -> Business:
    _require_admin(admin)

    business = _set_business_status(db, business_id, BusinessStatus.SUSPENDED)
    if business is None:
        raise NotFound("Business not found")

    logger.info(f"Admin {admin.id} suspended business {business_id}")
    return business


def _pending_transition_failed(db: Session, business_id: int, action: str) -> Exception:
    current = db.get(Business, business_id)
    if current is None:
        return NotFound("Business not found")
    if current.status != BusinessStatus.PENDING:
        return InvalidRequest(f"Cannot {action} a business with status: {current.status.value}.")
    return InvalidRequest(f"Failed to {action} business.")


def approve_business(db: Session, admin: User, business_id: int) -> Business:
    """Move a pending business to active, recording who approved it."""
    _require_admin(admin)

    now = datetime.utcnow()
    business = _set_business_status(
        db,
        business_id,
        BusinessStatus.ACTIVE,
        from_status=BusinessStatus.PENDING,
        approved_at=now,
        approved_by=admin.id,
    )
    if business is None:
        raise _pending_transition_failed(db, business_id, "approve")

    logger.info(f"Admin {admin.id} approved business {business_id}")
    return business


def reject_business(db: Session, admin: User, business_id: int) -> Business:
    _require_admin(admin)

    business = _set_business_status(
        db,
        business_id,
        BusinessStatus.REJECTED,
        from_status=BusinessStatus.PENDING,
    )
    if business is None:
        raise _pending_transition_failed(db, business_id, "reject")

    logger.info(f"Admin {admin.id} rejected business {business_id}")
    return business
