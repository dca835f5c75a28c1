"""
Admin Moderation Router
Ban/suspend/reactivate users and approve/reject/suspend businesses
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..core.errors import MarketplaceError, InternalError
from ..db import get_db
from ..dependencies.auth import require_admin
from ..models import Business, User
from ..schemas.admin import (
    BusinessActionRequest,
    BusinessModerationResponse,
    BusinessRow,
    PublicUser,
    UserActionRequest,
    UserModerationResponse,
)
from ..services import moderation_service
from ..utils.log import get_logger

router = APIRouter(prefix="/admin", tags=["admin"])
logger = get_logger(__name__)


def _user_response(user: User) -> UserModerationResponse:
    return UserModerationResponse(user=PublicUser.from_user(user))


def _business_response(business: Business) -> BusinessModerationResponse:
    return BusinessModerationResponse(business=BusinessRow.from_business(business))


def _run(action: str, present, fn, *args):
    """Run a moderation call and shape its result; unexpected faults become 'Failed to <action>'."""
    try:
        return present(fn(*args))
    except MarketplaceError:
        raise
    except Exception as e:
        logger.error(f"Failed to {action}: {e}", exc_info=True)
        raise InternalError(f"Failed to {action}")


@router.post("/users/ban", response_model=UserModerationResponse)
def ban_user(
    request: UserActionRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    return _run("ban user", _user_response, moderation_service.ban_user, db, admin, request.user_id)


@router.post("/users/suspend", response_model=UserModerationResponse)
def suspend_user(
    request: UserActionRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    return _run("suspend user", _user_response, moderation_service.suspend_user, db, admin, request.user_id)


@router.post("/users/reactivate", response_model=UserModerationResponse)
def reactivate_user(
    request: UserActionRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    return _run("reactivate user", _user_response, moderation_service.reactivate_user, db, admin, request.user_id)


@router.post("/businesses/suspend", response_model=BusinessModerationResponse)
def suspend_business(
    request: BusinessActionRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    return _run(
        "suspend business", _business_response, moderation_service.suspend_business, db, admin, request.business_id
    )


@router.post("/businesses/approve", response_model=BusinessModerationResponse)
def approve_business(
    request: BusinessActionRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    return _run(
        "approve business", _business_response, moderation_service.approve_business, db, admin, request.business_id
    )


@router.post("/businesses/reject", response_model=BusinessModerationResponse)
def reject_business(
    request: BusinessActionRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    return _run(
        "reject business", _business_response, moderation_service.reject_business, db, admin, request.business_id
    )
