"""
Session resolution: bearer token (or access_token cookie) -> User
"""
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from ..core.errors import Unauthenticated, Forbidden
from ..core.security import decode_access_token
from ..db import get_db
from ..models import Business, User, UserRole, UserStatus
from ..services.gift_redemption_service import resolve_owned_business
from ..utils.log import get_logger

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

BLOCKED_STATUSES = {UserStatus.BANNED, UserStatus.SUSPENDED}


def get_current_user_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> int:
    """
    Get the authenticated user's id from the session token.

    The token's ``sub`` claim carries the integer user id.
    """
    token = credentials.credentials if credentials else None
    if not token:
        token = request.cookies.get("access_token")
    if not token:
        raise Unauthenticated()

    payload = decode_access_token(token)
    subject = payload.get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError):
        logger.warning("Session token carries a non-numeric subject")
        raise Unauthenticated()


def get_current_user(
    request: Request,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> User:
    """Get current user object; banned or suspended accounts are refused."""
    user = db.get(User, user_id)
    if not user:
        raise Unauthenticated()
    if user.status in BLOCKED_STATUSES:
        raise Forbidden(f"User account is {user.status.value}.")

    request.state.user_id = user.id
    return user


# Role gates are dependencies: they are decided before the request body is
# validated, so a caller without the role gets 403 whatever it sent.

def require_admin(user: User = Depends(get_current_user)) -> User:
    """Current user, who must have the admin role."""
    if user.role != UserRole.ADMIN:
        raise Forbidden("Forbidden")
    return user


def get_business_owner(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Business:
    """The business owned by the current business-role user."""
    return resolve_owned_business(db, user)
