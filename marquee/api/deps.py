from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from marquee.core.config import settings
from marquee.core.exceptions import Unauthenticated
from marquee.core.security import decode_token
from marquee.db.session import get_db
from marquee.models.user import User
from marquee.services.booking_coordinator import BookingCoordinator
from marquee.services.payment import PaymentGateway, get_payment_gateway

# Tokens are issued by the identity service; this API only verifies them
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/auth/login", auto_error=False)


def get_optional_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """The signed-in user, or None when the request carries no valid token."""
    if not token:
        return None
    subject = decode_token(token)
    if not subject:
        return None
    try:
        user_id = UUID(subject)
    except ValueError:
        return None
    user = db.query(User).filter(User.id == user_id).first()
    if not user or not user.is_active:
        return None
    return user


def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    if user is None:
        raise Unauthenticated()
    return user


def get_current_admin_user(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required",
        )
    return current_user


def get_booking_coordinator(
    db: Session = Depends(get_db),
    payment_gateway: PaymentGateway = Depends(get_payment_gateway),
) -> BookingCoordinator:
    return BookingCoordinator(db, payment_gateway)
