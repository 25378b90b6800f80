from uuid import UUID
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from marquee.core.exceptions import Unauthenticated
from marquee.db.session import get_db
from marquee.api.deps import get_booking_coordinator, get_current_user, get_optional_user
from marquee.models.booking import BookingStatus
from marquee.models.user import User
from marquee.schemas.booking import BookingCreate, BookingDetail, PaymentRetry
from marquee.schemas.common import (
    ErrorResponse,
    PaginatedResponse,
    PaymentErrorResponse,
    SeatSelectionErrorResponse,
    SeatsUnavailableError,
)
from marquee.services import reservation
from marquee.services.booking_coordinator import BookingCoordinator
from marquee.services.catalog import get_showtime
from marquee.services.projections import get_booking_detail, list_user_bookings
from marquee.services.seat_store import SeatStore

router = APIRouter(prefix="/bookings", tags=["Bookings"])

PAYMENT_RESPONSES = {
    202: {"model": PaymentErrorResponse, "description": "Payment outcome not known yet"},
    401: {"model": ErrorResponse},
    402: {"model": PaymentErrorResponse, "description": "Payment declined, booking kept pending"},
}


# ---------------------------------------------------------------------------
# POST /bookings: reserve seats and pay
# ---------------------------------------------------------------------------


@router.post(
    "/",
    response_model=BookingDetail,
    status_code=status.HTTP_201_CREATED,
    responses={
        **PAYMENT_RESPONSES,
        409: {"model": SeatsUnavailableError, "description": "Someone else booked a seat"},
        422: {"model": SeatSelectionErrorResponse},
    },
)
def create_booking(
    data: BookingCreate,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
    coordinator: BookingCoordinator = Depends(get_booking_coordinator),
):
    """
    Validate the selection against the live seat map, then commit it.

    - The total is always unit price × seat count from the stored showtime.
    - 409 means another user won a seat: refresh the seat map and reselect.
    - 402 / 202 mean the booking exists as `pending`; pay again via
      `POST /bookings/{id}/pay` (after checking the booking, for 202).
    """
    if current_user is None:
        raise Unauthenticated()
    user_id = current_user.id

    get_showtime(db, data.showtime_id)
    seats = SeatStore(db).list_seats(data.showtime_id)
    validated = reservation.validate(data.showtime_id, data.seat_ids, data.ticket_count, seats)

    booking = coordinator.commit(user_id, validated, data.payment_method)
    return get_booking_detail(db, booking.id, user_id)


# ---------------------------------------------------------------------------
# POST /bookings/{id}/pay: retry payment for a pending booking
# ---------------------------------------------------------------------------


@router.post("/{booking_id}/pay", response_model=BookingDetail, responses=PAYMENT_RESPONSES)
def pay_booking(
    booking_id: UUID,
    data: Optional[PaymentRetry] = None,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
    coordinator: BookingCoordinator = Depends(get_booking_coordinator),
):
    """Charge a pending booking again. Its seats stay booked meanwhile."""
    user_id = current_user.id if current_user else None
    payment_method = data.payment_method if data else None
    booking = coordinator.retry_payment(user_id, booking_id, payment_method)
    return get_booking_detail(db, booking.id, user_id)


# ---------------------------------------------------------------------------
# GET /bookings: list current user's bookings
# ---------------------------------------------------------------------------


@router.get("/", response_model=PaginatedResponse[BookingDetail])
def list_my_bookings(
    status: Optional[BookingStatus] = Query(
        None, description="Filter by status: pending, paid, cancelled"
    ),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=50),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Return the authenticated user's bookings, newest first."""
    return list_user_bookings(db, current_user.id, status=status, page=page, limit=limit)


# ---------------------------------------------------------------------------
# GET /bookings/{id}: single booking detail
# ---------------------------------------------------------------------------


@router.get("/{booking_id}", response_model=BookingDetail)
def get_booking(
    booking_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Return a single booking. Only the owning user can access it."""
    return get_booking_detail(db, booking_id, current_user.id)
