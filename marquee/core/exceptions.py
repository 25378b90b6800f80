"""
Booking error taxonomy.

Every error carries an ``action`` hint so the presentation layer can tell the
user whether to change their seat selection, retry payment, or sign in.
"""

import enum
from typing import Iterable, List, Optional
from uuid import UUID


class Action(str, enum.Enum):
    RESELECT_SEATS = "reselect_seats"
    RETRY_PAYMENT = "retry_payment"
    POLL_PAYMENT = "poll_payment"
    SIGN_IN = "sign_in"
    RETRY_LATER = "retry_later"
    NONE = "none"


class RejectionReason(str, enum.Enum):
    INVALID_TICKET_COUNT = "invalid_ticket_count"
    DUPLICATE_SEAT = "duplicate_seat"
    UNKNOWN_SEAT = "unknown_seat"
    SEAT_BOOKED = "seat_booked"
    WRONG_SEAT_COUNT = "wrong_seat_count"


class BookingError(Exception):
    """Base class for every error the booking core raises."""

    error = "booking_error"
    status_code = 400
    action = Action.NONE

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def details(self) -> dict:
        """Extra fields rendered alongside error/message/action."""
        return {}


class SeatSelectionError(BookingError):
    """The chosen seats break a selection rule. Never reaches persistence."""

    error = "invalid_selection"
    status_code = 422
    action = Action.RESELECT_SEATS

    def __init__(self, reason: RejectionReason, message: str, seat_ids: Iterable[UUID] = ()) -> None:
        self.reason = reason
        self.seat_ids: List[UUID] = list(seat_ids)
        super().__init__(message)

    def details(self) -> dict:
        return {"reason": self.reason.value, "seat_ids": [str(s) for s in self.seat_ids]}


class SeatsUnavailable(BookingError):
    """Another session booked one of the seats after it was validated."""

    error = "seats_unavailable"
    status_code = 409
    action = Action.RESELECT_SEATS

    def __init__(self, seat_ids: Iterable[UUID], message: str = "Someone else booked one or more of these seats") -> None:
        self.seat_ids: List[UUID] = list(seat_ids)
        super().__init__(message)

    def details(self) -> dict:
        return {"unavailable_seat_ids": [str(s) for s in self.seat_ids]}


class _BookingPaymentError(BookingError):
    def __init__(self, booking_id: UUID, message: str, booking_number: Optional[str] = None) -> None:
        self.booking_id = booking_id
        self.booking_number = booking_number
        super().__init__(message)

    def details(self) -> dict:
        return {"booking_id": str(self.booking_id), "booking_number": self.booking_number}


class PaymentFailed(_BookingPaymentError):
    """The charge was declined. The booking stays pending and keeps its seats."""

    error = "payment_failed"
    status_code = 402
    action = Action.RETRY_PAYMENT


class PaymentIndeterminate(_BookingPaymentError):
    """The charge timed out; it may or may not have gone through."""

    error = "payment_indeterminate"
    status_code = 202
    action = Action.POLL_PAYMENT


class Unauthenticated(BookingError):
    error = "unauthenticated"
    status_code = 401
    action = Action.SIGN_IN

    def __init__(self, message: str = "Sign in to book seats") -> None:
        super().__init__(message)


class StorageFailure(BookingError):
    error = "storage_failure"
    status_code = 503
    action = Action.RETRY_LATER

    def __init__(self, message: str = "Booking could not be saved, please try again") -> None:
        super().__init__(message)


class NotFound(BookingError):
    error = "not_found"
    status_code = 404


class InvalidBookingState(BookingError):
    error = "invalid_booking_state"
    status_code = 409
