"""
Booking Transaction Coordinator.

Turns a ValidatedReservation into a durable booking. The write steps run as
one strict pipeline inside a single database transaction:

1. re-read the seats (the seat map may have moved on since validation)
2. stop with SeatsUnavailable if any seat is gone
3. price the booking from the stored showtime price
4. insert the booking as ``pending``
5. insert one booking-seat link per seat
6. compare-and-swap the seats to ``booked``

A conflict at step 6 rolls the whole transaction back, so the booking and its
links never become visible. Only after that commit is the payment collected;
a declined or timed-out charge leaves the booking ``pending`` with its seats
still booked, and the caller may retry payment for the same booking. Each
charge first claims the booking's payment slot with a conditional update, so
concurrent payers for one booking never both reach the gateway.
"""

import logging
import random
import string
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import or_, update
from sqlalchemy.orm import Session

from marquee.core.config import settings
from marquee.core.exceptions import (
    InvalidBookingState,
    NotFound,
    PaymentFailed,
    PaymentIndeterminate,
    SeatsUnavailable,
    Unauthenticated,
)
from marquee.models.booking import Booking, BookingSeat, BookingStatus, PaymentMethod
from marquee.models.seat import SeatStatus
from marquee.schemas.reservation import ValidatedReservation
from marquee.services.catalog import get_showtime
from marquee.services.payment import PaymentGateway, PaymentResult, PaymentTimeout
from marquee.services.pricing import compute_total
from marquee.services.reservation import check_seat_count, check_selection_shape
from marquee.services.unit_of_work import SqlAlchemyUnitOfWork

logger = logging.getLogger(__name__)

# No engine-internal path leads to CANCELLED; that is left to admin/refund flows.
ALLOWED_TRANSITIONS = {
    BookingStatus.PENDING: {BookingStatus.PAID},
    BookingStatus.PAID: set(),
    BookingStatus.CANCELLED: set(),
}


def _generate_booking_number(db: Session) -> str:
    """Generate a unique 'MRQ-XXXXXXXX' booking reference."""
    chars = string.ascii_uppercase + string.digits
    while True:
        number = "MRQ-" + "".join(random.choices(chars, k=8))
        if not db.query(Booking.id).filter(Booking.booking_number == number).first():
            return number


class BookingCoordinator:
    def __init__(self, db: Session, payment_gateway: PaymentGateway):
        self.db = db
        self.payment_gateway = payment_gateway

    def commit(
        self,
        user_id: Optional[UUID],
        reservation: ValidatedReservation,
        payment_method: PaymentMethod,
    ) -> Booking:
        """
        Book and pay for the reserved seats.

        Returns the ``paid`` booking. Raises Unauthenticated, SeatSelectionError,
        NotFound, SeatsUnavailable or StorageFailure with nothing written;
        PaymentFailed or PaymentIndeterminate once the ``pending`` booking exists.
        """
        if user_id is None:
            raise Unauthenticated()

        seat_ids = list(reservation.seat_ids)
        check_selection_shape(seat_ids, reservation.ticket_count)
        check_seat_count(seat_ids, reservation.ticket_count)

        with SqlAlchemyUnitOfWork(self.db) as uow:
            showtime = get_showtime(self.db, reservation.showtime_id)

            # Freshness check
            fresh = {seat.id: seat for seat in uow.seats.get_seats(showtime.id, seat_ids)}
            unavailable = [
                seat_id for seat_id in seat_ids
                if seat_id not in fresh or fresh[seat_id].status == SeatStatus.BOOKED
            ]
            if unavailable:
                logger.info(
                    "Commit refused for user %s on showtime %s: %d seat(s) no longer available",
                    user_id, showtime.id, len(unavailable),
                )
                raise SeatsUnavailable(unavailable)

            # Always priced from the stored showtime, never from a client figure
            total = compute_total(showtime.price, len(seat_ids))

            booking = Booking(
                booking_number=_generate_booking_number(self.db),
                user_id=user_id,
                showtime_id=showtime.id,
                total_amount=total,
                status=BookingStatus.PENDING,
                payment_method=payment_method,
                payment_attempts=0,
            )
            self.db.add(booking)
            self.db.flush()

            for position, seat_id in enumerate(seat_ids):
                self.db.add(BookingSeat(booking_id=booking.id, seat_id=seat_id, position=position))
            self.db.flush()

            uow.seats.mark_booked(seat_ids, showtime.id)
            uow.commit()

        logger.info(
            "Booking %s created pending: %d seat(s) on showtime %s, total %s",
            booking.booking_number, len(seat_ids), showtime.id, total,
        )
        return self._collect_payment(booking)

    def retry_payment(
        self,
        user_id: Optional[UUID],
        booking_id: UUID,
        payment_method: Optional[PaymentMethod] = None,
    ) -> Booking:
        """Charge a pending booking again, optionally with another payment method."""
        if user_id is None:
            raise Unauthenticated()

        with SqlAlchemyUnitOfWork(self.db):
            booking = (
                self.db.query(Booking)
                .filter(Booking.id == booking_id, Booking.user_id == user_id)
                .first()
            )
            if not booking:
                raise NotFound("Booking not found")
            if booking.status != BookingStatus.PENDING:
                raise InvalidBookingState(
                    f"Only pending bookings can be paid (current status: '{booking.status.value}')"
                )

        return self._collect_payment(booking, payment_method)

    # ------------------------------------------------------------------
    # Payment step
    # ------------------------------------------------------------------

    def _collect_payment(self, booking: Booking, payment_method: Optional[PaymentMethod] = None) -> Booking:
        """Charge the persisted total. The coordinator never retries on its own."""
        self._claim_payment(booking, payment_method)
        amount = booking.total_amount
        try:
            result = self.payment_gateway.charge(amount, booking.payment_method, booking.booking_number)
        except PaymentTimeout:
            self._record_outcome(booking, paid=False)
            logger.warning(
                "Payment for booking %s timed out; booking left pending", booking.booking_number
            )
            raise PaymentIndeterminate(
                booking.id,
                "Payment is still being confirmed, check the booking before paying again",
                booking.booking_number,
            )

        paid = result == PaymentResult.SUCCEEDED
        self._record_outcome(booking, paid=paid)

        if not paid:
            logger.info("Payment declined for booking %s", booking.booking_number)
            raise PaymentFailed(
                booking.id,
                "Payment was declined, your seats are kept while you retry",
                booking.booking_number,
            )

        logger.info("Booking %s paid", booking.booking_number)
        return booking

    def _claim_payment(self, booking: Booking, payment_method: Optional[PaymentMethod]) -> None:
        """
        Take the booking's payment slot before charging.

        A conditional UPDATE on a pending booking with no live claim, so of two
        concurrent payers exactly one reaches the gateway. The attempt counter
        is incremented in the same statement.
        """
        now = datetime.now(timezone.utc)
        stale_before = now - timedelta(seconds=settings.PAYMENT_CLAIM_TIMEOUT_SECONDS)
        values = {
            "payment_started_at": now,
            "payment_attempts": Booking.payment_attempts + 1,
        }
        if payment_method is not None:
            values["payment_method"] = payment_method

        with SqlAlchemyUnitOfWork(self.db) as uow:
            result = self.db.execute(
                update(Booking)
                .where(
                    Booking.id == booking.id,
                    Booking.status == BookingStatus.PENDING,
                    or_(
                        Booking.payment_started_at.is_(None),
                        Booking.payment_started_at < stale_before,
                    ),
                )
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                logger.info("Payment for booking %s refused: already paid or in progress", booking.id)
                raise InvalidBookingState("A payment for this booking is already in progress or complete")
            uow.commit()

    def _record_outcome(self, booking: Booking, paid: bool) -> None:
        with SqlAlchemyUnitOfWork(self.db) as uow:
            self.db.refresh(booking)
            booking.payment_started_at = None
            if paid:
                _transition(booking, BookingStatus.PAID)
                booking.paid_at = datetime.now(timezone.utc)
            uow.commit()


def _transition(booking: Booking, to_status: BookingStatus) -> None:
    if to_status not in ALLOWED_TRANSITIONS[booking.status]:
        raise InvalidBookingState(
            f"Booking {booking.booking_number} cannot go from '{booking.status.value}' to '{to_status.value}'"
        )
    booking.status = to_status
