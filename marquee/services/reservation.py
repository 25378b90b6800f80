from collections import Counter
from typing import Iterable, Sequence
from uuid import UUID

from marquee.core.exceptions import RejectionReason, SeatSelectionError
from marquee.models.seat import SeatStatus
from marquee.schemas.reservation import ValidatedReservation


def check_selection_shape(candidate_seat_ids: Sequence[UUID], required_count: int) -> None:
    """Rules that need no seat data: a positive ticket count, no duplicates."""
    if isinstance(required_count, bool) or not isinstance(required_count, int) or required_count < 1:
        raise SeatSelectionError(
            RejectionReason.INVALID_TICKET_COUNT,
            f"Ticket count must be at least 1, got {required_count!r}",
        )

    duplicates = [seat_id for seat_id, n in Counter(candidate_seat_ids).items() if n > 1]
    if duplicates:
        raise SeatSelectionError(
            RejectionReason.DUPLICATE_SEAT,
            "The same seat was selected more than once",
            duplicates,
        )


def check_seat_count(candidate_seat_ids: Sequence[UUID], required_count: int) -> None:
    if len(candidate_seat_ids) != required_count:
        raise SeatSelectionError(
            RejectionReason.WRONG_SEAT_COUNT,
            f"Please select exactly {required_count} seat(s), {len(candidate_seat_ids)} selected",
        )


def validate(
    showtime_id: UUID,
    candidate_seat_ids: Sequence[UUID],
    required_count: int,
    current_seats: Iterable,
) -> ValidatedReservation:
    """
    Check a seat selection against the current seat list of a showtime.

    Rules run in order and the first failure is reported:

    1. no seat is selected twice
    2. every seat belongs to the showtime
    3. no seat is already booked
    4. exactly ``required_count`` seats are selected

    ``current_seats`` are Seat rows (or anything with ``id``, ``showtime_id``
    and ``status``). Nothing is written.
    """
    candidate_seat_ids = list(candidate_seat_ids)
    check_selection_shape(candidate_seat_ids, required_count)

    by_id = {seat.id: seat for seat in current_seats if seat.showtime_id == showtime_id}

    unknown = [seat_id for seat_id in candidate_seat_ids if seat_id not in by_id]
    if unknown:
        raise SeatSelectionError(
            RejectionReason.UNKNOWN_SEAT,
            "One or more seats do not belong to this showtime",
            unknown,
        )

    booked = [seat_id for seat_id in candidate_seat_ids if by_id[seat_id].status == SeatStatus.BOOKED]
    if booked:
        raise SeatSelectionError(
            RejectionReason.SEAT_BOOKED,
            "One or more seats are already booked",
            booked,
        )

    check_seat_count(candidate_seat_ids, required_count)

    return ValidatedReservation(
        showtime_id=showtime_id,
        seat_ids=tuple(candidate_seat_ids),
        ticket_count=required_count,
    )
