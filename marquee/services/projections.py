"""
Read projections for confirmation, booking history and seat selection screens.

Read-only and uncached: every call reads the latest committed state.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session, joinedload

from marquee.core.exceptions import NotFound
from marquee.models.booking import Booking, BookingSeat, BookingStatus
from marquee.models.seat import SeatStatus
from marquee.models.showtime import Showtime
from marquee.schemas.booking import BookingDetail, BookingSeatResponse, BookingShowtimeSummary
from marquee.schemas.common import PaginatedResponse
from marquee.schemas.seat import SeatMapResponse, SeatMapSeat, SeatRow
from marquee.services.pricing import format_amount
from marquee.services.seat_store import SeatStore


def _booking_query(db: Session):
    return db.query(Booking).options(
        joinedload(Booking.showtime).joinedload(Showtime.movie),
        joinedload(Booking.showtime).joinedload(Showtime.theater),
        joinedload(Booking.seats).joinedload(BookingSeat.seat),
    ).execution_options(populate_existing=True)


def serialize_booking(booking: Booking) -> BookingDetail:
    """Convert a Booking ORM object (relations loaded) to its detail view."""
    showtime = booking.showtime
    showtime_summary = BookingShowtimeSummary(
        id=showtime.id,
        movie_title=showtime.movie.title if showtime.movie else "",
        theater_name=showtime.theater.name if showtime.theater else "",
        city=showtime.theater.city if showtime.theater else "",
        show_date=showtime.show_date,
        start_time=showtime.start_time,
        unit_price=showtime.price,
    )

    seats_out = [
        BookingSeatResponse(
            id=bs.seat.id,
            row=bs.seat.row_label,
            number=bs.seat.seat_number,
            label=bs.seat.label,
        )
        for bs in booking.seats
    ]

    return BookingDetail(
        id=booking.id,
        booking_number=booking.booking_number,
        short_reference=str(booking.id)[:8].upper(),
        showtime_id=booking.showtime_id,
        status=booking.status,
        payment_method=booking.payment_method,
        payment_attempts=booking.payment_attempts,
        ticket_count=len(seats_out),
        total_amount=booking.total_amount,
        display_total=format_amount(booking.total_amount),
        created_at=booking.created_at,
        paid_at=booking.paid_at,
        showtime=showtime_summary,
        seats=seats_out,
    )


def get_booking_detail(db: Session, booking_id: UUID, user_id: Optional[UUID] = None) -> BookingDetail:
    """A booking with its showtime and seats. With ``user_id``, only the owner's booking is found."""
    query = _booking_query(db).filter(Booking.id == booking_id)
    if user_id is not None:
        query = query.filter(Booking.user_id == user_id)
    booking = query.first()
    if not booking:
        raise NotFound("Booking not found")
    return serialize_booking(booking)


def list_user_bookings(
    db: Session,
    user_id: UUID,
    status: Optional[BookingStatus] = None,
    page: int = 1,
    limit: int = 10,
) -> PaginatedResponse[BookingDetail]:
    """The user's bookings, newest first."""
    query = db.query(Booking).filter(Booking.user_id == user_id)
    if status:
        query = query.filter(Booking.status == status)

    total = query.count()
    ids = [
        row.id
        for row in query.with_entities(Booking.id)
        .order_by(Booking.created_at.desc(), Booking.booking_number)
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    ]
    loaded = {b.id: b for b in _booking_query(db).filter(Booking.id.in_(ids)).all()} if ids else {}

    return PaginatedResponse[BookingDetail](
        data=[serialize_booking(loaded[booking_id]) for booking_id in ids],
        total=total,
        page=page,
        limit=limit,
        total_pages=-(-total // limit) if total else 0,
    )


def get_seat_map(db: Session, showtime_id: UUID) -> SeatMapResponse:
    """Seats of a showtime grouped by row, in display order."""
    seats = SeatStore(db).list_seats(showtime_id)

    rows_dict: dict[str, dict] = {}
    for seat in seats:
        row = rows_dict.setdefault(
            seat.row_label,
            {"label": seat.row_label, "available_count": 0, "seats": []},
        )
        row["seats"].append(SeatMapSeat(
            id=seat.id,
            number=seat.seat_number,
            label=seat.label,
            status=seat.status,
        ))
        if seat.status != SeatStatus.BOOKED:
            row["available_count"] += 1

    rows: List[SeatRow] = [SeatRow(**r) for r in rows_dict.values()]
    return SeatMapResponse(
        showtime_id=showtime_id,
        total_seats=len(seats),
        available_seats=sum(r.available_count for r in rows),
        rows=rows,
    )