from uuid import UUID
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from marquee.db.session import get_db
from marquee.schemas.reservation import ReservationRequest, ValidatedReservation
from marquee.schemas.seat import Seat as SeatSchema, SeatMapResponse
from marquee.schemas.showtime import ShowtimeDetail
from marquee.services import reservation
from marquee.services.catalog import get_showtime
from marquee.services.projections import get_seat_map
from marquee.services.seat_store import SeatStore

router = APIRouter(prefix="/showtimes", tags=["Showtimes"])


@router.get("/{showtime_id}", response_model=ShowtimeDetail)
def read_showtime(showtime_id: UUID, db: Session = Depends(get_db)):
    """Showtime with its movie, theater and unit seat price."""
    return get_showtime(db, showtime_id)


# ---------------------------------------------------------------------------
# Seats (seat selection screen)
# ---------------------------------------------------------------------------


@router.get("/{showtime_id}/seats", response_model=List[SeatSchema])
def list_showtime_seats(showtime_id: UUID, db: Session = Depends(get_db)):
    """All seats, by row label then numeric seat number. No authentication needed."""
    get_showtime(db, showtime_id)
    return SeatStore(db).list_seats(showtime_id)


@router.get("/{showtime_id}/seat-map", response_model=SeatMapResponse)
def read_seat_map(showtime_id: UUID, db: Session = Depends(get_db)):
    """Seats grouped by row, with per-row availability counts."""
    get_showtime(db, showtime_id)
    return get_seat_map(db, showtime_id)


# ---------------------------------------------------------------------------
# Reservation check (before checkout)
# ---------------------------------------------------------------------------


@router.post("/{showtime_id}/reservations/validate", response_model=ValidatedReservation)
def validate_reservation(
    showtime_id: UUID,
    body: ReservationRequest,
    db: Session = Depends(get_db),
):
    """
    Check a seat selection against the live seat list.
    Nothing is held or written; the result is only valid until someone else books.
    """
    get_showtime(db, showtime_id)
    seats = SeatStore(db).list_seats(showtime_id)
    return reservation.validate(showtime_id, body.seat_ids, body.ticket_count, seats)
