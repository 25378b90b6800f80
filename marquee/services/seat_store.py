import logging
from typing import List, Sequence
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.orm import Session

from marquee.core.exceptions import SeatsUnavailable, InvalidBookingState
from marquee.models.seat import Seat, SeatStatus
from marquee.utils.seats import sort_seats

logger = logging.getLogger(__name__)


class SeatStore:
    """
    Per-showtime seat inventory.

    A seat's ``status`` column is the single source of truth for availability.
    ``mark_booked`` is a conditional UPDATE, so the database row lock makes it a
    compare-and-swap: of two racing callers exactly one flips a given seat.
    """

    def __init__(self, db: Session):
        self.db = db

    def list_seats(self, showtime_id: UUID) -> List[Seat]:
        """All seats of a showtime, by row label then numeric seat number."""
        seats = (
            self.db.query(Seat)
            .filter(Seat.showtime_id == showtime_id)
            .order_by(Seat.row_label)
            .execution_options(populate_existing=True)
            .all()
        )
        return sort_seats(seats)

    def get_seats(self, showtime_id: UUID, seat_ids: Sequence[UUID]) -> List[Seat]:
        """Fresh rows for the given seats of a showtime. Unknown ids are simply absent."""
        if not seat_ids:
            return []
        return (
            self.db.query(Seat)
            .filter(Seat.showtime_id == showtime_id, Seat.id.in_(list(seat_ids)))
            .execution_options(populate_existing=True)
            .all()
        )

    def mark_booked(self, seat_ids: Sequence[UUID], showtime_id: UUID) -> None:
        """
        Flip every given seat to ``booked``, or none of them.

        If any seat is already booked (or is not part of the showtime) the
        session transaction is rolled back, taking any writes staged with it
        along, and ``SeatsUnavailable`` is raised. Does not commit.
        """
        ids = list(dict.fromkeys(seat_ids))
        if not ids:
            return

        result = self.db.execute(
            update(Seat)
            .where(
                Seat.showtime_id == showtime_id,
                Seat.id.in_(ids),
                Seat.status != SeatStatus.BOOKED,
            )
            .values(status=SeatStatus.BOOKED)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != len(ids):
            self.db.rollback()
            current = {s.id: s for s in self.get_seats(showtime_id, ids)}
            unavailable = [
                seat_id for seat_id in ids
                if seat_id not in current or current[seat_id].status == SeatStatus.BOOKED
            ]
            logger.info(
                "Seat conflict on showtime %s: %d of %d seat(s) unavailable",
                showtime_id, len(unavailable), len(ids),
            )
            raise SeatsUnavailable(unavailable)

        # Bring seats already loaded in this session up to date
        self.get_seats(showtime_id, ids)

    def provision(self, showtime_id: UUID, rows: Sequence[str], seats_per_row: int) -> List[Seat]:
        """Create an ``available`` seat map for a showtime that has none yet."""
        existing = self.db.query(Seat.id).filter(Seat.showtime_id == showtime_id).first()
        if existing is not None:
            raise InvalidBookingState("Seats are already provisioned for this showtime")

        seats = [
            Seat(
                showtime_id=showtime_id,
                row_label=row,
                seat_number=str(number),
                status=SeatStatus.AVAILABLE,
            )
            for row in dict.fromkeys(rows)
            for number in range(1, seats_per_row + 1)
        ]
        self.db.add_all(seats)
        self.db.flush()
        return sort_seats(seats)
