from uuid import UUID

from sqlalchemy.orm import Session, joinedload

from marquee.core.exceptions import NotFound
from marquee.models.showtime import Showtime


def get_showtime(db: Session, showtime_id: UUID) -> Showtime:
    """Showtime with its movie and theater, or NotFound."""
    showtime = (
        db.query(Showtime)
        .options(joinedload(Showtime.movie), joinedload(Showtime.theater))
        .filter(Showtime.id == showtime_id)
        .first()
    )
    if not showtime:
        raise NotFound("Showtime not found")
    return showtime
