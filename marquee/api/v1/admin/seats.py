import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from marquee.db.session import get_db
from marquee.api.deps import get_current_admin_user
from marquee.models.user import User
from marquee.schemas.seat import SeatProvisionRequest, SeatProvisionResponse
from marquee.services.catalog import get_showtime
from marquee.services.seat_store import SeatStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/showtimes", tags=["Admin - Seats"])


# ---------------------------------------------------------------------------
# Bulk seat provisioning
# ---------------------------------------------------------------------------


@router.post(
    "/{showtime_id}/seats/bulk",
    response_model=SeatProvisionResponse,
    status_code=status.HTTP_201_CREATED,
)
def provision_seats(
    showtime_id: UUID,
    data: SeatProvisionRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    """
    Create the seat map for a showtime: `seats_per_row` seats numbered from 1
    in each of `rows`, all available. A showtime is provisioned once.
    """
    get_showtime(db, showtime_id)
    seats = SeatStore(db).provision(showtime_id, data.rows, data.seats_per_row)
    db.commit()
    logger.info("Provisioned %d seat(s) for showtime %s", len(seats), showtime_id)
    return SeatProvisionResponse(created_count=len(seats), showtime_id=showtime_id)
