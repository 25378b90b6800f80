from typing import Annotated, List, Tuple
from pydantic import BaseModel, ConfigDict, Field, UUID4

from marquee.core.config import settings


class ValidatedReservation(BaseModel):
    """A seat selection that passed validation, handed unchanged to the coordinator."""

    model_config = ConfigDict(frozen=True)

    showtime_id: UUID4
    seat_ids: Tuple[UUID4, ...]
    ticket_count: int


# Reservation: validate (POST /showtimes/{id}/reservations/validate)
class ReservationRequest(BaseModel):
    seat_ids: Annotated[List[UUID4], Field(max_length=50)]  # over-selection is reported by validation
    ticket_count: int = Field(ge=1, le=settings.MAX_TICKETS_PER_BOOKING)
