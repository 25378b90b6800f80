from typing import Annotated, List
from pydantic import BaseModel, Field, UUID4

from marquee.models.seat import SeatStatus


class Seat(BaseModel):
    id: UUID4
    showtime_id: UUID4
    row_label: str
    seat_number: str
    status: SeatStatus
    label: str

    class Config:
        from_attributes = True


# --- Seat Map (seat selection screen) ---

class SeatMapSeat(BaseModel):
    id: UUID4
    number: str
    label: str
    status: SeatStatus


class SeatRow(BaseModel):
    label: str
    available_count: int
    seats: List[SeatMapSeat]


class SeatMapResponse(BaseModel):
    showtime_id: UUID4
    total_seats: int
    available_seats: int
    rows: List[SeatRow]


# --- Seat provisioning (admin) ---

class SeatProvisionRequest(BaseModel):
    rows: Annotated[List[Annotated[str, Field(min_length=1, max_length=5)]], Field(min_length=1, max_length=26)]
    seats_per_row: int = Field(ge=1, le=50)


class SeatProvisionResponse(BaseModel):
    created_count: int
    showtime_id: UUID4
