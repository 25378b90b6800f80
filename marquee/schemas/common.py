from typing import List, Generic, TypeVar
from pydantic import BaseModel

from marquee.core.exceptions import Action

T = TypeVar("T")


# Paginated response wrapper: used by all list endpoints
class PaginatedResponse(BaseModel, Generic[T]):
    data: List[T]
    total: int
    page: int
    limit: int
    total_pages: int


# Error responses
class ErrorResponse(BaseModel):
    error: str
    message: str
    action: Action = Action.NONE


class SeatsUnavailableError(ErrorResponse):
    unavailable_seat_ids: List[str]


class SeatSelectionErrorResponse(ErrorResponse):
    reason: str
    seat_ids: List[str] = []


class PaymentErrorResponse(ErrorResponse):
    booking_id: str
    booking_number: str | None = None
