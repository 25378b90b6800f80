from typing import Annotated, Optional, List
from pydantic import BaseModel, Field, UUID4
from decimal import Decimal
from datetime import date, datetime, time

from marquee.core.config import settings
from marquee.models.booking import BookingStatus, PaymentMethod


# Booking: Create (POST /bookings)
class BookingCreate(BaseModel):
    showtime_id: UUID4
    seat_ids: Annotated[List[UUID4], Field(max_length=50)]
    ticket_count: int = Field(ge=1, le=settings.MAX_TICKETS_PER_BOOKING)
    payment_method: PaymentMethod = PaymentMethod.CREDIT


# Booking: Retry payment (POST /bookings/{id}/pay)
class PaymentRetry(BaseModel):
    payment_method: Optional[PaymentMethod] = None


# Nested response objects for booking responses
class BookingShowtimeSummary(BaseModel):
    id: UUID4
    movie_title: str
    theater_name: str
    city: str
    show_date: date
    start_time: time
    unit_price: Decimal


class BookingSeatResponse(BaseModel):
    id: UUID4
    row: str
    number: str
    label: str


# Booking: Full response (POST /bookings, GET /bookings/{id})
class BookingDetail(BaseModel):
    id: UUID4
    booking_number: str
    short_reference: str
    showtime_id: UUID4
    status: BookingStatus
    payment_method: PaymentMethod
    payment_attempts: int
    ticket_count: int
    total_amount: Decimal
    display_total: str
    created_at: datetime
    paid_at: Optional[datetime] = None
    showtime: BookingShowtimeSummary
    seats: List[BookingSeatResponse] = []
