from marquee.schemas.common import (
    PaginatedResponse, ErrorResponse, SeatsUnavailableError,
    SeatSelectionErrorResponse, PaymentErrorResponse,
)
from marquee.schemas.showtime import Showtime, ShowtimeDetail, MovieSummary, TheaterSummary
from marquee.schemas.seat import (
    Seat, SeatMapResponse, SeatRow, SeatMapSeat,
    SeatProvisionRequest, SeatProvisionResponse,
)
from marquee.schemas.reservation import ValidatedReservation, ReservationRequest
from marquee.schemas.booking import (
    BookingCreate, BookingDetail, BookingSeatResponse,
    BookingShowtimeSummary, PaymentRetry,
)
