import uuid
import enum
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, DECIMAL, Integer, ForeignKey, UniqueConstraint, Enum as SAEnum, Uuid
from sqlalchemy.orm import relationship
from marquee.db.session import Base


class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"


class PaymentMethod(str, enum.Enum):
    CREDIT = "credit"
    DEBIT = "debit"
    UPI = "upi"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _enum_column(enum_cls):
    return SAEnum(enum_cls, native_enum=False, values_callable=lambda e: [m.value for m in e])


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    booking_number = Column(String(20), unique=True, nullable=False, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    showtime_id = Column(Uuid(as_uuid=True), ForeignKey("showtimes.id"), nullable=False, index=True)
    total_amount = Column(DECIMAL(10, 2), nullable=False) # unit price x seats, fixed at commit
    status = Column(_enum_column(BookingStatus), nullable=False, default=BookingStatus.PENDING, index=True)
    payment_method = Column(_enum_column(PaymentMethod), nullable=False)
    payment_attempts = Column(Integer, nullable=False, default=0)
    # Python-side default keeps sub-second ordering for booking history
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    paid_at = Column(DateTime(timezone=True), nullable=True)
    # set while a charge is in flight; a stale claim may be taken over
    payment_started_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    user = relationship("User")
    showtime = relationship("Showtime", back_populates="bookings")
    seats = relationship(
        "BookingSeat",
        back_populates="booking",
        cascade="all, delete-orphan",
        order_by="BookingSeat.position",
    )


class BookingSeat(Base):
    __tablename__ = "booking_seats"
    __table_args__ = (
        UniqueConstraint("booking_id", "seat_id", name="uq_booking_seat"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    booking_id = Column(Uuid(as_uuid=True), ForeignKey("bookings.id"), nullable=False, index=True)
    seat_id = Column(Uuid(as_uuid=True), ForeignKey("seats.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False) # order of the seat within the booking

    booking = relationship("Booking", back_populates="seats")
    seat = relationship("Seat")
