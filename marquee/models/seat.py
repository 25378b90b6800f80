import uuid
import enum
from sqlalchemy import Column, String, ForeignKey, UniqueConstraint, Enum as SAEnum, Uuid
from sqlalchemy.orm import relationship
from marquee.db.session import Base

class SeatStatus(str, enum.Enum):
    AVAILABLE = "available"
    HELD = "held"
    BOOKED = "booked"

class Seat(Base):
    __tablename__ = "seats"
    __table_args__ = (
        UniqueConstraint("showtime_id", "row_label", "seat_number", name="uq_seat_position"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    showtime_id = Column(Uuid(as_uuid=True), ForeignKey("showtimes.id"), nullable=False, index=True)
    row_label = Column(String(5), nullable=False)
    seat_number = Column(String(10), nullable=False) # text; ordered numerically
    status = Column(
        SAEnum(SeatStatus, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=SeatStatus.AVAILABLE,
        index=True,
    )

    showtime = relationship("Showtime", back_populates="seats")

    @property
    def label(self) -> str:
        return f"{self.row_label}{self.seat_number}"
