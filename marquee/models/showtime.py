import uuid
from sqlalchemy import Column, Date, Time, DECIMAL, ForeignKey, DateTime, func, Uuid
from sqlalchemy.orm import relationship
from marquee.db.session import Base

class Showtime(Base):
    """A screening of one movie in one theater. Never mutated once created."""
    __tablename__ = "showtimes"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    movie_id = Column(Uuid(as_uuid=True), ForeignKey("movies.id"), nullable=False, index=True)
    theater_id = Column(Uuid(as_uuid=True), ForeignKey("theaters.id"), nullable=False, index=True)
    show_date = Column(Date, nullable=False, index=True)
    start_time = Column(Time, nullable=False)
    price = Column(DECIMAL(10, 2), nullable=False) # unit seat price
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    movie = relationship("Movie", back_populates="showtimes")
    theater = relationship("Theater", back_populates="showtimes")
    seats = relationship("Seat", back_populates="showtime", cascade="all, delete-orphan")
    bookings = relationship("Booking", back_populates="showtime")
