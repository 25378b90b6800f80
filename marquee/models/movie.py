import uuid
from sqlalchemy import Column, String, Boolean, DateTime, func, Text, Integer, Uuid
from sqlalchemy.orm import relationship
from marquee.db.session import Base

class Movie(Base):
    __tablename__ = "movies"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    language = Column(String(50), nullable=True)
    duration_minutes = Column(Integer, nullable=True)
    poster_url = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    showtimes = relationship("Showtime", back_populates="movie")
