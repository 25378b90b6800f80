import uuid
from sqlalchemy import Column, String, Boolean, DateTime, func, Text, Uuid
from sqlalchemy.orm import relationship
from marquee.db.session import Base

class Theater(Base):
    __tablename__ = "theaters"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False, index=True)
    address = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    showtimes = relationship("Showtime", back_populates="theater")
