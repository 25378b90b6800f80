from decimal import Decimal
from datetime import date, time
from pydantic import BaseModel, UUID4


# Compact movie / theater for nested responses
class MovieSummary(BaseModel):
    id: UUID4
    title: str
    language: str | None = None
    duration_minutes: int | None = None
    poster_url: str | None = None

    class Config:
        from_attributes = True


class TheaterSummary(BaseModel):
    id: UUID4
    name: str
    city: str

    class Config:
        from_attributes = True


class Showtime(BaseModel):
    id: UUID4
    movie_id: UUID4
    theater_id: UUID4
    show_date: date
    start_time: time
    price: Decimal

    class Config:
        from_attributes = True


class ShowtimeDetail(Showtime):
    movie: MovieSummary | None = None
    theater: TheaterSummary | None = None
