from marquee.db.session import Base
from marquee.models.user import User
from marquee.models.movie import Movie
from marquee.models.theater import Theater
from marquee.models.showtime import Showtime
from marquee.models.seat import Seat
from marquee.models.booking import Booking, BookingSeat
