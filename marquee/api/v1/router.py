from fastapi import APIRouter

# Public: showtimes, seat map, reservation check
from marquee.api.v1.public.showtimes import router as showtimes_router

# Public: bookings
from marquee.api.v1.public.bookings import router as bookings_router

# Admin
from marquee.api.v1.admin.seats import router as admin_seats_router

api_router = APIRouter()

# --- Public: showtimes ---
api_router.include_router(showtimes_router)

# --- Public: bookings ---
api_router.include_router(bookings_router)

# --- Admin ---
api_router.include_router(admin_seats_router)
