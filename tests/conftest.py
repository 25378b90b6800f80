"""
Test configuration and fixtures.

The environment is pointed at a throwaway SQLite file BEFORE any marquee
module is imported, because settings and the engine are built at import time.
"""

import os
import tempfile
from pathlib import Path

_TEST_DB_DIR = Path(tempfile.mkdtemp(prefix="marquee-test-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_DB_DIR / 'marquee_test.db'}"
os.environ["PAYMENT_SIMULATED_OUTCOME"] = "success"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import date, time  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from marquee.core.security import create_access_token  # noqa: E402
from marquee.db.base import Base  # noqa: E402
from marquee.db.session import SessionLocal, engine  # noqa: E402
from marquee.main import app  # noqa: E402
from marquee.models import Movie, Seat, Showtime, Theater, User  # noqa: E402
from marquee.services.payment import (  # noqa: E402
    PaymentResult,
    PaymentTimeout,
    get_payment_gateway,
)
from marquee.services.seat_store import SeatStore  # noqa: E402


class FakePaymentGateway:
    """Records charges; answers with queued outcomes, then 'success'."""

    def __init__(self):
        self.outcomes = []
        self.charges = []

    def queue(self, *outcomes):
        self.outcomes.extend(outcomes)

    def charge(self, amount, method, reference):
        self.charges.append((amount, method, reference))
        outcome = self.outcomes.pop(0) if self.outcomes else "success"
        if outcome == "timeout":
            raise PaymentTimeout(f"Payment for {reference} timed out")
        if outcome == "failure":
            return PaymentResult.DECLINED
        return PaymentResult.SUCCEEDED


@pytest.fixture(autouse=True)
def schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def other_db():
    """A second, independent session: another user's request."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def gateway():
    return FakePaymentGateway()


def _make_user(db, email, role="user"):
    user = User(email=email, full_name=email.split("@")[0].title(), role=role)
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def user(db):
    return _make_user(db, "riya@example.com")


@pytest.fixture
def other_user(db):
    return _make_user(db, "arjun@example.com")


@pytest.fixture
def admin(db):
    return _make_user(db, "ops@example.com", role="admin")


@pytest.fixture
def make_showtime(db):
    """Factory: a showtime at ``price`` with seats ``rows`` x ``seats_per_row``."""

    def _make(price="200.00", rows=("A",), seats_per_row=5, title="Interstellar"):
        movie = Movie(title=title, language="English", duration_minutes=169)
        theater = Theater(name="PVR Phoenix", city="Mumbai")
        db.add_all([movie, theater])
        db.flush()
        showtime = Showtime(
            movie_id=movie.id,
            theater_id=theater.id,
            show_date=date(2026, 11, 20),
            start_time=time(18, 30),
            price=Decimal(price),
        )
        db.add(showtime)
        db.flush()
        if rows:
            SeatStore(db).provision(showtime.id, list(rows), seats_per_row)
        db.commit()
        return showtime

    return _make


@pytest.fixture
def showtime(make_showtime):
    """Unit price 200, seats A1..A5 all available."""
    return make_showtime()


def seats_by_label(db, showtime_id):
    seats = db.query(Seat).filter(Seat.showtime_id == showtime_id).populate_existing().all()
    return {seat.label: seat for seat in seats}


@pytest.fixture
def seat_lookup(db):
    return lambda showtime_id: seats_by_label(db, showtime_id)


@pytest.fixture
def client(gateway):
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _headers(user):
        return {"Authorization": f"Bearer {create_access_token(str(user.id))}"}

    return _headers
