"""
Model and schema definition checks: mappers configure, DDL compiles for
PostgreSQL, and the request schemas enforce their bounds.
"""

import uuid

import pytest
from pydantic import ValidationError
from sqlalchemy.dialects import postgresql
from sqlalchemy.orm import configure_mappers
from sqlalchemy.schema import CreateTable

from marquee import schemas
from marquee.db.base import Base
from marquee.models import PaymentMethod


def test_orm_mappings_are_valid():
    configure_mappers()


@pytest.mark.parametrize("table", ["seats", "bookings", "booking_seats"])
def test_ddl_compiles_for_postgres(table):
    ddl = str(CreateTable(Base.metadata.tables[table]).compile(dialect=postgresql.dialect()))
    assert f"CREATE TABLE {table}" in ddl


def test_seat_is_unique_per_showtime_position():
    constraints = {c.name for c in Base.metadata.tables["seats"].constraints}
    assert "uq_seat_position" in constraints


class TestRequestSchemas:
    def test_booking_create_defaults_to_credit(self):
        body = schemas.BookingCreate(showtime_id=uuid.uuid4(), seat_ids=[uuid.uuid4()], ticket_count=1)
        assert body.payment_method == PaymentMethod.CREDIT

    @pytest.mark.parametrize("ticket_count", [0, 7])
    def test_ticket_count_bounds(self, ticket_count):
        with pytest.raises(ValidationError):
            schemas.ReservationRequest(seat_ids=[], ticket_count=ticket_count)

    def test_provision_request_bounds(self):
        with pytest.raises(ValidationError):
            schemas.SeatProvisionRequest(rows=[], seats_per_row=5)
        with pytest.raises(ValidationError):
            schemas.SeatProvisionRequest(rows=["A"], seats_per_row=51)
