import uuid

import pytest

from marquee.core.exceptions import InvalidBookingState, SeatsUnavailable
from marquee.models import Seat, SeatStatus
from marquee.services.seat_store import SeatStore
from marquee.utils.seats import seat_number_key, sort_seats


class TestSeatOrdering:
    def test_seat_number_key_is_numeric(self):
        assert seat_number_key("9") < seat_number_key("10")
        assert seat_number_key("2") < seat_number_key("10")

    def test_non_numeric_numbers_sort_last(self):
        numbers = sorted(["10", "B", "9", "1"], key=seat_number_key)
        assert numbers == ["1", "9", "10", "B"]

    def test_list_seats_orders_by_row_then_number(self, db, make_showtime):
        showtime = make_showtime(rows=())
        for row, number in [("A", "9"), ("A", "10"), ("B", "1")]:
            db.add(Seat(showtime_id=showtime.id, row_label=row, seat_number=number))
        db.commit()

        labels = [seat.label for seat in SeatStore(db).list_seats(showtime.id)]
        assert labels == ["A9", "A10", "B1"]

    def test_sort_seats_groups_rows(self, db, make_showtime):
        showtime = make_showtime(rows=("B", "A"), seats_per_row=11)
        labels = [s.label for s in sort_seats(SeatStore(db).list_seats(showtime.id))]
        assert labels[:3] == ["A1", "A2", "A3"]
        assert labels[9:12] == ["A10", "A11", "B1"]

    def test_list_seats_scoped_to_showtime(self, db, make_showtime):
        first = make_showtime()
        make_showtime(rows=("Z",))
        seats = SeatStore(db).list_seats(first.id)
        assert len(seats) == 5
        assert {s.showtime_id for s in seats} == {first.id}


class TestMarkBooked:
    def test_marks_exactly_the_given_seats(self, db, showtime, seat_lookup):
        seats = seat_lookup(showtime.id)
        store = SeatStore(db)

        store.mark_booked([seats["A1"].id, seats["A3"].id], showtime.id)
        db.commit()

        seats = seat_lookup(showtime.id)
        booked = sorted(label for label, s in seats.items() if s.status == SeatStatus.BOOKED)
        assert booked == ["A1", "A3"]

    def test_all_or_nothing_when_one_seat_already_booked(self, db, showtime, seat_lookup):
        seats = seat_lookup(showtime.id)
        store = SeatStore(db)
        store.mark_booked([seats["A2"].id], showtime.id)
        db.commit()

        requested = [seats["A1"].id, seats["A2"].id, seats["A3"].id]
        with pytest.raises(SeatsUnavailable) as excinfo:
            store.mark_booked(requested, showtime.id)

        assert excinfo.value.seat_ids == [seats["A2"].id]
        after = seat_lookup(showtime.id)
        assert after["A1"].status == SeatStatus.AVAILABLE
        assert after["A2"].status == SeatStatus.BOOKED
        assert after["A3"].status == SeatStatus.AVAILABLE

    def test_seat_from_another_showtime_is_a_conflict(self, db, showtime, make_showtime, seat_lookup):
        other = make_showtime(rows=("C",))
        mine = seat_lookup(showtime.id)
        theirs = seat_lookup(other.id)

        with pytest.raises(SeatsUnavailable) as excinfo:
            SeatStore(db).mark_booked([mine["A1"].id, theirs["C1"].id], showtime.id)

        assert excinfo.value.seat_ids == [theirs["C1"].id]
        assert seat_lookup(showtime.id)["A1"].status == SeatStatus.AVAILABLE

    def test_held_seats_can_be_booked(self, db, showtime, seat_lookup):
        seat = seat_lookup(showtime.id)["A4"]
        seat.status = SeatStatus.HELD
        db.commit()

        SeatStore(db).mark_booked([seat.id], showtime.id)
        db.commit()
        assert seat_lookup(showtime.id)["A4"].status == SeatStatus.BOOKED

    def test_second_session_loses_the_race(self, db, other_db, showtime, seat_lookup):
        seat_id = seat_lookup(showtime.id)["A1"].id

        SeatStore(db).mark_booked([seat_id], showtime.id)
        db.commit()

        with pytest.raises(SeatsUnavailable):
            SeatStore(other_db).mark_booked([seat_id], showtime.id)

    def test_empty_request_is_a_no_op(self, db, showtime):
        SeatStore(db).mark_booked([], showtime.id)


class TestProvision:
    def test_creates_available_seats(self, db, make_showtime):
        showtime = make_showtime(rows=())
        seats = SeatStore(db).provision(showtime.id, ["A", "B"], 3)
        db.commit()

        assert [s.label for s in seats] == ["A1", "A2", "A3", "B1", "B2", "B3"]
        assert all(s.status == SeatStatus.AVAILABLE for s in seats)

    def test_refuses_to_provision_twice(self, db, showtime):
        with pytest.raises(InvalidBookingState):
            SeatStore(db).provision(showtime.id, ["B"], 2)

    def test_unknown_ids_are_absent_from_get_seats(self, db, showtime):
        assert SeatStore(db).get_seats(showtime.id, [uuid.uuid4()]) == []
