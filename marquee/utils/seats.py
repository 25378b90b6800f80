import re
from typing import Iterable, List, Tuple

_LEADING_DIGITS = re.compile(r"^(\d+)(.*)$")


def seat_number_key(seat_number: str) -> Tuple[int, int, str]:
    """
    Sort key for a seat number stored as text.

    Numeric numbers compare as integers ("9" < "10"); anything without a
    leading number sorts after them, lexicographically.
    """
    match = _LEADING_DIGITS.match(seat_number.strip())
    if match:
        return (0, int(match.group(1)), match.group(2))
    return (1, 0, seat_number)


def seat_sort_key(seat) -> Tuple[str, Tuple[int, int, str]]:
    return (seat.row_label, seat_number_key(seat.seat_number))


def sort_seats(seats: Iterable) -> List:
    """Order seats by row label, then numerically by seat number."""
    return sorted(seats, key=seat_sort_key)
