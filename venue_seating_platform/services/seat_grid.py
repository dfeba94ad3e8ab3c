"""
Rectangular seat grid generation.

A pure transformation from a row/number range plus spacing into an ordered
batch of seat coordinates. Nothing here touches the database; the seat
service persists the batch in a single transaction.
"""

import string
from dataclasses import dataclass
from typing import List

from ..models.seat import SeatCategory, SeatStatus

# Ordered alphabets a row range may be enumerated over
_ROW_ALPHABETS = (string.ascii_uppercase, string.ascii_lowercase, string.digits)


@dataclass(frozen=True)
class GridSeat:
    """One generated seat, ready to be turned into a ``Seat`` row."""

    row: str
    number: str
    x: float
    y: float
    category: SeatCategory = SeatCategory.STANDARD
    status: SeatStatus = SeatStatus.AVAILABLE
    width: float = 1.0
    height: float = 1.0
    rotation: float = 0.0

    @property
    def label(self) -> str:
        return f"{self.row}{self.number}"


def row_range(start_row: str, end_row: str) -> List[str]:
    """
    Enumerate row labels from ``start_row`` to ``end_row`` inclusive.

    Letters and digits are enumerated by their index in the matching
    alphabet; any other pair of characters falls back to code-point order.
    An inverted range is empty.
    """
    for alphabet in _ROW_ALPHABETS:
        if start_row in alphabet and end_row in alphabet:
            start_index = alphabet.index(start_row)
            end_index = alphabet.index(end_row)
            return list(alphabet[start_index:end_index + 1])

    return [chr(code) for code in range(ord(start_row), ord(end_row) + 1)]


def grid_size(start_row: str, end_row: str, start_number: int, end_number: int) -> int:
    """Number of seats a grid request would produce, without generating it."""
    return len(row_range(start_row, end_row)) * max(0, end_number - start_number + 1)


def generate_seat_grid(
    start_row: str,
    end_row: str,
    start_number: int,
    end_number: int,
    category: SeatCategory = SeatCategory.STANDARD,
    start_x: float = 0.0,
    start_y: float = 0.0,
    spacing_x: float = 1.2,
    spacing_y: float = 1.2,
) -> List[GridSeat]:
    """
    Expand a rectangular range into seats, row by row.

    Example: rows ``A..B``, numbers ``1..2``, spacing (1.2, 1.2) from (0, 0)
    gives A1 (0, 0), A2 (1.2, 0), B1 (0, 1.2), B2 (1.2, 1.2).

    Args:
        start_row: First row label (single character)
        end_row: Last row label, inclusive
        start_number: First seat number in every row
        end_number: Last seat number, inclusive
        category: Category given to every seat
        start_x: X position of the first seat of each row
        start_y: Y position of the first row
        spacing_x: Distance between neighbouring seats in a row
        spacing_y: Distance between neighbouring rows

    Returns:
        Seats ordered by row then number; empty for an inverted range
    """
    seats: List[GridSeat] = []

    for row_index, row in enumerate(row_range(start_row, end_row)):
        y = start_y + spacing_y * row_index
        for number in range(start_number, end_number + 1):
            seats.append(
                GridSeat(
                    row=row,
                    number=str(number),
                    x=start_x + spacing_x * (number - start_number),
                    y=y,
                    category=category,
                )
            )

    return seats
