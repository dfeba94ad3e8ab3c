"""
Tests for the pure seat grid generator.
"""

import pytest

from venue_seating_platform.models import SeatCategory, SeatStatus
from venue_seating_platform.services.seat_grid import generate_seat_grid, grid_size, row_range


def test_two_by_two_grid_layout():
    seats = generate_seat_grid("A", "B", 1, 2, spacing_x=1.2, spacing_y=1.2)

    assert [(s.label, s.x, s.y) for s in seats] == [
        ("A1", 0.0, 0.0),
        ("A2", pytest.approx(1.2), 0.0),
        ("B1", 0.0, pytest.approx(1.2)),
        ("B2", pytest.approx(1.2), pytest.approx(1.2)),
    ]
    assert all(s.status == SeatStatus.AVAILABLE for s in seats)
    assert all((s.width, s.height, s.rotation) == (1.0, 1.0, 0.0) for s in seats)


@pytest.mark.parametrize(
    "start_row,end_row,start_number,end_number",
    [("A", "A", 1, 1), ("A", "J", 1, 20), ("C", "F", 5, 12), ("a", "d", 0, 3), ("1", "9", 1, 4)],
)
def test_batch_size_and_uniqueness(start_row, end_row, start_number, end_number):
    seats = generate_seat_grid(start_row, end_row, start_number, end_number)

    expected_rows = ord(end_row) - ord(start_row) + 1
    expected_numbers = end_number - start_number + 1
    assert len(seats) == expected_rows * expected_numbers
    assert len({(s.row, s.number) for s in seats}) == len(seats)
    assert grid_size(start_row, end_row, start_number, end_number) == len(seats)


def test_x_resets_at_each_row_and_offsets_apply():
    seats = generate_seat_grid("A", "C", 3, 5, start_x=10.0, start_y=-2.0, spacing_x=2.0, spacing_y=3.0)

    by_row = {}
    for seat in seats:
        by_row.setdefault(seat.row, []).append(seat)

    for row_index, row in enumerate("ABC"):
        assert [s.x for s in by_row[row]] == [10.0, 12.0, 14.0]
        assert {s.y for s in by_row[row]} == {-2.0 + 3.0 * row_index}
        assert [s.number for s in by_row[row]] == ["3", "4", "5"]


def test_category_applies_to_every_seat():
    seats = generate_seat_grid("A", "B", 1, 3, category=SeatCategory.VIP)
    assert {s.category for s in seats} == {SeatCategory.VIP}


@pytest.mark.parametrize(
    "start_row,end_row,start_number,end_number",
    [("B", "A", 1, 5), ("A", "C", 5, 1), ("Z", "A", 10, 1)],
)
def test_inverted_range_yields_empty_batch(start_row, end_row, start_number, end_number):
    assert generate_seat_grid(start_row, end_row, start_number, end_number) == []
    assert grid_size(start_row, end_row, start_number, end_number) == 0


def test_row_range_by_alphabet():
    assert row_range("A", "E") == ["A", "B", "C", "D", "E"]
    assert row_range("x", "z") == ["x", "y", "z"]
    assert row_range("E", "A") == []
    # Mixed-case pairs are not one alphabet: fall back to code-point order
    assert row_range("Y", "b") == ["Y", "Z", "[", "\\", "]", "^", "_", "`", "a", "b"]
