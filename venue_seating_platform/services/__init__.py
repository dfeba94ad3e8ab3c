"""
Service layer for business logic.
"""

from .access import AccessPolicy, OwnershipPolicy
from .venue_service import VenueService
from .room_service import RoomService
from .seat_service import SeatService
from .seat_grid import GridSeat, generate_seat_grid, grid_size, row_range
from .seating_assignment_service import SeatingAssignmentService
from .seating_chart_service import SeatingChartService

__all__ = [
    "AccessPolicy",
    "OwnershipPolicy",
    "VenueService",
    "RoomService",
    "SeatService",
    "GridSeat",
    "generate_seat_grid",
    "grid_size",
    "row_range",
    "SeatingAssignmentService",
    "SeatingChartService",
]
