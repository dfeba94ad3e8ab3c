"""
Custom exceptions for the Venue Seating Platform.

Every failure the seating engine can report has its own class so the HTTP
boundary can pick a status code from the type alone.
"""

from typing import Any, Dict, Optional, List
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the platform."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"

    # Conflicts
    NAME_CONFLICT = "NAME_CONFLICT"
    SEAT_CONFLICT = "SEAT_CONFLICT"
    SEAT_OCCUPIED = "SEAT_OCCUPIED"
    SEAT_NOT_AVAILABLE = "SEAT_NOT_AVAILABLE"
    GUEST_ALREADY_ASSIGNED = "GUEST_ALREADY_ASSIGNED"

    # Invalid state
    HAS_CHILDREN = "HAS_CHILDREN"
    INVALID_SEAT_STATE = "INVALID_SEAT_STATE"

    # External service errors
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"


class SeatingError(Exception):
    """Base exception class for the seating platform."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.suggestions = suggestions or []
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        result: Dict[str, Any] = {
            "error_code": self.error_code.value,
            "message": self.message,
        }

        if self.details:
            result["details"] = self.details

        if self.suggestions:
            result["suggestions"] = self.suggestions

        return result


class ValidationError(SeatingError):
    """Exception raised for validation errors."""

    def __init__(
        self,
        message: str,
        field_errors: Optional[Dict[str, List[str]]] = None,
        details: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        if field_errors:
            details = {**(details or {}), "field_errors": field_errors}
        super().__init__(
            message,
            error_code=ErrorCode.VALIDATION_ERROR,
            details=details,
            **kwargs
        )
        self.field_errors = field_errors or {}


class AuthenticationError(SeatingError):
    """Exception raised for authentication failures."""

    def __init__(self, message: str = "Authentication failed", **kwargs):
        super().__init__(
            message,
            error_code=ErrorCode.UNAUTHORIZED,
            suggestions=["Check your credentials", "Login again"],
            **kwargs
        )


# --- NotFound -------------------------------------------------------------

class NotFoundError(SeatingError):
    """Base exception for resource not found errors."""

    resource_type = "resource"

    def __init__(self, resource_id: Any, message: Optional[str] = None, **kwargs):
        super().__init__(
            message or f"{self.resource_type.capitalize()} {resource_id} not found",
            error_code=ErrorCode.NOT_FOUND,
            details={"resource_type": self.resource_type, "resource_id": str(resource_id)},
            **kwargs
        )


class VenueNotFoundError(NotFoundError):
    resource_type = "venue"


class RoomNotFoundError(NotFoundError):
    resource_type = "room"


class SeatNotFoundError(NotFoundError):
    resource_type = "seat"


class EventNotFoundError(NotFoundError):
    resource_type = "event"


class GuestNotFoundError(NotFoundError):
    """Raised when a guest does not exist or is not on the event's guest list."""
    resource_type = "guest"


class AssignmentNotFoundError(NotFoundError):
    resource_type = "seating assignment"


# --- AccessDenied ---------------------------------------------------------

class AuthorizationError(SeatingError):
    """Exception raised when the acting user does not own the resource."""

    resource_type = "resource"

    def __init__(self, resource_id: Any, message: Optional[str] = None, **kwargs):
        super().__init__(
            message or f"Access denied to {self.resource_type} {resource_id}",
            error_code=ErrorCode.FORBIDDEN,
            details={"resource_type": self.resource_type, "resource_id": str(resource_id)},
            suggestions=["Only the owner can manage this resource"],
            **kwargs
        )


class VenueAccessDeniedError(AuthorizationError):
    resource_type = "venue"


class RoomAccessDeniedError(AuthorizationError):
    resource_type = "room"


class SeatAccessDeniedError(AuthorizationError):
    resource_type = "seat"


class EventAccessDeniedError(AuthorizationError):
    resource_type = "event"


# --- Conflict -------------------------------------------------------------

class ConflictError(SeatingError):
    """Base exception for uniqueness and occupancy conflicts."""
    pass


class NameConflictError(ConflictError):
    """Raised when a venue or room name is already taken in its scope."""

    def __init__(self, resource_type: str, name: str, **kwargs):
        super().__init__(
            f"{resource_type.capitalize()} with name '{name}' already exists",
            error_code=ErrorCode.NAME_CONFLICT,
            details={"resource_type": resource_type, "name": name},
            suggestions=["Choose a different name"],
            **kwargs
        )


class SeatConflictError(ConflictError):
    """Raised when one or more (row, number) coordinates already exist in the room."""

    def __init__(self, room_id: Any, labels: List[str], **kwargs):
        super().__init__(
            f"Seat(s) {', '.join(labels)} already exist in room {room_id}",
            error_code=ErrorCode.SEAT_CONFLICT,
            details={"room_id": str(room_id), "conflicting_seats": labels},
            suggestions=["Use a different row or number range"],
            **kwargs
        )


class SeatOccupiedError(ConflictError):
    """Raised when a seat already has a live assignment."""

    def __init__(self, seat_id: Any, event_id: Any = None, **kwargs):
        super().__init__(
            f"Seat {seat_id} is already assigned to another guest",
            error_code=ErrorCode.SEAT_OCCUPIED,
            details={"seat_id": str(seat_id), "event_id": str(event_id) if event_id else None},
            suggestions=["Choose a different seat", "Unassign the current guest first"],
            **kwargs
        )


class SeatNotAvailableError(ConflictError):
    """Raised when a seat is reserved, blocked or under maintenance."""

    def __init__(self, seat_id: Any, current_status: str, **kwargs):
        super().__init__(
            f"Seat {seat_id} is not available (status: {current_status})",
            error_code=ErrorCode.SEAT_NOT_AVAILABLE,
            details={"seat_id": str(seat_id), "current_status": current_status},
            suggestions=["Choose a different seat", "Set the seat back to available"],
            **kwargs
        )


class GuestAlreadyAssignedError(ConflictError):
    """Raised when a guest already holds a seat for the event."""

    def __init__(self, guest_id: Any, event_id: Any, **kwargs):
        super().__init__(
            f"Guest {guest_id} already has a seat assignment for event {event_id}",
            error_code=ErrorCode.GUEST_ALREADY_ASSIGNED,
            details={"guest_id": str(guest_id), "event_id": str(event_id)},
            suggestions=["Move the existing assignment instead"],
            **kwargs
        )


# --- InvalidState ---------------------------------------------------------

class InvalidStateError(SeatingError):
    """Base exception for operations not allowed in the current state."""
    pass


class HasChildrenError(InvalidStateError):
    """Raised when deleting a venue with rooms or a room with seats."""

    def __init__(self, resource_type: str, resource_id: Any, child_type: str, child_count: int, **kwargs):
        super().__init__(
            f"Cannot delete {resource_type} {resource_id} with {child_count} existing {child_type}",
            error_code=ErrorCode.HAS_CHILDREN,
            details={
                "resource_type": resource_type,
                "resource_id": str(resource_id),
                "child_type": child_type,
                "child_count": child_count,
            },
            suggestions=[f"Delete the {child_type} first"],
            **kwargs
        )


class OccupiedSeatDeletionError(InvalidStateError):
    """Raised when deleting a seat that still has an occupant."""

    def __init__(self, seat_id: Any, **kwargs):
        super().__init__(
            f"Cannot delete seat {seat_id} while it is assigned to a guest",
            error_code=ErrorCode.SEAT_OCCUPIED,
            details={"seat_id": str(seat_id)},
            suggestions=["Unassign the guest first"],
            **kwargs
        )


class InvalidSeatStateError(InvalidStateError):
    """Raised when a manual status change would break the occupancy invariant."""

    def __init__(self, seat_id: Any, message: str, **kwargs):
        super().__init__(
            message,
            error_code=ErrorCode.INVALID_SEAT_STATE,
            details={"seat_id": str(seat_id)},
            suggestions=["Use the seating assignment endpoints to change occupancy"],
            **kwargs
        )


# --- External -------------------------------------------------------------

class ExternalServiceError(SeatingError):
    """Exception raised for backing service failures."""

    def __init__(self, service_name: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            f"{service_name} service error: {message}",
            error_code=ErrorCode.EXTERNAL_SERVICE_ERROR,
            details={"service_name": service_name, **(details or {})},
            suggestions=["Try again later"],
        )
