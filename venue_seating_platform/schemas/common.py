"""
Common schemas for API responses and error handling.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class ErrorDetail(BaseModel):
    """Schema for detailed error information."""

    error_code: str = Field(..., description="Error code for programmatic handling")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error context")
    suggestions: Optional[List[str]] = Field(None, description="Helpful suggestions for resolving the error")


class ErrorResponse(BaseModel):
    """Schema for API error responses."""

    error: ErrorDetail
    error_id: str
    timestamp: str

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "error": {
                        "error_code": "SEAT_OCCUPIED",
                        "message": "Seat 6f1c... is already assigned to another guest",
                        "details": {"seat_id": "6f1c...", "event_id": "0b2e..."},
                        "suggestions": [
                            "Choose a different seat",
                            "Unassign the current guest first"
                        ]
                    },
                    "error_id": "c7d2a1f0-...",
                    "timestamp": "2024-05-01T12:00:00+00:00"
                }
            ]
        }
    )


class MessageResponse(BaseModel):
    """Schema for simple success responses."""

    message: str = Field(..., description="Success message")
