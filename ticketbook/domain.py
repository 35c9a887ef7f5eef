"""Core data types and errors of the ticket booking system."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class Booking:
    """A single confirmed ticket booking."""

    id: str
    user_id: str
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class BookingResult:
    """Outcome of one booking attempt."""

    user_id: str
    success: bool
    booking_id: str = ""
    error: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"user_id": self.user_id, "success": self.success}
        if self.booking_id:
            data["booking_id"] = self.booking_id
        if self.error:
            data["error"] = self.error
        return data


@dataclass(frozen=True)
class BookingRequest:
    """A request to book one ticket for a user."""

    user_id: str

    @classmethod
    def from_dict(cls, data: Any) -> BookingRequest:
        """Build a request from decoded JSON; raise ValueError if malformed."""
        if not isinstance(data, Mapping):
            raise ValueError("request body must be a JSON object")
        user_id = data.get("user_id")
        if user_id is None:
            user_id = ""
        if not isinstance(user_id, str):
            raise ValueError("user_id must be a string")
        return cls(user_id=user_id)


@dataclass(frozen=True)
class BookingStats:
    """Ticket counts at a point in time."""

    total_tickets: int
    booked_tickets: int
    available_tickets: int

    def to_dict(self) -> dict[str, int]:
        return {
            "total_tickets": self.total_tickets,
            "booked_tickets": self.booked_tickets,
            "available_tickets": self.available_tickets,
        }


class BookingError(Exception):
    """Base class for all booking failures."""

    default_message = "booking failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message if message is not None else self.default_message)


class NoTicketsAvailableError(BookingError):
    default_message = "no tickets available"


class BookingNotFoundError(BookingError):
    default_message = "booking not found"


class InvalidUserIDError(BookingError):
    default_message = "invalid user ID"


class ServerUnavailableError(BookingError):
    default_message = "server unavailable"