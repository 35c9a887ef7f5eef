"""Storage interfaces used by the booking service."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ticketbook.domain import Booking


class BookingRepository(ABC):
    """Stores bookings."""

    @abstractmethod
    def create_booking(self, booking: Booking) -> None:
        """Store a booking, replacing any with the same id."""

    @abstractmethod
    def get_booking(self, booking_id: str) -> Booking:
        """Return a booking; raise BookingNotFoundError if absent."""

    @abstractmethod
    def get_bookings_by_user_id(self, user_id: str) -> list[Booking]:
        """Return every booking held by a user."""

    @abstractmethod
    def get_all_bookings(self) -> list[Booking]:
        """Return every booking."""

    @abstractmethod
    def delete_booking(self, booking_id: str) -> None:
        """Remove a booking; raise BookingNotFoundError if absent."""

    @abstractmethod
    def get_booking_count(self) -> int:
        """Return how many bookings are stored."""


class TicketRepository(ABC):
    """Tracks the ticket inventory."""

    @abstractmethod
    def get_available_tickets(self) -> int:
        """Return the number of tickets still available."""

    @abstractmethod
    def decrement_available_tickets(self, count: int) -> None:
        """Reduce the available count by ``count``."""

    @abstractmethod
    def get_total_tickets(self) -> int:
        """Return the total number of tickets."""

    @abstractmethod
    def set_total_tickets(self, total: int) -> None:
        """Reset both total and available tickets to ``total``."""