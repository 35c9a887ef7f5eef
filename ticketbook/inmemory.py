"""Thread-safe in-memory repositories."""

from __future__ import annotations

import threading

from ticketbook.domain import Booking, BookingNotFoundError
from ticketbook.repository import BookingRepository, TicketRepository


class InMemoryBookingRepository(BookingRepository):
    """Bookings kept in a dictionary keyed by booking id."""

    def __init__(self) -> None:
        self._bookings: dict[str, Booking] = {}
        self._lock = threading.Lock()

    def create_booking(self, booking: Booking) -> None:
        with self._lock:
            self._bookings[booking.id] = booking

    def get_booking(self, booking_id: str) -> Booking:
        with self._lock:
            try:
                return self._bookings[booking_id]
            except KeyError:
                raise BookingNotFoundError() from None

    def get_bookings_by_user_id(self, user_id: str) -> list[Booking]:
        with self._lock:
            return [b for b in self._bookings.values() if b.user_id == user_id]

    def get_all_bookings(self) -> list[Booking]:
        with self._lock:
            return list(self._bookings.values())

    def delete_booking(self, booking_id: str) -> None:
        with self._lock:
            if self._bookings.pop(booking_id, None) is None:
                raise BookingNotFoundError()

    def get_booking_count(self) -> int:
        with self._lock:
            return len(self._bookings)


class InMemoryTicketRepository(TicketRepository):
    """Ticket counters guarded by a lock."""

    def __init__(self, total_tickets: int) -> None:
        self._total = total_tickets
        self._available = total_tickets
        self._lock = threading.Lock()

    def get_available_tickets(self) -> int:
        with self._lock:
            return self._available

    def decrement_available_tickets(self, count: int) -> None:
        with self._lock:
            self._available -= count

    def get_total_tickets(self) -> int:
        with self._lock:
            return self._total

    def set_total_tickets(self, total: int) -> None:
        with self._lock:
            self._total = total
            self._available = total