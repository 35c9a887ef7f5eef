"""Booking logic on top of the repositories."""

from __future__ import annotations

import random
import threading
import time
from datetime import datetime

from ticketbook.domain import (
    Booking,
    BookingError,
    BookingResult,
    BookingStats,
    InvalidUserIDError,
    NoTicketsAvailableError,
)
from ticketbook.repository import BookingRepository, TicketRepository


class BookingService:
    """Books tickets without ever overselling the inventory."""

    def __init__(
        self,
        booking_repo: BookingRepository,
        ticket_repo: TicketRepository,
        simulate_latency: bool = True,
    ) -> None:
        self._bookings = booking_repo
        self._tickets = ticket_repo
        self._simulate_latency = simulate_latency
        self._lock = threading.Lock()

    def _available(self) -> int:
        try:
            return self._tickets.get_available_tickets()
        except Exception as exc:
            raise BookingError(f"failed to get available tickets: {exc}") from exc

    def book_ticket(self, user_id: str) -> BookingResult:
        """Book one ticket for ``user_id`` and return the successful result."""
        if not user_id:
            raise InvalidUserIDError()

        if self._simulate_latency:
            time.sleep(random.randrange(1000) / 1_000_000)

        # Cheap check first, then confirm under the lock.
        if self._available() <= 0:
            raise NoTicketsAvailableError()

        with self._lock:
            if self._available() <= 0:
                raise NoTicketsAvailableError()

            booking_id = f"BOOK-{user_id}-{time.time_ns()}"
            booking = Booking(id=booking_id, user_id=user_id, timestamp=datetime.now().astimezone())

            try:
                self._bookings.create_booking(booking)
            except Exception as exc:
                raise BookingError(f"failed to create booking: {exc}") from exc

            try:
                self._tickets.decrement_available_tickets(1)
            except Exception as exc:
                try:
                    self._bookings.delete_booking(booking_id)
                except Exception:
                    pass
                raise BookingError(f"failed to decrement tickets: {exc}") from exc

        return BookingResult(user_id=user_id, success=True, booking_id=booking_id)

    def get_booking_stats(self) -> BookingStats:
        """Return total, booked and available ticket counts."""
        try:
            total = self._tickets.get_total_tickets()
        except Exception as exc:
            raise BookingError(f"failed to get total tickets: {exc}") from exc
        available = self._available()
        return BookingStats(
            total_tickets=total,
            booked_tickets=total - available,
            available_tickets=available,
        )

    def get_user_bookings(self, user_id: str) -> list[Booking]:
        """Return every booking held by ``user_id``."""
        if not user_id:
            raise InvalidUserIDError()
        try:
            return self._bookings.get_bookings_by_user_id(user_id)
        except Exception as exc:
            raise BookingError(f"failed to get user bookings: {exc}") from exc