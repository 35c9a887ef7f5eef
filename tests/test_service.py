from concurrent.futures import ThreadPoolExecutor

import pytest

from ticketbook.domain import (
    BookingError,
    InvalidUserIDError,
    NoTicketsAvailableError,
)
from ticketbook.inmemory import InMemoryBookingRepository, InMemoryTicketRepository
from ticketbook.repository import TicketRepository


class _FailingDecrementTickets(TicketRepository):
    def __init__(self, total):
        self.total = total

    def get_available_tickets(self):
        return self.total

    def decrement_available_tickets(self, count):
        raise RuntimeError("storage down")

    def get_total_tickets(self):
        return self.total

    def set_total_tickets(self, total):
        self.total = total


def _service(total, latency=False):
    from ticketbook.service import BookingService

    bookings = InMemoryBookingRepository()
    tickets = InMemoryTicketRepository(total)
    return BookingService(bookings, tickets, simulate_latency=latency), bookings, tickets


def test_book_ticket_success():
    service, bookings, tickets = _service(5)
    result = service.book_ticket("USER-000001")
    assert result.success is True
    assert result.user_id == "USER-000001"
    assert result.booking_id.startswith("BOOK-USER-000001-")
    assert bookings.get_booking(result.booking_id).user_id == "USER-000001"
    assert tickets.get_available_tickets() == 4


def test_book_ticket_rejects_empty_user():
    service, _, _ = _service(5)
    with pytest.raises(InvalidUserIDError):
        service.book_ticket("")


def test_book_ticket_sold_out():
    service, bookings, _ = _service(1)
    service.book_ticket("a")
    with pytest.raises(NoTicketsAvailableError, match="no tickets available"):
        service.book_ticket("b")
    assert bookings.get_booking_count() == 1


def test_stats_after_bookings():
    service, _, _ = _service(10)
    for user in ("a", "b", "c"):
        service.book_ticket(user)
    stats = service.get_booking_stats()
    assert stats.total_tickets == 10
    assert stats.booked_tickets == 3
    assert stats.available_tickets == 7


def test_user_bookings():
    service, _, _ = _service(10)
    service.book_ticket("alice")
    service.book_ticket("bob")
    service.book_ticket("alice")
    alice = service.get_user_bookings("alice")
    assert len(alice) == 2
    assert all(b.user_id == "alice" for b in alice)


def test_user_bookings_rejects_empty_user():
    service, _, _ = _service(1)
    with pytest.raises(InvalidUserIDError):
        service.get_user_bookings("")


def test_rollback_when_decrement_fails():
    from ticketbook.service import BookingService

    bookings = InMemoryBookingRepository()
    service = BookingService(bookings, _FailingDecrementTickets(3), simulate_latency=False)
    with pytest.raises(BookingError, match="failed to decrement tickets"):
        service.book_ticket("alice")
    assert bookings.get_booking_count() == 0


def test_concurrent_booking_never_oversells():
    service, bookings, tickets = _service(50, latency=True)

    def attempt(i):
        try:
            service.book_ticket(f"USER-{i:06d}")
            return True
        except NoTicketsAvailableError:
            return False

    with ThreadPoolExecutor(max_workers=20) as pool:
        outcomes = list(pool.map(attempt, range(120)))

    assert sum(outcomes) == 50
    assert tickets.get_available_tickets() == 0
    assert bookings.get_booking_count() == 50
    stats = service.get_booking_stats()
    assert stats.booked_tickets == stats.total_tickets