import threading

import pytest

from ticketbook.inmemory import InMemoryBookingRepository, InMemoryTicketRepository
from ticketbook.service import BookingService
from ticketbook.worker import Pool


def _service(total):
    return BookingService(
        InMemoryBookingRepository(),
        InMemoryTicketRepository(total),
        simulate_latency=False,
    )


def test_pool_books_up_to_capacity():
    pool = Pool(3, _service(5))
    pool.start()
    users = [f"user-{i}" for i in range(8)]
    submitted = [pool.submit_request(u) for u in users]
    pool.stop()
    results = list(pool.results())

    assert all(submitted)
    assert sorted(r.user_id for r in results) == sorted(users)
    assert len([r for r in results if r.success]) == 5
    assert {r.error for r in results if not r.success} == {"no tickets available"}


def test_successful_results_have_unique_booking_ids():
    pool = Pool(4, _service(10))
    pool.start()
    for i in range(10):
        pool.submit_request(f"user-{i}")
    pool.stop()
    results = list(pool.results())

    ids = [r.booking_id for r in results if r.success]
    assert len(ids) == 10
    assert len(set(ids)) == len(ids)
    assert all(r.booking_id.startswith(f"BOOK-{r.user_id}-") for r in results)


def test_concurrent_consumer_sees_every_result():
    service = _service(50)
    pool = Pool(2, service)
    pool.start()
    collected = []
    consumer = threading.Thread(target=lambda: collected.extend(pool.results()))
    consumer.start()
    for i in range(100):
        pool.submit_request(f"user-{i}")
    pool.stop()
    consumer.join(timeout=10)

    assert len(collected) == 100
    assert sum(r.success for r in collected) == 50
    assert service.get_booking_stats().available_tickets == 0


def test_cancelled_pool_stops_accepting_when_full():
    pool = Pool(2, _service(10))
    cancel = threading.Event()
    cancel.set()
    pool.start(cancel)
    submitted = [pool.submit_request(f"user-{i}") for i in range(7)]
    pool.stop()

    assert submitted.count(True) == 4
    assert submitted[-1] is False
    assert list(pool.results()) == []


def test_submit_after_stop_raises():
    pool = Pool(1, _service(1))
    pool.start()
    pool.stop()
    with pytest.raises(RuntimeError):
        pool.submit_request("late-user")


def test_invalid_user_id_is_reported_as_failure():
    pool = Pool(1, _service(3))
    pool.start()
    pool.submit_request("")
    pool.stop()
    results = list(pool.results())

    assert len(results) == 1
    assert results[0].success is False
    assert results[0].error == "invalid user ID"


def test_pool_requires_workers():
    with pytest.raises(ValueError):
        Pool(0, _service(1))