"""A fixed-size pool of threads that process booking requests."""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Iterator
from typing import Generic, TypeVar

from ticketbook.domain import BookingResult
from ticketbook.service import BookingService

T = TypeVar("T")

# How often blocked threads re-check a cancellation event.
_POLL_INTERVAL = 0.05


class _ChannelDone(Exception):
    """Raised by a receive when the channel is drained and closed, or cancelled."""


class _Channel(Generic[T]):
    """Bounded, closable FIFO shared between threads."""

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._items: deque[T] = deque()
        self._capacity = capacity
        self._closed = False
        lock = threading.Lock()
        self._not_empty = threading.Condition(lock)
        self._not_full = threading.Condition(lock)

    def put(self, item: T, cancel: threading.Event | None = None) -> bool:
        """Queue ``item``; return False if ``cancel`` fired while waiting for room."""
        timeout = _POLL_INTERVAL if cancel is not None else None
        with self._not_full:
            while True:
                if self._closed:
                    raise RuntimeError("send on closed channel")
                if len(self._items) < self._capacity:
                    self._items.append(item)
                    self._not_empty.notify()
                    return True
                if cancel is not None and cancel.is_set():
                    return False
                self._not_full.wait(timeout)

    def get(self, cancel: threading.Event | None = None) -> T:
        """Take the next item; raise _ChannelDone when closed and empty or cancelled."""
        timeout = _POLL_INTERVAL if cancel is not None else None
        with self._not_empty:
            while True:
                if cancel is not None and cancel.is_set():
                    raise _ChannelDone
                if self._items:
                    item = self._items.popleft()
                    self._not_full.notify()
                    return item
                if self._closed:
                    raise _ChannelDone
                self._not_empty.wait(timeout)

    def close(self) -> None:
        with self._not_empty:
            self._closed = True
            self._not_empty.notify_all()
            self._not_full.notify_all()

    def __iter__(self) -> Iterator[T]:
        while True:
            try:
                yield self.get()
            except _ChannelDone:
                return


class Worker:
    """Takes user ids off the request channel and books a ticket for each."""

    def __init__(
        self,
        worker_id: int,
        requests: _Channel[str],
        results: _Channel[BookingResult],
        service: BookingService,
    ) -> None:
        self.id = worker_id
        self._requests = requests
        self._results = results
        self._service = service

    def run(self, cancel: threading.Event) -> None:
        """Process requests until the channel closes or ``cancel`` is set."""
        while True:
            try:
                user_id = self._requests.get(cancel)
            except _ChannelDone:
                return
            try:
                result = self._service.book_ticket(user_id)
            except Exception as exc:
                result = BookingResult(user_id=user_id, success=False, error=str(exc))
            if not self._results.put(result, cancel):
                return


class Pool:
    """Runs a set of workers over shared request and result channels."""

    def __init__(self, num_workers: int, service: BookingService) -> None:
        if num_workers < 1:
            raise ValueError("num_workers must be at least 1")
        self._requests: _Channel[str] = _Channel(num_workers * 2)
        self._results: _Channel[BookingResult] = _Channel(num_workers * 10)
        self._service = service
        self.workers = [
            Worker(i, self._requests, self._results, service) for i in range(num_workers)
        ]
        self._threads: list[threading.Thread] = []
        self._cancel: threading.Event | None = None

    def start(self, cancel: threading.Event | None = None) -> None:
        """Start every worker in its own thread; ``cancel`` stops them early."""
        self._cancel = cancel if cancel is not None else threading.Event()
        for worker in self.workers:
            thread = threading.Thread(
                target=worker.run,
                args=(self._cancel,),
                name=f"booking-worker-{worker.id}",
                daemon=True,
            )
            self._threads.append(thread)
            thread.start()

    def stop(self) -> None:
        """Close the request channel, wait for workers, then close the results."""
        self._requests.close()
        for thread in self._threads:
            thread.join()
        self._results.close()

    def submit_request(self, user_id: str) -> bool:
        """Queue a booking request; return False if the pool was cancelled."""
        return self._requests.put(user_id, self._cancel)

    def results(self) -> Iterator[BookingResult]:
        """Yield results as they arrive until the pool is stopped and drained."""
        return iter(self._results)