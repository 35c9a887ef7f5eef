"""Load simulation: many concurrent users competing for a fixed set of tickets."""

from __future__ import annotations

import argparse
import logging
import threading
import time
from dataclasses import dataclass

from ticketbook.domain import BookingStats
from ticketbook.inmemory import InMemoryBookingRepository, InMemoryTicketRepository
from ticketbook.service import BookingService
from ticketbook.worker import Pool

log = logging.getLogger(__name__)

PROGRESS_EVERY = 5000


@dataclass(frozen=True)
class SimulationReport:
    """Counts and timing gathered from one simulation run."""

    total_requests: int
    processed_requests: int
    successful_bookings: int
    failed_bookings: int
    duration: float
    stats: BookingStats

    @property
    def requests_per_second(self) -> float:
        return self.total_requests / self.duration if self.duration > 0 else 0.0

    @property
    def average_time_per_request(self) -> float:
        return self.duration / self.total_requests if self.total_requests else 0.0


def _submit_all(pool: Pool, total_requests: int, batch_size: int) -> None:
    def submit_batch(start: int) -> None:
        for j in range(start, min(start + batch_size, total_requests)):
            if not pool.submit_request(f"USER-{j:06d}"):
                return

    threads = [
        threading.Thread(target=submit_batch, args=(start,), daemon=True)
        for start in range(0, total_requests, batch_size)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    pool.stop()


def run_simulation(
    total_tickets: int = 50_000,
    total_requests: int = 75_000,
    num_workers: int = 1000,
    batch_size: int = 1000,
    timeout: float = 30.0,
) -> SimulationReport:
    """Book tickets for ``total_requests`` users through a worker pool."""
    if batch_size < 1:
        raise ValueError("batch_size must be at least 1")

    started = time.perf_counter()
    service = BookingService(
        InMemoryBookingRepository(), InMemoryTicketRepository(total_tickets)
    )

    cancel = threading.Event()
    timer = threading.Timer(timeout, cancel.set)
    timer.daemon = True
    timer.start()

    pool = Pool(num_workers, service)
    pool.start(cancel)

    log.info("Starting concurrent booking requests...")
    submitter = threading.Thread(
        target=_submit_all, args=(pool, total_requests, batch_size), daemon=True
    )
    submitter.start()

    processed = successful = failed = 0
    try:
        for result in pool.results():
            processed += 1
            if result.success:
                successful += 1
            else:
                failed += 1
            if processed % PROGRESS_EVERY == 0:
                log.info(
                    "Progress: %d/%d requests processed, %d successful, %d failed",
                    processed,
                    total_requests,
                    successful,
                    failed,
                )
    finally:
        submitter.join()
        timer.cancel()

    duration = time.perf_counter() - started
    return SimulationReport(
        total_requests=total_requests,
        processed_requests=processed,
        successful_bookings=successful,
        failed_bookings=failed,
        duration=duration,
        stats=service.get_booking_stats(),
    )


def _log_report(report: SimulationReport) -> None:
    stats = report.stats
    rule = "=" * 50
    log.info(rule)
    log.info("BOOKING SYSTEM FINAL REPORT")
    log.info(rule)
    log.info("Total Time Taken: %.3fs", report.duration)
    log.info("Total Tickets: %d", stats.total_tickets)
    log.info("Total Tickets Booked: %d", stats.booked_tickets)
    log.info("Total Tickets NOT Booked: %d", report.failed_bookings)
    log.info("Total Requests Processed: %d", report.processed_requests)
    log.info("Remaining Tickets: %d", stats.available_tickets)
    log.info("Requests per Second: %.2f", report.requests_per_second)
    log.info("Average Time per Request: %.6fs", report.average_time_per_request)
    log.info(rule)

    if stats.booked_tickets == stats.total_tickets and stats.available_tickets == 0:
        log.info("SUCCESS: All tickets were booked correctly!")
    elif stats.booked_tickets < stats.total_tickets:
        log.warning(
            "WARNING: Only %d out of %d tickets were booked",
            stats.booked_tickets,
            stats.total_tickets,
        )

    if report.successful_bookings != stats.booked_tickets:
        log.error(
            "ERROR: Booking count mismatch! Counted: %d, Actual: %d",
            report.successful_bookings,
            stats.booked_tickets,
        )


def main(argv: list[str] | None = None) -> int:
    """Run the simulation and log a final report."""
    parser = argparse.ArgumentParser(description="Simulate concurrent ticket booking.")
    parser.add_argument("--tickets", type=int, default=50_000)
    parser.add_argument("--requests", type=int, default=75_000)
    parser.add_argument("--workers", type=int, default=1000)
    parser.add_argument("--batch-size", type=int, default=1000)
    parser.add_argument("--timeout", type=float, default=30.0)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")
    log.info("Ticket Booking System Starting...")
    log.info("Total Tickets Available: %d", args.tickets)
    log.info("Total Booking Requests: %d", args.requests)
    log.info("Worker Pool Size: %d", args.workers)
    log.info("-" * 50)

    report = run_simulation(
        total_tickets=args.tickets,
        total_requests=args.requests,
        num_workers=args.workers,
        batch_size=args.batch_size,
        timeout=args.timeout,
    )
    _log_report(report)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())