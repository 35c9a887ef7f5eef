import logging

import pytest

from ticketbook.client import SimulationReport, main, run_simulation


def test_oversubscribed_simulation_books_every_ticket():
    report = run_simulation(
        total_tickets=20, total_requests=30, num_workers=4, batch_size=7, timeout=10
    )
    assert report.processed_requests == report.total_requests
    assert report.successful_bookings == 20
    assert report.successful_bookings + report.failed_bookings == report.processed_requests
    assert report.stats.booked_tickets == report.stats.total_tickets
    assert report.stats.available_tickets == 0


def test_undersubscribed_simulation_leaves_tickets():
    report = run_simulation(
        total_tickets=50, total_requests=10, num_workers=3, batch_size=4, timeout=10
    )
    assert report.successful_bookings == 10
    assert report.failed_bookings == 0
    assert report.stats.available_tickets == report.stats.total_tickets - report.successful_bookings


def test_report_rates_are_consistent():
    report = run_simulation(
        total_tickets=5, total_requests=8, num_workers=2, batch_size=3, timeout=10
    )
    assert report.duration > 0
    assert report.requests_per_second * report.average_time_per_request == pytest.approx(1.0)


def test_report_handles_zero_requests():
    report = run_simulation(
        total_tickets=3, total_requests=0, num_workers=2, batch_size=5, timeout=10
    )
    assert report.processed_requests == 0
    assert report.average_time_per_request == 0.0
    assert report.stats.available_tickets == report.stats.total_tickets


def test_invalid_batch_size_rejected():
    with pytest.raises(ValueError):
        run_simulation(total_tickets=1, total_requests=1, num_workers=1, batch_size=0)


def test_main_logs_success(caplog):
    caplog.set_level(logging.INFO, logger="ticketbook.client")
    code = main(["--tickets", "5", "--requests", "8", "--workers", "2", "--batch-size", "3"])
    assert code == 0
    assert "SUCCESS: All tickets were booked correctly!" in caplog.text
    assert "mismatch" not in caplog.text


def test_main_warns_when_tickets_remain(caplog):
    caplog.set_level(logging.INFO, logger="ticketbook.client")
    main(["--tickets", "9", "--requests", "4", "--workers", "2", "--batch-size", "2"])
    assert "WARNING: Only 4 out of 9 tickets were booked" in caplog.text


def test_report_is_immutable():
    report = run_simulation(
        total_tickets=2, total_requests=2, num_workers=1, batch_size=1, timeout=10
    )
    assert isinstance(report, SimulationReport)
    with pytest.raises(AttributeError):
        report.failed_bookings = 99
    assert report.failed_bookings == 0
    assert report.successful_bookings == 2