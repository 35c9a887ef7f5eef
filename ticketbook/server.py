"""Command that serves the booking API over HTTP until interrupted."""

from __future__ import annotations

import argparse
import logging
import signal
import threading
from socketserver import ThreadingMixIn
from wsgiref.simple_server import WSGIServer, make_server

from flask import Flask

from ticketbook.handler import create_app
from ticketbook.inmemory import InMemoryBookingRepository, InMemoryTicketRepository
from ticketbook.service import BookingService

log = logging.getLogger(__name__)

DEFAULT_TICKETS = 50_000
DEFAULT_PORT = 8080


class _ThreadingWSGIServer(ThreadingMixIn, WSGIServer):
    daemon_threads = True


def build_app(total_tickets: int = DEFAULT_TICKETS) -> Flask:
    """Create the application backed by fresh in-memory repositories."""
    service = BookingService(
        InMemoryBookingRepository(), InMemoryTicketRepository(total_tickets)
    )
    return create_app(service)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve the ticket booking API.")
    parser.add_argument("--host", default="", help="address to bind (default: all)")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--tickets", type=int, default=DEFAULT_TICKETS)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Serve until SIGINT or SIGTERM, then shut down cleanly."""
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")

    app = build_app(args.tickets)
    try:
        server = make_server(args.host, args.port, app, server_class=_ThreadingWSGIServer)
    except OSError as exc:
        log.error("Failed to start server: %s", exc)
        return 1

    quit_event = threading.Event()

    def _on_signal(signum, frame):
        quit_event.set()

    previous = {
        sig: signal.signal(sig, _on_signal) for sig in (signal.SIGINT, signal.SIGTERM)
    }
    serving = threading.Thread(target=server.serve_forever, daemon=True)
    log.info("Server starting on %s:%d", args.host, args.port)
    serving.start()
    try:
        while not quit_event.wait(0.5):
            pass
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)

    log.info("Server shutting down...")
    server.shutdown()
    serving.join(timeout=30)
    server.server_close()
    log.info("Server exited")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())