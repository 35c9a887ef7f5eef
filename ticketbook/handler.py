"""HTTP routes exposing the booking service."""

from __future__ import annotations

from flask import Flask, jsonify, request

from ticketbook.domain import (
    BookingRequest,
    InvalidUserIDError,
    NoTicketsAvailableError,
)
from ticketbook.service import BookingService


def _error(status: int, message: str):
    return jsonify({"success": False, "error": message}), status


def create_app(service: BookingService) -> Flask:
    """Build a Flask application serving the booking API."""
    app = Flask("ticketbook")

    @app.get("/health")
    def health_check():
        return jsonify({"success": True, "data": {"status": "healthy"}})

    @app.post("/api/v1/bookings")
    def book_ticket():
        payload = request.get_json(force=True, silent=True)
        try:
            booking_request = BookingRequest.from_dict(payload)
        except ValueError:
            return _error(400, "Invalid request body")

        try:
            result = service.book_ticket(booking_request.user_id)
        except NoTicketsAvailableError as exc:
            return _error(409, str(exc))
        except InvalidUserIDError as exc:
            return _error(400, str(exc))
        except Exception as exc:
            return _error(500, str(exc))

        return jsonify({"success": True, "data": result.to_dict()})

    @app.get("/api/v1/stats")
    def get_stats():
        try:
            stats = service.get_booking_stats()
        except Exception as exc:
            return _error(500, str(exc))
        return jsonify({"success": True, "data": stats.to_dict()})

    @app.get("/api/v1/bookings/user/<user_id>")
    def get_user_bookings(user_id: str):
        if not user_id:
            return _error(400, "User ID is required")
        try:
            bookings = service.get_user_bookings(user_id)
        except Exception as exc:
            return _error(500, str(exc))
        data = [booking.to_dict() for booking in bookings] or None
        return jsonify({"success": True, "data": data})

    return app