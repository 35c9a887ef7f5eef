# ticketbook

A small ticket booking system. A fixed stock of tickets is held in memory.
Users book tickets one at a time. The stock never goes below zero, however
many requests arrive at once.

It has two commands:

- `ticketbook-server`: an HTTP server with a JSON API for booking tickets and
  reading statistics;
- `ticketbook-client`: a load simulation that sends many booking requests
  through a pool of worker threads and logs a final report.

## Installation

```
pip install .
```

To run the tests, install the test extra:

```
pip install ".[test]"
pytest
```

## The HTTP server

```
ticketbook-server [--host HOST] [--port PORT] [--tickets N]
```

By default the server binds to all addresses on port 8080 and starts with
50,000 tickets. It runs until it receives SIGINT or SIGTERM, then shuts down.

Every response is a JSON object holding `"success"` and either `"data"` or
`"error"`.

| Method | Path                              | Purpose                                  |
|--------|-----------------------------------|------------------------------------------|
| GET    | `/health`                         | Health check: `{"status": "healthy"}`    |
| POST   | `/api/v1/bookings`                | Book one ticket, body `{"user_id": ...}` |
| GET    | `/api/v1/stats`                   | Total, booked and available tickets      |
| GET    | `/api/v1/bookings/user/<user_id>` | All bookings made by one user            |

Status codes for a booking:

- `200`: the ticket was booked. `data` holds `user_id`, `success` and `booking_id`.
- `400`: the body is not a JSON object, `user_id` is not a string, or the
  user ID is missing or empty.
- `409`: no tickets are left.
- `500`: any other failure.

A user's bookings are returned as a list of objects with `id`, `user_id` and
an ISO 8601 `timestamp`; when the user has none, `data` is `null`.

Example:

```
curl -X POST localhost:8080/api/v1/bookings \
     -H 'Content-Type: application/json' \
     -d '{"user_id": "USER-000001"}'
```

## The load-simulation client

```
ticketbook-client [--tickets N] [--requests N] [--workers N] [--batch-size N] [--timeout SECONDS]
```

By default the client tries to book 50,000 tickets with 75,000 requests
(user IDs `USER-000000` upwards), using a pool of 1,000 workers. Requests are
submitted from several threads, one per batch of 1,000. The run is cancelled
after 30 seconds if it has not finished. Progress is logged every 5,000
results. At the end it logs:

- the time taken;
- the total, booked and remaining tickets;
- the failed bookings and the requests processed;
- the requests per second and the average time per request.

It then logs whether every ticket was booked, and an error if the number of
successful results differs from the number of tickets booked.

## Using the library

The same parts can be used from Python:

```python
from ticketbook.inmemory import InMemoryBookingRepository, InMemoryTicketRepository
from ticketbook.service import BookingService
from ticketbook.domain import NoTicketsAvailableError

service = BookingService(InMemoryBookingRepository(), InMemoryTicketRepository(2))

result = service.book_ticket("USER-000001")
print(result.booking_id)

print(service.get_booking_stats().to_dict())
# {'total_tickets': 2, 'booked_tickets': 1, 'available_tickets': 1}

service.book_ticket("USER-000002")
try:
    service.book_ticket("USER-000003")
except NoTicketsAvailableError as exc:
    print(exc)  # no tickets available
```

`BookingService.book_ticket` sleeps for up to a millisecond before each booking
to imitate network delay; pass `simulate_latency=False` to turn this off.
Failures are raised as subclasses of `ticketbook.domain.BookingError`.

Other entry points:

- `ticketbook.repository` holds the abstract `BookingRepository` and
  `TicketRepository` interfaces, for other storage back ends.
- `ticketbook.worker.Pool(num_workers, service)` runs booking requests on
  worker threads: `start()`, `submit_request(user_id)`, `results()` and `stop()`.
- `ticketbook.handler.create_app(service)` builds a Flask application around
  any `BookingService`.
- `ticketbook.server.build_app(total_tickets)` builds one with fresh in-memory
  repositories.
- `ticketbook.client.run_simulation(...)` runs the load simulation and returns
  a `SimulationReport`.

## What it does not do

All bookings and ticket counts live in memory only. Nothing is written to
disk or a database, so everything is lost when the process exits, and each
server process has its own separate stock. The client runs its simulation
in-process against its own service; it does not send requests to a running
server. There is no authentication and no way to cancel a booking over HTTP.