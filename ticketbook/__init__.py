"""Concurrent in-memory ticket booking with an HTTP API and a load-simulation client."""

__version__ = "0.1.0"

__all__ = ["__version__"]