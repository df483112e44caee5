"""Ride-hailing backend services: accounts, rides and payments, with shared database and queue access."""

__version__ = "0.1.0"