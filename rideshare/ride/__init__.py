"""Ride service: ride lifecycle, positions, distance and fares, and its HTTP API."""