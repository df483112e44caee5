"""Storage of rides and their positions in the relational database."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from rideshare.database import DatabaseConnection
from rideshare.ride.entity import Position, Ride

_SELECT_RIDE = "select * from gct.ride where ride_id = $1"
_INSERT_RIDE = (
    "insert into gct.ride (ride_id, passenger_id, from_lat, from_long, to_lat, to_long, "
    "status, date, distance, fare) values ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10)"
)
_UPDATE_RIDE = (
    "update gct.ride set status = $1, driver_id = $2, distance = $3, fare = $4 "
    "where ride_id = $5"
)
_COUNT_ACTIVE = (
    "select count(*) from gct.ride where passenger_id = $1 "
    "and status not in ('completed', 'cancelled')"
)
_INSERT_POSITION = (
    "insert into gct.position (position_id, ride_id, lat, long, date) "
    "values ($1, $2, $3, $4, $5)"
)
_SELECT_POSITIONS = (
    "select position_id, ride_id, lat, long, date from gct.position where ride_id = $1"
)


class RideRepository(ABC):
    """Where rides are kept."""

    @abstractmethod
    def get_ride_by_id(self, ride_id: str) -> Ride:
        """Return the ride with this id or raise LookupError."""

    @abstractmethod
    def save_ride(self, ride: Ride) -> None:
        """Store a new ride."""

    @abstractmethod
    def update_ride(self, ride: Ride) -> None:
        """Store the status, driver, distance and fare of a ride."""

    @abstractmethod
    def has_active_ride_by_passenger_id(self, passenger_id: str) -> bool:
        """Tell whether the passenger has a ride that is neither completed nor cancelled."""


class PositionRepository(ABC):
    """Where ride positions are kept."""

    @abstractmethod
    def save_position(self, position: Position) -> None:
        """Store a position."""

    @abstractmethod
    def get_positions_by_ride_id(self, ride_id: str) -> list[Position]:
        """Return every position recorded for a ride."""


def ride_from_row(row: Mapping[str, Any]) -> Ride:
    """Rebuild a ride from a database row; a missing driver becomes empty."""
    return Ride(
        row["ride_id"],
        row["passenger_id"],
        row.get("driver_id") or "",
        float(row["from_lat"]),
        float(row["from_long"]),
        float(row["to_lat"]),
        float(row["to_long"]),
        row["status"],
        row["date"],
        float(row["distance"]),
        float(row["fare"]),
    )


def position_from_row(row: Mapping[str, Any]) -> Position:
    """Rebuild a position from a database row."""
    return Position(
        row["position_id"],
        row["ride_id"],
        float(row["lat"]),
        float(row["long"]),
        row["date"],
    )


class RideRepositoryDatabase(RideRepository):
    """Rides stored in the ``gct.ride`` table."""

    def __init__(self, connection: DatabaseConnection) -> None:
        self._connection = connection

    def get_ride_by_id(self, ride_id: str) -> Ride:
        row = self._connection.query_one(_SELECT_RIDE, ride_id)
        if row is None:
            raise LookupError("no rows in result set")
        return ride_from_row(row)

    def save_ride(self, ride: Ride) -> None:
        self._connection.execute(
            _INSERT_RIDE,
            ride.ride_id,
            ride.passenger_id,
            ride.from_coord.lat,
            ride.from_coord.long,
            ride.to_coord.lat,
            ride.to_coord.long,
            ride.status,
            ride.date,
            ride.distance,
            ride.fare,
        )

    def update_ride(self, ride: Ride) -> None:
        self._connection.execute(
            _UPDATE_RIDE,
            ride.status,
            ride.driver_id,
            ride.distance,
            ride.fare,
            ride.ride_id,
        )

    def has_active_ride_by_passenger_id(self, passenger_id: str) -> bool:
        row = self._connection.query_one(_COUNT_ACTIVE, passenger_id)
        if not row:
            return False
        count = next(iter(row.values()))
        return int(count or 0) > 0


class PositionRepositoryDatabase(PositionRepository):
    """Positions stored in the ``gct.position`` table."""

    def __init__(self, connection: DatabaseConnection) -> None:
        self._connection = connection

    def save_position(self, position: Position) -> None:
        self._connection.execute(
            _INSERT_POSITION,
            position.position_id,
            position.ride_id,
            position.coord.lat,
            position.coord.long,
            position.date,
        )

    def get_positions_by_ride_id(self, ride_id: str) -> list[Position]:
        rows = self._connection.query_all(_SELECT_POSITIONS, ride_id)
        return [position_from_row(row) for row in rows]