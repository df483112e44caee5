"""Rides, their life-cycle states and the positions recorded along them."""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from itertools import pairwise
from typing import ClassVar, Iterable

from rideshare.ride.services import DistanceCalculator, fare_calculator_for
from rideshare.ride.values import Coord


class InvalidStatusError(Exception):
    """A ride was asked to move to a state it cannot reach from its current one."""

    def __init__(self, message: str = "invalid status") -> None:
        super().__init__(message)


class RideStatusValue(str, Enum):
    REQUESTED = "requested"
    ACCEPTED = "accepted"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class RideStatus:
    """A state of a ride; only the transitions a state lists are allowed."""

    value: ClassVar[RideStatusValue]
    transitions: ClassVar[dict[str, RideStatusValue]] = {}

    def __init__(self, ride: Ride) -> None:
        self.ride = ride

    def _move(self, action: str) -> None:
        target = self.transitions.get(action)
        if target is None:
            raise InvalidStatusError()
        self.ride._status = _STATUS_CLASSES[target](self.ride)

    def request(self) -> None:
        self._move("request")

    def accept(self) -> None:
        self._move("accept")

    def start(self) -> None:
        self._move("start")

    def finish(self) -> None:
        self._move("finish")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value.value!r})"


class RequestedStatus(RideStatus):
    value = RideStatusValue.REQUESTED
    transitions = {"accept": RideStatusValue.ACCEPTED}


class AcceptedStatus(RideStatus):
    value = RideStatusValue.ACCEPTED
    transitions = {"start": RideStatusValue.IN_PROGRESS}


class InProgressStatus(RideStatus):
    value = RideStatusValue.IN_PROGRESS
    transitions = {"finish": RideStatusValue.COMPLETED}


class CompleteStatus(RideStatus):
    value = RideStatusValue.COMPLETED


_STATUS_CLASSES: dict[RideStatusValue, type[RideStatus]] = {
    RideStatusValue.REQUESTED: RequestedStatus,
    RideStatusValue.ACCEPTED: AcceptedStatus,
    RideStatusValue.IN_PROGRESS: InProgressStatus,
    RideStatusValue.COMPLETED: CompleteStatus,
}


def ride_status_for(status: str, ride: Ride) -> RideStatus:
    """Return the state object for a status name."""
    try:
        key = RideStatusValue(status)
    except ValueError:
        raise InvalidStatusError() from None
    return _STATUS_CLASSES[key](ride)


@dataclass(init=False)
class Position:
    """A point a ride passed through at a given moment."""

    position_id: str
    ride_id: str
    coord: Coord
    date: datetime

    def __init__(
        self, position_id: str, ride_id: str, lat: float, long: float, date: datetime
    ) -> None:
        self.position_id = position_id
        self.ride_id = ride_id
        self.coord = Coord(lat, long)
        self.date = date

    @classmethod
    def create(
        cls, ride_id: str, lat: float, long: float, date: datetime | None = None
    ) -> Position:
        """Record a new position; without a date the current time is used."""
        if date is None:
            date = datetime.now().astimezone()
        return cls(str(uuid.uuid4()), ride_id, lat, long, date)

    def set_coord(self, lat: float, long: float) -> None:
        self.coord = Coord(lat, long)


class Ride:
    """A trip requested by a passenger and driven by a driver."""

    def __init__(
        self,
        ride_id: str,
        passenger_id: str,
        driver_id: str,
        from_lat: float,
        from_long: float,
        to_lat: float,
        to_long: float,
        status: str,
        date: datetime,
        distance: float,
        fare: float,
    ) -> None:
        self._from = Coord(from_lat, from_long)
        self._to = Coord(to_lat, to_long)
        self._ride_id = ride_id
        self._passenger_id = passenger_id
        self._driver_id = driver_id
        self._date = date
        self._distance = distance
        self._fare = fare
        self._status: RideStatus = ride_status_for(status, self)

    @classmethod
    def create(
        cls,
        passenger_id: str,
        from_lat: float,
        from_long: float,
        to_lat: float,
        to_long: float,
    ) -> Ride:
        """Request a new ride now."""
        return cls(
            str(uuid.uuid4()),
            passenger_id,
            "",
            from_lat,
            from_long,
            to_lat,
            to_long,
            RideStatusValue.REQUESTED.value,
            datetime.now().astimezone(),
            0.0,
            0.0,
        )

    @property
    def ride_id(self) -> str:
        return self._ride_id

    @property
    def passenger_id(self) -> str:
        return self._passenger_id

    @property
    def driver_id(self) -> str:
        return self._driver_id

    @property
    def from_coord(self) -> Coord:
        return self._from

    @property
    def to_coord(self) -> Coord:
        return self._to

    @property
    def status(self) -> str:
        return self._status.value.value

    @property
    def date(self) -> datetime:
        return self._date

    @property
    def distance(self) -> float:
        return self._distance

    @property
    def fare(self) -> float:
        return self._fare

    @property
    def is_finished(self) -> bool:
        return self._status.value is RideStatusValue.COMPLETED

    def accept(self, driver_id: str) -> None:
        self._status.accept()
        self._driver_id = driver_id

    def start(self) -> None:
        self._status.start()

    def finish(self, positions: Iterable[Position]) -> None:
        """Compute distance and fare from the positions, then complete the ride."""
        calculator = DistanceCalculator()
        self._distance = 0.0
        self._fare = 0.0
        for current, following in pairwise(positions):
            distance = calculator.calculate(current.coord, following.coord)
            self._distance += distance
            self._fare += fare_calculator_for(current.date).calculate(distance)
        self._status.finish()

    def __repr__(self) -> str:
        return (
            f"Ride(ride_id={self._ride_id!r}, passenger_id={self._passenger_id!r}, "
            f"driver_id={self._driver_id!r}, status={self.status!r})"
        )


@dataclass(frozen=True)
class RideCompletedEvent:
    """Announces that a ride ended and what it cost."""

    name: ClassVar[str] = "ride.completed"

    ride_id: str
    fare: float

    def to_json(self) -> bytes:
        return json.dumps({"ride_id": self.ride_id, "fare": self.fare}).encode("utf-8")