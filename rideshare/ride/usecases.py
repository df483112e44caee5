"""Ride use cases: requesting, accepting, starting, tracking and finishing rides."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from rideshare.messaging import Queue
from rideshare.ride.account_gateway import AccountGateway
from rideshare.ride.entity import Position, Ride, RideCompletedEvent
from rideshare.ride.repository import PositionRepository, RideRepository
from rideshare.ride.services import DistanceCalculator

RIDE_COMPLETED_EXCHANGE = "rideCompleted"


class RideError(Exception):
    """A ride operation was refused."""


def _load_ride(ride_repository: RideRepository, ride_id: str) -> Ride:
    try:
        return ride_repository.get_ride_by_id(ride_id)
    except Exception as err:
        raise RideError(f"ride not found: {err}") from err


@dataclass(frozen=True)
class AcceptRideInput:
    driver_id: str
    ride_id: str


class AcceptRide:
    """A driver takes a requested ride."""

    def __init__(self, account_gateway: AccountGateway, ride_repository: RideRepository) -> None:
        self._account_gateway = account_gateway
        self._ride_repository = ride_repository

    def execute(self, input_data: AcceptRideInput) -> None:
        try:
            account = self._account_gateway.get_account(input_data.driver_id)
        except Exception as err:
            raise RideError(f"account not found for id: {input_data.driver_id}") from err
        if not account.is_driver:
            raise RideError("account must be a driver")
        ride = _load_ride(self._ride_repository, input_data.ride_id)
        ride.accept(input_data.driver_id)
        self._ride_repository.update_ride(ride)


@dataclass(frozen=True)
class FinishRideInput:
    ride_id: str


class FinishRide:
    """Complete a ride, price it and announce it on the queue."""

    def __init__(
        self,
        ride_repository: RideRepository,
        position_repository: PositionRepository,
        queue: Queue,
    ) -> None:
        self._ride_repository = ride_repository
        self._position_repository = position_repository
        self._queue = queue

    def execute(self, input_data: FinishRideInput) -> None:
        ride = _load_ride(self._ride_repository, input_data.ride_id)
        if ride.is_finished:
            raise RideError("ride is already finished")
        try:
            positions = self._position_repository.get_positions_by_ride_id(input_data.ride_id)
        except Exception as err:
            raise RideError(f"positions not found: {err}") from err
        ride.finish(positions)
        self._ride_repository.update_ride(ride)
        event = RideCompletedEvent(ride_id=ride.ride_id, fare=ride.fare)
        self._queue.publish(RIDE_COMPLETED_EXCHANGE, event.to_json())


@dataclass(frozen=True)
class GetRideOutput:
    ride_id: str
    passenger_id: str
    driver_id: str
    from_lat: float
    from_long: float
    to_lat: float
    to_long: float
    status: str
    positions: list[Position]
    distance: float
    fare: float
    date: datetime


class GetRide:
    """Describe a ride and how far it has gone."""

    def __init__(
        self, ride_repository: RideRepository, position_repository: PositionRepository
    ) -> None:
        self._ride_repository = ride_repository
        self._position_repository = position_repository

    def execute(self, ride_id: str) -> GetRideOutput:
        ride = self._ride_repository.get_ride_by_id(ride_id)
        positions = self._position_repository.get_positions_by_ride_id(ride_id)
        if ride.is_finished:
            distance = ride.distance
        else:
            distance = DistanceCalculator().calculate_by_positions(positions)
        return GetRideOutput(
            ride_id=ride.ride_id,
            passenger_id=ride.passenger_id,
            driver_id=ride.driver_id,
            from_lat=ride.from_coord.lat,
            from_long=ride.from_coord.long,
            to_lat=ride.to_coord.lat,
            to_long=ride.to_coord.long,
            status=ride.status,
            positions=list(positions),
            distance=distance,
            fare=ride.fare,
            date=ride.date,
        )


@dataclass(frozen=True)
class RequestRideInput:
    passenger_id: str
    from_lat: float
    from_long: float
    to_lat: float
    to_long: float


@dataclass(frozen=True)
class RequestRideOutput:
    ride_id: str


class RequestRide:
    """A passenger asks for a ride."""

    def __init__(self, account_gateway: AccountGateway, ride_repository: RideRepository) -> None:
        self._account_gateway = account_gateway
        self._ride_repository = ride_repository

    def execute(self, input_data: RequestRideInput) -> RequestRideOutput:
        try:
            account = self._account_gateway.get_account(input_data.passenger_id)
        except Exception as err:
            raise RideError(f"account {input_data.passenger_id} does not exist") from err
        if not account.is_passenger:
            raise RideError("account must be from a passenger")
        if self._ride_repository.has_active_ride_by_passenger_id(account.id):
            raise RideError("you already have an active ride")
        ride = Ride.create(
            input_data.passenger_id,
            input_data.from_lat,
            input_data.from_long,
            input_data.to_lat,
            input_data.to_long,
        )
        self._ride_repository.save_ride(ride)
        return RequestRideOutput(ride_id=ride.ride_id)


@dataclass(frozen=True)
class StartRideInput:
    ride_id: str


class StartRide:
    """The driver sets off on an accepted ride."""

    def __init__(self, ride_repository: RideRepository) -> None:
        self._ride_repository = ride_repository

    def execute(self, input_data: StartRideInput) -> None:
        ride = _load_ride(self._ride_repository, input_data.ride_id)
        ride.start()
        self._ride_repository.update_ride(ride)


@dataclass(frozen=True)
class UpdatePositionInput:
    ride_id: str
    lat: float
    long: float
    date: datetime | None = None


class UpdatePosition:
    """Record where a ride currently is."""

    def __init__(
        self, ride_repository: RideRepository, position_repository: PositionRepository
    ) -> None:
        self._ride_repository = ride_repository
        self._position_repository = position_repository

    def execute(self, input_data: UpdatePositionInput) -> None:
        _load_ride(self._ride_repository, input_data.ride_id)
        position = Position.create(
            input_data.ride_id, input_data.lat, input_data.long, input_data.date
        )
        self._position_repository.save_position(position)