from datetime import datetime, timezone

import pytest

from rideshare.database import DatabaseConnection
from rideshare.ride.entity import InvalidStatusError, Position, Ride
from rideshare.ride.repository import (
    PositionRepositoryDatabase,
    RideRepositoryDatabase,
    position_from_row,
    ride_from_row,
)


class FakeConnection(DatabaseConnection):
    def __init__(self, one=None, many=None):
        self.one = one
        self.many = many or []
        self.executed = []
        self.queries = []

    def query_one(self, query, *args):
        self.queries.append((query, args))
        return self.one

    def query_all(self, query, *args):
        self.queries.append((query, args))
        return self.many

    def execute(self, query, *args):
        self.executed.append((query, args))

    def close(self):
        pass


DATE = datetime(2024, 3, 5, 12, 30, tzinfo=timezone.utc)


def _ride_row(**overrides):
    row = {
        "ride_id": "ride-1",
        "passenger_id": "passenger-1",
        "driver_id": None,
        "status": "requested",
        "fare": 0.0,
        "distance": 0.0,
        "from_lat": -23.5,
        "from_long": -46.6,
        "to_lat": -23.6,
        "to_long": -46.7,
        "date": DATE,
    }
    row.update(overrides)
    return row


def test_ride_from_row_without_driver():
    ride = ride_from_row(_ride_row())
    assert ride.ride_id == "ride-1"
    assert ride.passenger_id == "passenger-1"
    assert ride.driver_id == ""
    assert ride.status == "requested"
    assert ride.from_coord.lat == -23.5
    assert ride.to_coord.long == -46.7
    assert ride.date == DATE


def test_ride_from_row_rejects_unknown_status():
    with pytest.raises(InvalidStatusError):
        ride_from_row(_ride_row(status="cancelled"))


def test_get_ride_by_id_queries_by_id():
    conn = FakeConnection(one=_ride_row(driver_id="driver-1", status="accepted"))
    ride = RideRepositoryDatabase(conn).get_ride_by_id("ride-1")
    assert ride.driver_id == "driver-1"
    assert ride.status == "accepted"
    assert conn.queries == [("select * from gct.ride where ride_id = $1", ("ride-1",))]


def test_get_ride_by_id_missing():
    with pytest.raises(LookupError, match="no rows in result set"):
        RideRepositoryDatabase(FakeConnection()).get_ride_by_id("missing")


def test_save_ride_round_trips_through_row():
    ride = Ride.create("passenger-1", -23.5, -46.6, -23.6, -46.7)
    conn = FakeConnection()
    RideRepositoryDatabase(conn).save_ride(ride)
    (query, args), = conn.executed
    assert query.startswith("insert into gct.ride")
    columns = ("ride_id", "passenger_id", "from_lat", "from_long", "to_lat",
               "to_long", "status", "date", "distance", "fare")
    row = dict(zip(columns, args))
    rebuilt = ride_from_row(row)
    assert rebuilt.ride_id == ride.ride_id
    assert rebuilt.passenger_id == ride.passenger_id
    assert rebuilt.from_coord == ride.from_coord
    assert rebuilt.to_coord == ride.to_coord
    assert rebuilt.status == ride.status
    assert rebuilt.date == ride.date


def test_update_ride_arguments():
    ride = ride_from_row(_ride_row())
    ride.accept("driver-1")
    conn = FakeConnection()
    RideRepositoryDatabase(conn).update_ride(ride)
    (query, args), = conn.executed
    assert query.startswith("update gct.ride set status = $1")
    assert args == ("accepted", "driver-1", ride.distance, ride.fare, "ride-1")


@pytest.mark.parametrize("count, expected", [(0, False), (1, True), (3, True)])
def test_has_active_ride(count, expected):
    conn = FakeConnection(one={"count": count})
    repo = RideRepositoryDatabase(conn)
    assert repo.has_active_ride_by_passenger_id("passenger-1") is expected
    assert conn.queries[0][1] == ("passenger-1",)


def test_save_position_round_trips_through_row():
    position = Position.create("ride-1", -23.5489, -46.6388, DATE)
    conn = FakeConnection()
    PositionRepositoryDatabase(conn).save_position(position)
    (query, args), = conn.executed
    assert query.startswith("insert into gct.position")
    row = dict(zip(("position_id", "ride_id", "lat", "long", "date"), args))
    assert position_from_row(row) == position


def test_get_positions_by_ride_id_keeps_order():
    rows = [
        {"position_id": "p1", "ride_id": "ride-1", "lat": 0.0, "long": 0.0, "date": DATE},
        {"position_id": "p2", "ride_id": "ride-1", "lat": 0.0, "long": 1.0, "date": DATE},
    ]
    conn = FakeConnection(many=rows)
    positions = PositionRepositoryDatabase(conn).get_positions_by_ride_id("ride-1")
    assert [p.position_id for p in positions] == ["p1", "p2"]
    assert positions[1].coord.long == 1.0
    assert conn.queries[0][1] == ("ride-1",)


def test_get_positions_with_invalid_coordinate_fails():
    rows = [{"position_id": "p1", "ride_id": "ride-1", "lat": 95.0, "long": 0.0, "date": DATE}]
    with pytest.raises(ValueError, match="invalid latitude"):
        PositionRepositoryDatabase(FakeConnection(many=rows)).get_positions_by_ride_id("ride-1")


def test_get_positions_empty():
    assert PositionRepositoryDatabase(FakeConnection()).get_positions_by_ride_id("ride-1") == []