import pytest

from rideshare.ride.values import CarPlate, Coord


@pytest.mark.parametrize("lat,long", [(-90, -180), (90, 180), (-89, -179), (89, 179)])
def test_create_coord(lat, long):
    coord = Coord(lat, long)
    assert coord.lat == lat
    assert coord.long == long


@pytest.mark.parametrize("lat", [-91, 91])
def test_create_coord_with_invalid_lat(lat):
    with pytest.raises(ValueError, match="invalid latitude"):
        Coord(lat, 180.0)


@pytest.mark.parametrize("long", [-181, 181])
def test_create_coord_with_invalid_long(long):
    with pytest.raises(ValueError, match="invalid longitude"):
        Coord(90.0, long)


@pytest.mark.parametrize("value", ["ABC9090", "AAA1111"])
def test_create_valid_car_plate(value):
    assert CarPlate(value).value == value


@pytest.mark.parametrize("value", ["ABC909", "AA1111", "A1A1111", "AAA11B1"])
def test_create_invalid_car_plate(value):
    with pytest.raises(ValueError, match="invalid car plate"):
        CarPlate(value)