"""Distance and fare calculations for rides."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from datetime import datetime
from itertools import pairwise
from typing import Iterable, Protocol

from rideshare.ride.values import Coord

EARTH_RADIUS_KM = 6371.0
_DEGREE_TO_RADIAN = math.pi / 180


class Located(Protocol):
    """Anything that has a position on the map."""

    @property
    def coord(self) -> Coord: ...


class DistanceCalculator:
    """Great-circle distances, rounded to whole kilometres."""

    def calculate(self, origin: Coord, destination: Coord) -> float:
        delta_lat = (destination.lat - origin.lat) * _DEGREE_TO_RADIAN
        delta_long = (destination.long - origin.long) * _DEGREE_TO_RADIAN
        a = math.sin(delta_lat / 2) ** 2 + (
            math.cos(origin.lat * _DEGREE_TO_RADIAN)
            * math.cos(destination.lat * _DEGREE_TO_RADIAN)
            * math.sin(delta_long / 2) ** 2
        )
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
        # Halves round away from zero.
        return float(math.floor(EARTH_RADIUS_KM * c + 0.5))

    def calculate_by_positions(self, positions: Iterable[Located]) -> float:
        """Sum the distances between consecutive positions."""
        return sum(
            (self.calculate(a.coord, b.coord) for a, b in pairwise(positions)), 0.0
        )


class FareCalculator(ABC):
    """Prices a distance travelled."""

    @abstractmethod
    def calculate(self, distance: float) -> float:
        """Return the fare for a distance in kilometres."""


class NormalFareCalculator(FareCalculator):
    def calculate(self, distance: float) -> float:
        return distance * 2.1


class OvernightFareCalculator(FareCalculator):
    def calculate(self, distance: float) -> float:
        return distance * 3.9


class SpecialDayFareCalculator(FareCalculator):
    def calculate(self, distance: float) -> float:
        return distance * 1


def fare_calculator_for(date: datetime) -> FareCalculator:
    """Pick the tariff in force at a moment."""
    if date.day == 1:
        return SpecialDayFareCalculator()
    if date.hour >= 22 or date.hour < 6:
        return OvernightFareCalculator()
    return NormalFareCalculator()