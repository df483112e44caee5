"""Validated value objects used by rides."""

from __future__ import annotations

import re
from dataclasses import dataclass

_CAR_PLATE = re.compile(r"[A-Z]{3}[0-9]{4}")


@dataclass(frozen=True)
class Coord:
    """A geographic point in degrees."""

    lat: float
    long: float

    def __post_init__(self) -> None:
        if self.lat < -90 or self.lat > 90:
            raise ValueError("invalid latitude")
        if self.long < -180 or self.long > 180:
            raise ValueError("invalid longitude")


@dataclass(frozen=True)
class CarPlate:
    """A vehicle plate holding three capital letters followed by four digits."""

    value: str

    def __post_init__(self) -> None:
        if not _CAR_PLATE.search(self.value):
            raise ValueError("invalid car plate")