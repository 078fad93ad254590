"""
Point value type shared by the synthesizer and the coincidence resolver.

A Point is an immutable record of one geolocated meter/sensor. Coordinates
are always stored longitude first, and every transformation in this package
returns new Point values instead of touching the input.
"""

import math
import numbers
import operator
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class InvalidArgument(ValueError):
    """Raised when a caller passes a value the core cannot work with."""


class Status(str, Enum):
    """Categorical health tag shown on the map marker."""
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


STATUS_VALUES = (Status.GREEN, Status.RED, Status.YELLOW)

Coordinates = Tuple[float, float]  # (longitude, latitude)


def require_finite(value, name: str) -> float:
    """Return ``value`` as float, raising InvalidArgument for NaN/inf/non-numbers."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidArgument(f"{name} must be a number, got {value!r}")
    number = float(value)
    if not math.isfinite(number):
        raise InvalidArgument(f"{name} must be finite, got {value!r}")
    return number


def require_count(value, name: str = "n", maximum: Optional[int] = None) -> int:
    """Validate a non-negative integer count (numpy integers accepted, floats and bools rejected)."""
    if isinstance(value, bool):
        raise InvalidArgument(f"{name} must be an integer, got bool")
    try:
        value = operator.index(value)
    except TypeError:
        raise InvalidArgument(f"{name} must be an integer, got {value!r}") from None
    if value < 0:
        raise InvalidArgument(f"{name} must be >= 0, got {value}")
    if maximum is not None and value > maximum:
        raise InvalidArgument(f"{name} must be <= {maximum}, got {value}")
    return value


def make_coordinates(longitude, latitude) -> Coordinates:
    """Build a validated (longitude, latitude) pair."""
    return (require_finite(longitude, "longitude"), require_finite(latitude, "latitude"))


@dataclass(frozen=True)
class Point:
    """One geolocated entity on the map.

    ``brand``, ``model``, ``installation_date`` and ``extra`` are opaque
    payload: the core copies them through unchanged.
    """
    serial_number: int
    station: str
    coordinates: Coordinates  # (lon, lat)
    status: Status = Status.GREEN
    brand: Optional[str] = None
    model: Optional[str] = None
    installation_date: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        if isinstance(self.serial_number, bool) or not isinstance(self.serial_number, int):
            raise InvalidArgument(f"serial_number must be an integer, got {self.serial_number!r}")
        if self.serial_number < 1:
            raise InvalidArgument(f"serial_number must be positive, got {self.serial_number}")

        if isinstance(self.coordinates, (str, bytes)):
            raise InvalidArgument(f"coordinates must be a pair of numbers, got {self.coordinates!r}")
        try:
            coords = tuple(self.coordinates)
        except TypeError:
            raise InvalidArgument(f"coordinates must be a pair of numbers, got {self.coordinates!r}") from None
        if len(coords) != 2:
            raise InvalidArgument(f"coordinates must have exactly two values, got {len(coords)}")
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "coordinates", make_coordinates(*coords))

        try:
            object.__setattr__(self, "status", Status(self.status))
        except ValueError:
            raise InvalidArgument(f"status must be one of green/yellow/red, got {self.status!r}") from None

    @property
    def longitude(self) -> float:
        return self.coordinates[0]

    @property
    def latitude(self) -> float:
        return self.coordinates[1]

    def with_coordinates(self, longitude: float, latitude: float) -> "Point":
        """Return a copy of this point moved to new coordinates."""
        return replace(self, coordinates=(longitude, latitude), extra=dict(self.extra))
