"""
Synthetic point generation for stress-testing coincidence resolution.

Points are scattered uniformly over a rectangular lon/lat box (the Murcia
region by default). The ``with_duplicates`` variant appends two points that
share one coordinate pair so duplicate detection always has work to do.
"""

from dataclasses import dataclass
from typing import List, Optional

import structlog

from ..config import settings
from ..utils.random import RandomSource, get_rng
from .point import STATUS_VALUES, InvalidArgument, Point, Status, require_count, require_finite

logger = structlog.get_logger()


@dataclass(frozen=True)
class BoundingBox:
    """Rectangular lon/lat region, edges inclusive."""
    lon_min: float = -1.6
    lon_max: float = -0.8
    lat_min: float = 37.5
    lat_max: float = 38.2

    def __post_init__(self):
        for name in ("lon_min", "lon_max", "lat_min", "lat_max"):
            require_finite(getattr(self, name), name)
        if self.lon_min > self.lon_max:
            raise InvalidArgument(f"lon_min {self.lon_min} is greater than lon_max {self.lon_max}")
        if self.lat_min > self.lat_max:
            raise InvalidArgument(f"lat_min {self.lat_min} is greater than lat_max {self.lat_max}")

    def contains(self, longitude: float, latitude: float) -> bool:
        return (self.lon_min <= longitude <= self.lon_max
                and self.lat_min <= latitude <= self.lat_max)


MURCIA_BOUNDS = BoundingBox()


@dataclass
class SynthesizerOptions:
    """Point synthesis options."""
    bounds: BoundingBox = MURCIA_BOUNDS
    precision: int = 6  # decimal digits kept on each coordinate
    max_points: Optional[int] = None  # None disables the upper limit

    @classmethod
    def from_settings(cls) -> "SynthesizerOptions":
        return cls(
            bounds=BoundingBox(
                lon_min=settings.lon_min,
                lon_max=settings.lon_max,
                lat_min=settings.lat_min,
                lat_max=settings.lat_max,
            ),
            precision=settings.coordinate_precision,
            max_points=settings.max_points,
        )


class PointSynthesizer:
    """
    Generates randomized test datasets of labelled points.

    Only the shape of the output is deterministic (count, serials, labels);
    coordinate and status values come from the random source, which is the
    unseeded module generator unless one is injected.
    """

    def __init__(self, options: Optional[SynthesizerOptions] = None,
                 rng: Optional[RandomSource] = None):
        self.options = options or SynthesizerOptions()
        self.rng = rng if rng is not None else get_rng()

    def _random_in_range(self, low: float, high: float) -> float:
        return self.rng.random() * (high - low) + low

    def random_coordinates(self):
        """Draw one (lon, lat) pair inside the bounding box, latitude drawn first."""
        bounds = self.options.bounds
        lat = self._random_in_range(bounds.lat_min, bounds.lat_max)
        lon = self._random_in_range(bounds.lon_min, bounds.lon_max)
        precision = self.options.precision
        return (round(lon, precision), round(lat, precision))

    def random_status(self) -> Status:
        index = int(self.rng.random() * len(STATUS_VALUES))
        return STATUS_VALUES[index]

    def _make_point(self, serial_number: int, coordinates=None) -> Point:
        if coordinates is None:
            coordinates = self.random_coordinates()
        return Point(
            serial_number=serial_number,
            station=f"Station-{serial_number}",
            coordinates=coordinates,
            status=self.random_status(),
        )

    def generate(self, n: int) -> List[Point]:
        """
        Generate ``n`` random points with serial numbers 1..n.

        Args:
            n: Number of points, must be a non-negative integer

        Returns:
            List of n points in serial order

        Raises:
            InvalidArgument: If n is negative, not an integer or above max_points
        """
        n = require_count(n, "n", self.options.max_points)
        points = [self._make_point(i + 1) for i in range(n)]
        logger.info("Synthesized points", count=len(points))
        return points

    def generate_with_duplicates(self, n: int) -> List[Point]:
        """
        Generate ``n`` random points followed by two points sharing coordinates.

        The forced pair takes serials n+1 and n+2, so ``n == 0`` returns just
        the pair. ``max_points`` bounds the total, pair included.
        """
        n = require_count(n, "n")
        limit = self.options.max_points
        if limit is not None and n + 2 > limit:
            raise InvalidArgument(f"n + 2 must be <= {limit}, got {n + 2}")
        points = self.generate(n)
        shared = self.random_coordinates()
        points.append(self._make_point(n + 1, shared))
        points.append(self._make_point(n + 2, shared))
        logger.info("Appended forced duplicate pair",
                    serials=(n + 1, n + 2), coordinates=shared)
        return points


def synthesize(n: int, rng: Optional[RandomSource] = None) -> List[Point]:
    """Generate ``n`` random points using settings-driven options."""
    return PointSynthesizer(SynthesizerOptions.from_settings(), rng).generate(n)


def synthesize_with_duplicates(n: int, rng: Optional[RandomSource] = None) -> List[Point]:
    """Generate ``n`` random points plus one guaranteed duplicate pair."""
    return PointSynthesizer(SynthesizerOptions.from_settings(), rng).generate_with_duplicates(n)
