"""
Coincident point detection and radial de-overlap ("spiderfy").

Markers that share a coordinate pair render on the same pixel. This module
finds those points and fans them out around their shared centroid on a
slowly widening ring so each one can be clicked.

All layout math is planar: longitude/latitude are treated as x/y, which is
only reasonable for small, local clusters.
"""

import math
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable, Dict, Hashable, Iterable, List, Optional, Sequence, Tuple

import numpy as np
import structlog

from ..config import settings
from .point import InvalidArgument, Point, require_finite

logger = structlog.get_logger()

CoordinateKey = Callable[[Point], Hashable]

DEFAULT_RADIUS = 30.0
DEFAULT_JITTER = 0.00001


def exact_key(point: Point) -> Tuple[float, float]:
    """Group by bit-for-bit coordinate equality (no tolerance)."""
    return point.coordinates


def grid_key(tolerance: float) -> CoordinateKey:
    """
    Build a key that snaps coordinates onto a square grid of ``tolerance`` degrees.

    Points in the same grid cell count as coincident. Two points closer than
    ``tolerance`` but on opposite sides of a cell edge still land in
    different groups.
    """
    tolerance = require_finite(tolerance, "tolerance")
    if tolerance <= 0:
        raise InvalidArgument(f"tolerance must be positive, got {tolerance}")

    def key(point: Point) -> Tuple[int, int]:
        lon, lat = point.coordinates
        cell_x, cell_y = lon / tolerance, lat / tolerance
        if not (math.isfinite(cell_x) and math.isfinite(cell_y)):
            raise InvalidArgument(f"tolerance {tolerance} is too small for coordinates {point.coordinates}")
        return (math.floor(cell_x), math.floor(cell_y))

    return key


def _group_indices(points: Sequence[Point], key: CoordinateKey) -> Dict[Hashable, List[int]]:
    groups: Dict[Hashable, List[int]] = defaultdict(list)
    for i, point in enumerate(points):
        groups[key(point)].append(i)
    return groups


def group_coincident(points: Iterable[Point], key: CoordinateKey = exact_key) -> List[List[Point]]:
    """Group points by coordinate key, groups and members in first-seen order."""
    points = list(points)
    return [[points[i] for i in indices] for indices in _group_indices(points, key).values()]


def detect_duplicates(points: Iterable[Point], key: CoordinateKey = exact_key) -> List[Point]:
    """
    Return every point whose coordinate key occurs more than once.

    Runs in O(n) with a hash map; the result keeps the input's relative order
    and the points themselves are returned untouched.

    Args:
        points: Points to scan (may be empty)
        key: Grouping key, exact coordinate equality by default

    Returns:
        Sub-sequence of points that share coordinates with another point
    """
    points = list(points)
    counts: Dict[Hashable, int] = defaultdict(int)
    for point in points:
        counts[key(point)] += 1

    duplicates = [point for point in points if counts[key(point)] > 1]
    logger.debug("Duplicate detection complete",
                 points=len(points), duplicates=len(duplicates))
    return duplicates


def centroid(points: Sequence[Point]) -> Tuple[float, float]:
    """Planar centroid: (mean longitude, mean latitude)."""
    if len(points) == 0:
        raise InvalidArgument("centroid of an empty point collection is undefined")
    coords = np.array([p.coordinates for p in points], dtype=float)
    center_x, center_y = coords.mean(axis=0)
    return float(center_x), float(center_y)


def spiderfy(points: Iterable[Point], radius: float = DEFAULT_RADIUS) -> List[Point]:
    """
    Spread points around their centroid on an outward spiral.

    Point i of m sits at angle ``i * 2π / m`` and distance
    ``radius + i * radius / m`` from the centroid, so later points land on a
    slightly wider ring. Placement is positional: reordering the input
    changes the layout. A radius of 0 collapses everything onto the centroid.

    Args:
        points: Points to spread, typically one coincident group
        radius: Base ring radius in the caller's rendering units

    Returns:
        New points in input order with only ``coordinates`` changed

    Raises:
        InvalidArgument: If radius is not finite, or the layout overflows
    """
    radius = require_finite(radius, "radius")
    points = list(points)
    m = len(points)
    if m == 0:
        return []

    center_x, center_y = centroid(points)

    index = np.arange(m, dtype=float)
    angles = index * (2 * np.pi / m)
    radii = radius + index * (radius / m)
    xs = center_x + radii * np.cos(angles)
    ys = center_y + radii * np.sin(angles)

    spread = [point.with_coordinates(float(x), float(y))
              for point, x, y in zip(points, xs, ys)]
    logger.debug("Spiderfy complete", points=m, radius=radius,
                 centroid=(center_x, center_y))
    return spread


def jitter(points: Iterable[Point], factor: float = DEFAULT_JITTER) -> List[Point]:
    """
    Scale every coordinate component by ``factor``.

    A lighter alternative to spiderfy for breaking exact ties.
    """
    factor = require_finite(factor, "factor")
    # NOTE: multiplicative, not an offset. Points near lon/lat 0 barely move.
    jittered = [point.with_coordinates(point.longitude * factor, point.latitude * factor)
                for point in points]
    logger.debug("Jitter applied", points=len(jittered), factor=factor)
    return jittered


def resolve_coincident(points: Iterable[Point], radius: float = DEFAULT_RADIUS,
                       key: CoordinateKey = exact_key) -> List[Point]:
    """
    Spiderfy every coincident group independently and return the whole collection.

    Unique points are returned as-is; each group of two or more is spread
    around its own centroid. Output order matches input order.
    """
    radius = require_finite(radius, "radius")
    points = list(points)
    resolved = list(points)

    groups_spread = 0
    for indices in _group_indices(points, key).values():
        if len(indices) < 2:
            continue
        spread = spiderfy([points[i] for i in indices], radius)
        for i, point in zip(indices, spread):
            resolved[i] = point
        groups_spread += 1

    logger.info("Coincident points resolved", points=len(points),
                groups=groups_spread, radius=radius)
    return resolved


@dataclass
class ResolverOptions:
    """Coincidence resolver options."""
    radius: float = DEFAULT_RADIUS
    jitter_factor: float = DEFAULT_JITTER
    key: CoordinateKey = field(default=exact_key)

    @classmethod
    def from_settings(cls, key: Optional[CoordinateKey] = None) -> "ResolverOptions":
        return cls(
            radius=settings.spiderfy_radius,
            jitter_factor=settings.jitter_factor,
            key=key or exact_key,
        )


class CoincidenceResolver:
    """Bundles the detection and layout functions behind one set of options."""

    def __init__(self, options: Optional[ResolverOptions] = None):
        self.options = options or ResolverOptions()

    def detect_duplicates(self, points: Iterable[Point]) -> List[Point]:
        return detect_duplicates(points, self.options.key)

    def group(self, points: Iterable[Point]) -> List[List[Point]]:
        return group_coincident(points, self.options.key)

    def spiderfy(self, points: Iterable[Point], radius: Optional[float] = None) -> List[Point]:
        return spiderfy(points, self.options.radius if radius is None else radius)

    def jitter(self, points: Iterable[Point], factor: Optional[float] = None) -> List[Point]:
        return jitter(points, self.options.jitter_factor if factor is None else factor)

    def resolve(self, points: Iterable[Point], radius: Optional[float] = None) -> List[Point]:
        return resolve_coincident(points,
                                  self.options.radius if radius is None else radius,
                                  self.options.key)
