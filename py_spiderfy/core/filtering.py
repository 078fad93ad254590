"""Status filtering, station search and GeoJSON export for map layers."""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

import structlog

from ..config import settings
from .point import Point, Status, require_count

logger = structlog.get_logger()


@dataclass(frozen=True)
class StatusFilter:
    """Which status categories are currently shown."""
    green: bool = True
    yellow: bool = True
    red: bool = True

    def allows(self, status: Status) -> bool:
        return getattr(self, Status(status).value)


def filter_by_status(points: Iterable[Point], status_filter: StatusFilter) -> List[Point]:
    """Keep the points whose status is enabled in ``status_filter``."""
    return [point for point in points if status_filter.allows(point.status)]


def search_stations(points: Iterable[Point], term: str,
                    limit: Optional[int] = None) -> List[Point]:
    """
    Case-insensitive substring search on station labels.

    Args:
        points: Points to search
        term: Search text; blank text matches nothing
        limit: Max results, defaults to ``settings.search_limit``

    Returns:
        First ``limit`` matches in input order
    """
    limit = require_count(settings.search_limit if limit is None else limit, "limit")
    needle = (term or "").strip().lower()
    if not needle:
        return []

    matches = []
    for point in points:
        if len(matches) >= limit:
            break
        if needle in point.station.lower():
            matches.append(point)

    logger.debug("Station search", term=needle, matches=len(matches))
    return matches


def stable_label(serial_number: int) -> int:
    """Per-point number in 1..90 that stays fixed across re-renders."""
    return serial_number % 90 + 1


def to_feature(point: Point) -> Dict[str, Any]:
    """Convert a point to a GeoJSON Feature with Point geometry."""
    properties: Dict[str, Any] = {
        "serialNumber": point.serial_number,
        "station": point.station,
        "status": point.status.value,
        "randomNumber": stable_label(point.serial_number),
    }
    for name, value in (("brand", point.brand), ("model", point.model),
                        ("installationDate", point.installation_date)):
        if value is not None:
            properties[name] = value
    for name, value in point.extra.items():
        properties.setdefault(name, value)

    return {
        "type": "Feature",
        "geometry": {
            "type": "Point",
            "coordinates": [point.longitude, point.latitude],
        },
        "properties": properties,
    }


def to_feature_collection(points: Iterable[Point],
                          status_filter: Optional[StatusFilter] = None) -> Dict[str, Any]:
    """Build a GeoJSON FeatureCollection, optionally applying a status filter first."""
    if status_filter is not None:
        points = filter_by_status(points, status_filter)
    return {
        "type": "FeatureCollection",
        "features": [to_feature(point) for point in points],
    }
