"""
Static point fixtures.

The dashboard ships its meters as a JSON array of camelCase records::

    {"serialNumber": "1001", "station": "Station-1", "gps": [-1.13, 37.98],
     "status": "green", "brand": "...", "model": "...", "installationDate": "..."}

These helpers validate that shape with pydantic and convert it to and from
:class:`~py_spiderfy.core.point.Point`.
"""

import json
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .core.point import InvalidArgument, Point, Status

logger = structlog.get_logger()


class PointRecord(BaseModel):
    """One fixture entry as stored on disk."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    serial_number: int = Field(..., alias="serialNumber", gt=0)
    station: str
    gps: Tuple[float, float] = Field(..., description="[lng, lat]")
    status: Status
    brand: Optional[str] = None
    model: Optional[str] = None
    installation_date: Optional[str] = Field(None, alias="installationDate")

    def to_point(self) -> Point:
        return Point(
            serial_number=self.serial_number,
            station=self.station,
            coordinates=self.gps,
            status=self.status,
            brand=self.brand,
            model=self.model,
            installation_date=self.installation_date,
            extra=dict(self.model_extra or {}),
        )

    @classmethod
    def from_point(cls, point: Point) -> "PointRecord":
        reserved = set(cls.model_fields)
        reserved.update(f.alias for f in cls.model_fields.values() if f.alias)
        clashes = sorted(reserved.intersection(point.extra))
        if clashes:
            raise InvalidArgument(
                f"Point {point.serial_number} payload keys clash with record fields: {clashes}"
            )
        return cls(
            serial_number=point.serial_number,
            station=point.station,
            gps=point.coordinates,
            status=point.status,
            brand=point.brand,
            model=point.model,
            installation_date=point.installation_date,
            **point.extra,
        )


def points_from_records(records: Iterable[dict]) -> List[Point]:
    """Validate raw fixture dicts and build points."""
    try:
        return [PointRecord.model_validate(record).to_point() for record in records]
    except ValidationError as e:
        raise InvalidArgument(f"Invalid point record: {e}") from e


def points_to_records(points: Iterable[Point]) -> List[dict]:
    """Serialize points back to the camelCase fixture shape."""
    try:
        return [
            PointRecord.from_point(point).model_dump(mode="json", by_alias=True, exclude_none=True)
            for point in points
        ]
    except ValidationError as e:
        raise InvalidArgument(f"Point cannot be serialized: {e}") from e


def load_points(path: Union[str, Path]) -> List[Point]:
    """Load a JSON fixture file of point records."""
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise InvalidArgument(f"{path} is not valid JSON: {e}") from e
    if not isinstance(raw, list):
        raise InvalidArgument(f"{path} must contain a JSON array of point records")

    try:
        points = points_from_records(raw)
    except InvalidArgument as e:
        raise InvalidArgument(f"{path}: {e}") from e

    logger.info("Loaded point fixture", path=str(path), count=len(points))
    return points


def dump_points(points: Iterable[Point], path: Union[str, Path]) -> None:
    """Write points to ``path`` in the fixture format."""
    path = Path(path)
    records = points_to_records(points)
    path.write_text(json.dumps(records, indent=2), encoding="utf-8")
    logger.info("Wrote point fixture", path=str(path), count=len(records))
