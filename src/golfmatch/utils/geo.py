"""
Coordinate helpers shared by map search and map view.
"""

from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from golfmatch.exceptions import ValidationError

GOOGLE_SEARCH_URL = 'https://www.google.com/search?q='

def validate_coordinates(lat: Any, lng: Any) -> tuple[float, float]:
    """Convert and range-check a latitude/longitude pair.

    Raises:
        ValidationError: If either value is not a number or out of range
    """
    try:
        lat_f = float(lat)
        lng_f = float(lng)
    except (TypeError, ValueError) as e:
        raise ValidationError(
            "Coordinates must be numbers",
            {"lat": lat, "lng": lng}
        ) from e

    if not -90 <= lat_f <= 90:
        raise ValidationError("Latitude must be between -90 and 90", {"lat": lat_f})
    if not -180 <= lng_f <= 180:
        raise ValidationError("Longitude must be between -180 and 180", {"lng": lng_f})
    return lat_f, lng_f

@dataclass(frozen=True)
class BoundingBox:
    """Rectangular map area in degrees."""
    south: float
    west: float
    north: float
    east: float

    def __post_init__(self) -> None:
        validate_coordinates(self.south, self.west)
        validate_coordinates(self.north, self.east)
        if self.south > self.north:
            raise ValidationError(
                "South must not be greater than north",
                {"south": self.south, "north": self.north}
            )
        if self.west > self.east:
            raise ValidationError(
                "West must not be greater than east",
                {"west": self.west, "east": self.east}
            )

    @classmethod
    def from_mapping(cls, values: dict[str, Any]) -> 'BoundingBox':
        """Build a bounding box from request parameters.

        Raises:
            ValidationError: If a side is missing or not a number
        """
        missing = [side for side in ('south', 'west', 'north', 'east') if values.get(side) in (None, '')]
        if missing:
            raise ValidationError("Missing bounding box parameters", {"missing": missing})
        try:
            return cls(
                south=float(values['south']),
                west=float(values['west']),
                north=float(values['north']),
                east=float(values['east'])
            )
        except (TypeError, ValueError) as e:
            raise ValidationError("Bounding box values must be numbers", {"values": dict(values)}) from e

    def to_overpass(self) -> str:
        """Format as the ``(south,west,north,east)`` filter Overpass expects."""
        return f"{self.south},{self.west},{self.north},{self.east}"

def google_search_link(name: str) -> str:
    """Web search link used when a course has no booking page."""
    return GOOGLE_SEARCH_URL + quote(f"{name} golf booking", safe="-_.!~*'()")

def within_tolerance(a: float | None, b: float | None, tolerance: float = 0.001) -> bool:
    """Compare two coordinates, missing values count as 0."""
    return abs((a or 0.0) - (b or 0.0)) < tolerance
