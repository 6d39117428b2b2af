"""
Course model for the golf booking application.
"""

from dataclasses import asdict, dataclass, field
from typing import Any

EXTERNAL_ID_PREFIX = 'osm-'

def _optional_float(value: Any) -> float | None:
    if value is None or value == '':
        return None
    return float(value)

@dataclass
class Course:
    """Golf course as stored in the ``courses`` table."""
    id: str
    name: str
    location: str = ''
    holes: int = 18
    par: int = 72
    rating: float = 0.0
    description: str | None = None
    amenities: list[str] = field(default_factory=list)
    image_url: str | None = None
    slope: int | None = None
    price: float | None = None
    lat: float | None = None
    lng: float | None = None
    booking_url: str | None = None
    address: str | None = None

    @property
    def is_external(self) -> bool:
        """Courses found through the map-data service have no detail page."""
        return self.id.startswith(EXTERNAL_ID_PREFIX)

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lng is not None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'Course':
        """
        Create Course from a backend row or curated dataset entry.

        Unknown keys are ignored; missing numeric fields take defaults.

        Raises:
            ValueError: If id or name is missing
        """
        if not data.get('id') or not data.get('name'):
            raise ValueError(f"Course record needs id and name: {data!r}")

        slope = data.get('slope')
        return cls(
            id=str(data['id']),
            name=str(data['name']),
            location=str(data.get('location') or ''),
            holes=int(data.get('holes') or 18),
            par=int(data.get('par') or 72),
            rating=float(data.get('rating') or 0.0),
            description=data.get('description'),
            amenities=list(data.get('amenities') or []),
            image_url=data.get('image_url'),
            slope=int(slope) if slope is not None else None,
            price=_optional_float(data.get('price')),
            lat=_optional_float(data.get('lat')),
            lng=_optional_float(data.get('lng')),
            booking_url=data.get('booking_url'),
            address=data.get('address')
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
