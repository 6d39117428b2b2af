"""
Booking model for tee-time reservations.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

class BookingStatus(str, Enum):
    """Booking lifecycle states."""
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'

@dataclass
class Booking:
    """A tee-time booking."""
    id: str | None
    user_id: str
    course_id: str
    date: str
    time: str
    players: int = 2
    status: BookingStatus = BookingStatus.CONFIRMED
    total_price: float | None = None
    created_at: str | None = None

    @property
    def is_active(self) -> bool:
        return self.status != BookingStatus.CANCELLED

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'Booking':
        total_price = data.get('total_price')
        return cls(
            id=str(data['id']) if data.get('id') is not None else None,
            user_id=str(data.get('user_id') or ''),
            course_id=str(data.get('course_id') or ''),
            date=str(data.get('date') or ''),
            time=str(data.get('time') or ''),
            players=int(data.get('players') or 2),
            status=BookingStatus(data.get('status') or BookingStatus.CONFIRMED.value),
            total_price=float(total_price) if total_price is not None else None,
            created_at=data.get('created_at')
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data['status'] = self.status.value
        return data
