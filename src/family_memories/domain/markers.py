"""Domain models for travel map markers."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TravelMarker:
    """Map point for one travel album, keyed by the album slug."""

    travel_id: str
    name: str
    location: str
    date: str | None
    coordinates: tuple[float, float] | None
    image_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
