"""Supabase-backed travel marker repository."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from family_memories.domain.markers import TravelMarker
from family_memories.services.markers import MarkerRepository

_COLUMNS = (
    "travel_id, name, location, date, latitude, longitude, image_count, "
    "created_at, updated_at"
)


@dataclass
class SupabaseMarkerRepository(MarkerRepository):
    """Supabase implementation for travel marker persistence."""

    client: Client

    def list_markers(self) -> list[TravelMarker]:
        """Return all markers ordered by creation."""
        response = (
            self.client.table("travel_markers")
            .select(_COLUMNS)
            .order("created_at")
            .execute()
        )
        return [_row_to_marker(row) for row in response.data or []]

    def get_marker(self, travel_id: str) -> TravelMarker | None:
        """Return one marker by travel id."""
        response = (
            self.client.table("travel_markers")
            .select(_COLUMNS)
            .eq("travel_id", travel_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _row_to_marker(response.data[0])

    def upsert_marker(self, marker: TravelMarker) -> TravelMarker:
        """Insert or update a marker keyed by travel id."""
        latitude, longitude = marker.coordinates or (None, None)
        response = (
            self.client.table("travel_markers")
            .upsert(
                {
                    "travel_id": marker.travel_id,
                    "name": marker.name,
                    "location": marker.location,
                    "date": marker.date,
                    "latitude": latitude,
                    "longitude": longitude,
                    "image_count": marker.image_count,
                    "created_at": _iso(marker.created_at),
                    "updated_at": _iso(marker.updated_at),
                },
                on_conflict="travel_id",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save travel marker")
        return _row_to_marker(response.data[0])

    def delete_marker(self, travel_id: str) -> bool:
        """Delete a marker by travel id."""
        response = (
            self.client.table("travel_markers")
            .delete()
            .eq("travel_id", travel_id)
            .execute()
        )
        return bool(response.data)


def _row_to_marker(row: dict[str, object]) -> TravelMarker:
    latitude = row.get("latitude")
    longitude = row.get("longitude")
    coordinates = None
    if latitude is not None and longitude is not None:
        coordinates = (float(latitude), float(longitude))
    return TravelMarker(
        travel_id=str(row["travel_id"]),
        name=str(row.get("name") or ""),
        location=str(row.get("location") or ""),
        date=row.get("date"),
        coordinates=coordinates,
        image_count=int(row.get("image_count") or 0),
        created_at=_parse_datetime(row.get("created_at")),
        updated_at=_parse_datetime(row.get("updated_at")),
    )


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _parse_datetime(value: object) -> datetime | None:
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))
