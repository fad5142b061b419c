"""Travel marker persistence and geocoding."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol

from family_memories.adapters.cloudinary_client import MediaStoreClient
from family_memories.adapters.nominatim_client import GeocoderClient
from family_memories.domain.markers import TravelMarker
from family_memories.services.errors import UpstreamFailed, ValidationFailed, describe
from family_memories.services.folders import TRAVELS_ROOT

_logger = logging.getLogger(__name__)


class MarkerRepository(Protocol):
    """Persistence interface for travel markers."""

    def list_markers(self) -> list[TravelMarker]:
        """Return all stored markers."""

    def get_marker(self, travel_id: str) -> TravelMarker | None:
        """Return the marker for a travel, if present."""

    def upsert_marker(self, marker: TravelMarker) -> TravelMarker:
        """Insert or replace a marker keyed by travel id."""

    def delete_marker(self, travel_id: str) -> bool:
        """Delete a marker; return true when one existed."""


@dataclass
class MarkerService:
    """Keeps one map marker per travel album."""

    repository: MarkerRepository
    geocoder: GeocoderClient
    media_store: MediaStoreClient

    async def record_travel(
        self,
        travel_id: str,
        name: str,
        location: str,
        date: str | None = None,
        coordinates: tuple[float, float] | None = None,
    ) -> TravelMarker | None:
        """Best-effort marker creation after a travel upload."""
        try:
            return await self._save(travel_id, name, location, date, coordinates)
        except Exception:
            _logger.exception(
                "Failed to record travel marker", extra={"travel_id": travel_id}
            )
            return None

    async def save_marker(
        self,
        travel_id: str,
        name: str,
        location: str | None = None,
        date: str | None = None,
        coordinates: tuple[float, float] | None = None,
    ) -> TravelMarker:
        """Create or update a marker on explicit request."""
        if not travel_id or not name:
            raise ValidationFailed("travelId and name are required")
        try:
            return await self._save(travel_id, name, location or "", date, coordinates)
        except Exception as exc:
            _logger.exception(
                "Failed to save travel marker", extra={"travel_id": travel_id}
            )
            raise UpstreamFailed(
                "Failed to save travel marker", detail=describe(exc)
            ) from exc

    async def sync_with_albums(self) -> list[TravelMarker]:
        """Drop markers whose travel folder no longer exists."""
        markers = self.repository.list_markers()
        try:
            existing = set(await self.media_store.list_sub_folders(TRAVELS_ROOT))
        except Exception:
            _logger.warning("Could not list travel folders; skipping marker sync")
            return markers
        synced = []
        for marker in markers:
            if marker.travel_id in existing:
                synced.append(marker)
            else:
                _logger.info("Removing orphan marker %s", marker.travel_id)
                self.repository.delete_marker(marker.travel_id)
        return synced

    def list_markers(self) -> list[TravelMarker]:
        """Return stored markers without reconciling."""
        return self.repository.list_markers()

    def get(self, travel_id: str) -> TravelMarker | None:
        """Return the marker for a travel, if present."""
        return self.repository.get_marker(travel_id)

    def remove(self, travel_id: str) -> bool:
        """Delete the marker for a travel."""
        return self.repository.delete_marker(travel_id)

    async def geocode(self, location: str) -> tuple[float, float] | None:
        """Resolve a location, returning None on any geocoder failure."""
        if not location:
            return None
        try:
            return await self.geocoder.geocode(location)
        except Exception as exc:
            _logger.warning("Geocoding failed for %r: %s", location, exc)
            return None

    async def _save(
        self,
        travel_id: str,
        name: str,
        location: str,
        date: str | None,
        coordinates: tuple[float, float] | None,
    ) -> TravelMarker:
        if coordinates is None:
            coordinates = await self.geocode(location)
        now = datetime.now(tz=UTC)
        marker = TravelMarker(
            travel_id=travel_id,
            name=name,
            location=location,
            date=date or now.date().isoformat(),
            coordinates=coordinates,
            created_at=now,
            updated_at=now,
        )
        existing = self.repository.get_marker(travel_id)
        if existing:
            marker = replace(
                marker,
                image_count=existing.image_count,
                created_at=existing.created_at or now,
            )
        return self.repository.upsert_marker(marker)
