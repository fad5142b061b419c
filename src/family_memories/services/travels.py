"""Folder-derived listings and maintenance for travel albums."""

import asyncio
import logging
from dataclasses import dataclass, replace

from family_memories.adapters.cloudinary_client import MediaStoreClient
from family_memories.domain.albums import TravelAlbum, TravelDeletion, TravelStats
from family_memories.domain.markers import TravelMarker
from family_memories.domain.media import FolderListing, SearchPage
from family_memories.services.albums import fetch_listing
from family_memories.services.errors import NotFound, UpstreamFailed, describe
from family_memories.services.folders import (
    TRAVELS_ROOT,
    humanize_slug,
    travel_folder,
)
from family_memories.services.markers import MarkerService

_logger = logging.getLogger(__name__)


@dataclass
class TravelService:
    """Rebuilds travel albums from the media store and marker records."""

    media_store: MediaStoreClient
    marker_service: MarkerService
    preview_limit: int = 100
    max_results: int = 500

    async def list_travels(self) -> list[TravelAlbum]:
        """Return every travel album with a capped preview."""
        markers = {
            marker.travel_id: marker
            for marker in await self.marker_service.sync_with_albums()
        }
        try:
            slugs = await self.media_store.list_sub_folders(TRAVELS_ROOT)
        except Exception as exc:
            _logger.exception("Failed to list travel folders")
            raise UpstreamFailed(
                "Failed to fetch travels", detail=describe(exc)
            ) from exc
        listings = await asyncio.gather(
            *(
                fetch_listing(self.media_store, travel_folder(slug), self.preview_limit)
                for slug in slugs
            )
        )
        return [
            TravelAlbum(
                id=slug,
                name=humanize_slug(slug),
                listing=listing,
                marker=markers.get(slug),
            )
            for slug, listing in zip(slugs, listings, strict=True)
        ]

    async def get_travel(self, travel_id: str) -> TravelAlbum:
        """Return one album; an album without images does not exist."""
        page = await self._search(travel_id, "Failed to fetch travel")
        if page.total_count == 0 and not page.assets:
            raise NotFound("Travel not found")
        return TravelAlbum(
            id=travel_id,
            name=humanize_slug(travel_id),
            listing=_listing(travel_id, page),
            marker=self.marker_service.get(travel_id),
        )

    async def travel_stats(self, travel_id: str) -> TravelStats:
        """Summarise album size before deletion."""
        page = await self._search(travel_id, "Failed to fetch travel stats")
        return TravelStats(
            travel_id=travel_id,
            name=humanize_slug(travel_id),
            image_count=page.total_count,
            total_size_bytes=sum(asset.byte_size or 0 for asset in page.assets),
            images=page.assets,
            marker=self.marker_service.get(travel_id),
        )

    async def delete_travel(self, travel_id: str) -> TravelDeletion:
        """Delete every image, the folder and the marker of an album.

        A failed search aborts before anything is deleted. The marker is kept
        while any image could not be destroyed, so the album stays on the map.
        """
        folder = travel_folder(travel_id)
        page = await self._search(travel_id, "Failed to delete travel")
        deleted = 0
        failed_ids: list[str] = []
        for asset in page.assets:
            try:
                result = await self.media_store.destroy(asset.id)
            except Exception:
                _logger.exception("Failed to delete %s", asset.id)
                failed_ids.append(asset.id)
                continue
            if result in {"ok", "not found"}:
                deleted += 1
            else:
                failed_ids.append(asset.id)

        folder_deleted = False
        marker_removed = False
        if not failed_ids:
            try:
                await self.media_store.delete_folder(folder)
                folder_deleted = True
            except Exception as exc:
                _logger.warning(
                    "Could not delete folder %s: %s", folder, describe(exc)
                )
            marker_removed = self.marker_service.remove(travel_id)
        _logger.info(
            "Deleted travel %s: %s images, %s failed",
            travel_id,
            deleted,
            len(failed_ids),
        )
        return TravelDeletion(
            travel_id=travel_id,
            total_images=page.total_count,
            images_deleted=deleted,
            images_failed=len(failed_ids),
            folder_deleted=folder_deleted,
            marker_removed=marker_removed,
            failed_ids=failed_ids,
        )

    async def markers(self) -> list[TravelMarker]:
        """Return markers reconciled with existing albums, with live counts."""
        markers = await self.marker_service.sync_with_albums()
        listings = await asyncio.gather(
            *(
                fetch_listing(self.media_store, travel_folder(marker.travel_id), 1)
                for marker in markers
            )
        )
        return [
            replace(marker, image_count=listing.total_count) if listing.ok else marker
            for marker, listing in zip(markers, listings, strict=True)
        ]

    async def _search(self, travel_id: str, message: str) -> SearchPage:
        try:
            return await self.media_store.search_folder(
                travel_folder(travel_id), max_results=self.max_results
            )
        except Exception as exc:
            _logger.exception("Travel search failed", extra={"travel_id": travel_id})
            raise UpstreamFailed(message, detail=describe(exc)) from exc


def _listing(travel_id: str, page: SearchPage) -> FolderListing:
    return FolderListing(
        folder=travel_folder(travel_id),
        assets=page.assets,
        total_count=page.total_count,
    )
