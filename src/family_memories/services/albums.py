"""Folder-derived listings for year memories."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from family_memories.adapters.cloudinary_client import MediaStoreClient
from family_memories.domain.albums import YearMemories, YearSummary
from family_memories.domain.media import FolderListing
from family_memories.services.errors import describe
from family_memories.services.folders import (
    MEMORIES_ROOT,
    PHOTOS,
    SCHOOL_WORK,
    YEAR_BUCKETS,
    memories_folder,
)

_logger = logging.getLogger(__name__)


async def fetch_listing(
    media_store: MediaStoreClient, folder: str, max_results: int
) -> FolderListing:
    """Search one folder, turning a failure into a degraded empty listing."""
    try:
        page = await media_store.search_folder(folder, max_results=max_results)
    except Exception as exc:
        _logger.warning("Folder search failed for %s: %s", folder, describe(exc))
        return FolderListing(folder=folder, error=describe(exc))
    return FolderListing(
        folder=folder, assets=page.assets, total_count=page.total_count
    )


@dataclass
class AlbumService:
    """Rebuilds year albums from folder searches."""

    media_store: MediaStoreClient
    max_results: int = 500
    recent_limit: int = 12

    async def list_by_year(self, year: str) -> YearMemories:
        """Return photos and school work for a year bucket."""
        photos, school_work = await asyncio.gather(
            fetch_listing(
                self.media_store, memories_folder(year, PHOTOS), self.max_results
            ),
            fetch_listing(
                self.media_store, memories_folder(year, SCHOOL_WORK), self.max_results
            ),
        )
        return YearMemories(year=year, photos=photos, school_work=school_work)

    async def summarize(
        self, years: Sequence[str] = YEAR_BUCKETS
    ) -> list[YearSummary]:
        """Count assets per year bucket with count-only searches."""
        folders = [
            memories_folder(year, category)
            for year in years
            for category in (PHOTOS, SCHOOL_WORK)
        ]
        listings = await asyncio.gather(
            *(fetch_listing(self.media_store, folder, 1) for folder in folders)
        )
        summaries = []
        for index, year in enumerate(years):
            photos, school_work = listings[2 * index], listings[2 * index + 1]
            summaries.append(
                YearSummary(
                    year=year,
                    photo_count=photos.total_count,
                    school_work_count=school_work.total_count,
                    degraded=not (photos.ok and school_work.ok),
                )
            )
        return summaries

    async def recent(self, limit: int | None = None) -> FolderListing:
        """Return the newest memories across every year."""
        return await fetch_listing(
            self.media_store, f"{MEMORIES_ROOT}/*", limit or self.recent_limit
        )
