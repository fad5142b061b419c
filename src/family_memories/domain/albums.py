"""Domain models for folder-derived albums."""

from dataclasses import dataclass

from family_memories.domain.markers import TravelMarker
from family_memories.domain.media import FolderListing, MediaAsset


@dataclass(frozen=True)
class YearMemories:
    """Photos and school work for one year bucket."""

    year: str
    photos: FolderListing
    school_work: FolderListing

    @property
    def degraded(self) -> list[str]:
        return [
            listing.folder
            for listing in (self.photos, self.school_work)
            if not listing.ok
        ]


@dataclass(frozen=True)
class YearSummary:
    """Asset counts for one year bucket."""

    year: str
    photo_count: int
    school_work_count: int
    degraded: bool = False

    @property
    def total_count(self) -> int:
        return self.photo_count + self.school_work_count


@dataclass(frozen=True)
class TravelAlbum:
    """A travel album rebuilt from its folder and optional marker."""

    id: str
    name: str
    listing: FolderListing
    marker: TravelMarker | None = None

    @property
    def images(self) -> list[MediaAsset]:
        return self.listing.assets

    @property
    def image_count(self) -> int:
        return self.listing.total_count

    @property
    def cover_image(self) -> str | None:
        return self.listing.assets[0].url if self.listing.assets else None


@dataclass(frozen=True)
class TravelStats:
    """Size and marker information for a travel album."""

    travel_id: str
    name: str
    image_count: int
    total_size_bytes: int
    images: list[MediaAsset]
    marker: TravelMarker | None

    @property
    def total_size_mb(self) -> str:
        return f"{self.total_size_bytes / (1024 * 1024):.2f}"

    @property
    def is_empty(self) -> bool:
        return self.image_count == 0


@dataclass(frozen=True)
class TravelDeletion:
    """Outcome of deleting a whole travel album."""

    travel_id: str
    total_images: int
    images_deleted: int
    images_failed: int
    folder_deleted: bool
    marker_removed: bool
    failed_ids: list[str]
