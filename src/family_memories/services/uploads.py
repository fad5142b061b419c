"""Upload ingest pipeline for memories and travel albums."""

import asyncio
import logging
from dataclasses import dataclass

from family_memories.adapters.cloudinary_client import MediaStoreClient
from family_memories.domain.markers import TravelMarker
from family_memories.domain.media import ImagePayload, MediaAsset
from family_memories.services.errors import (
    NotFound,
    UpstreamFailed,
    ValidationFailed,
    describe,
)
from family_memories.services.folders import (
    MEMORY_CATEGORIES,
    memories_folder,
    travel_folder,
    travel_slug,
)
from family_memories.services.markers import MarkerService

MAX_FILE_BYTES = 10 * 1024 * 1024
MEMORIES_BATCH_LIMIT = 10
TRAVEL_BATCH_LIMIT = 20

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadResult:
    """Assets stored by one ingest call."""

    assets: list[MediaAsset]
    message: str
    folder: str
    description: str | None = None
    marker: TravelMarker | None = None
    marker_attempted: bool = False


@dataclass
class UploadService:
    """Validates a batch and relays it to the media store."""

    media_store: MediaStoreClient
    marker_service: MarkerService
    max_file_bytes: int = MAX_FILE_BYTES
    memories_limit: int = MEMORIES_BATCH_LIMIT
    travel_limit: int = TRAVEL_BATCH_LIMIT
    compensate_failures: bool = True

    async def upload_memories(
        self,
        files: list[ImagePayload],
        year: str | None,
        category: str | None,
        description: str | None = None,
        mode: str | None = None,
    ) -> UploadResult:
        """Store images under ``memories/<year>/<category>``."""
        self._validate_files(files, self.memories_limit)
        if not year:
            raise ValidationFailed("Year is required")
        if not category:
            raise ValidationFailed("Category is required")
        if category not in MEMORY_CATEGORIES:
            raise ValidationFailed(
                f"Invalid category. Must be one of: {', '.join(MEMORY_CATEGORIES)}"
            )
        folder = memories_folder(year, category)
        assets = await self._transfer(files, folder)
        if mode == "append":
            message = f"{len(assets)} images added to existing album"
        else:
            message = f"{len(assets)} images uploaded successfully"
        return UploadResult(
            assets=assets, message=message, folder=folder, description=description
        )

    async def create_travel(  # noqa: PLR0913
        self,
        files: list[ImagePayload],
        travel_name: str | None,
        location: str | None,
        date: str | None = None,
        description: str | None = None,
        mode: str | None = None,
        coordinates: tuple[float, float] | None = None,
    ) -> UploadResult:
        """Create a travel album and record its map marker."""
        self._validate_files(files, self.travel_limit)
        if not travel_name or not location:
            raise ValidationFailed("Travel name and location are required")
        if mode == "append":
            raise ValidationFailed(
                "Use /upload/travel/{travelId}/add to add photos",
                detail="This route only creates new albums",
            )
        slug = travel_slug(travel_name)
        if not slug:
            raise ValidationFailed("Travel name and location are required")
        folder = travel_folder(slug)
        assets = await self._transfer(files, folder)
        marker = await self.marker_service.record_travel(
            travel_id=slug,
            name=travel_name,
            location=location,
            date=date,
            coordinates=coordinates,
        )
        return UploadResult(
            assets=assets,
            message=f'Album "{travel_name}" created with {len(assets)} images',
            folder=folder,
            description=description,
            marker=marker,
            marker_attempted=True,
        )

    async def append_travel(
        self,
        travel_id: str,
        files: list[ImagePayload],
        description: str | None = None,
    ) -> UploadResult:
        """Add images to an existing travel folder without touching markers."""
        self._validate_files(files, self.travel_limit)
        if not travel_id:
            raise ValidationFailed("Travel id is required")
        folder = travel_folder(travel_id)
        assets = await self._transfer(files, folder)
        return UploadResult(
            assets=assets,
            message=f"{len(assets)} photos added to album",
            folder=folder,
            description=description,
        )

    async def delete_image(self, public_id: str) -> str:
        """Delete one asset by its store identifier."""
        try:
            result = await self.media_store.destroy(public_id)
        except Exception as exc:
            _logger.exception("Delete failed", extra={"public_id": public_id})
            raise UpstreamFailed(
                "Failed to delete image", detail=describe(exc)
            ) from exc
        if result == "ok":
            _logger.info("Deleted image %s", public_id)
            return result
        if result == "not found":
            raise NotFound("Image not found", detail=result)
        raise ValidationFailed("Failed to delete image", detail=result or None)

    def check_batch(self, count: int, limit: int) -> None:
        """Reject an empty or oversized batch before any file is read."""
        if not count:
            raise ValidationFailed("No images provided")
        if count > limit:
            raise ValidationFailed(f"Too many images. Maximum is {limit} per upload")

    def check_file(self, filename: str, content_type: str, size: int | None) -> None:
        """Reject a non-image or oversized file; ``size`` may be unknown."""
        if not content_type.lower().startswith("image/"):
            raise ValidationFailed("Only image files are allowed", detail=filename)
        if size is not None and size > self.max_file_bytes:
            raise ValidationFailed(
                "File too large. Maximum size is 10MB", detail=filename
            )

    def _validate_files(self, files: list[ImagePayload], limit: int) -> None:
        self.check_batch(len(files), limit)
        for image in files:
            self.check_file(image.filename, image.content_type, image.size)

    async def _transfer(
        self, files: list[ImagePayload], folder: str
    ) -> list[MediaAsset]:
        """Upload every file concurrently; results keep the input order."""
        tasks: list[asyncio.Task[MediaAsset]] = []
        try:
            async with asyncio.TaskGroup() as group:
                for image in files:
                    tasks.append(
                        group.create_task(self.media_store.upload_image(image, folder))
                    )
        except ExceptionGroup as failures:
            first = failures.exceptions[0]
            _logger.error(
                "Upload batch failed for %s: %s", folder, describe(first)
            )
            await self._compensate(tasks)
            raise UpstreamFailed(
                "Failed to upload images", detail=describe(first)
            ) from first
        assets = [task.result() for task in tasks]
        _logger.info("Uploaded %s images to %s", len(assets), folder)
        return assets

    async def _compensate(self, tasks: list[asyncio.Task[MediaAsset]]) -> None:
        """Delete assets that finished uploading before the batch failed."""
        if not self.compensate_failures:
            return
        stored = [
            task.result()
            for task in tasks
            if task.done() and not task.cancelled() and task.exception() is None
        ]
        for asset in stored:
            try:
                await self.media_store.destroy(asset.id)
            except Exception:
                _logger.warning("Could not remove orphaned upload %s", asset.id)
