"""Upload and delete endpoints."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from family_memories.api.dependencies import get_container, require_principal
from family_memories.api.payloads import asset_payload, coordinates_payload
from family_memories.domain.media import ImagePayload
from family_memories.services.errors import Unavailable, describe

if TYPE_CHECKING:
    from family_memories.services.uploads import UploadService

router = APIRouter(
    prefix="/api/upload",
    tags=["upload"],
    dependencies=[Depends(require_principal)],
)

_logger = logging.getLogger(__name__)


async def _read_images(
    images: list[UploadFile], upload_service: UploadService, limit: int
) -> list[ImagePayload]:
    upload_service.check_batch(len(images), limit)
    for upload in images:
        upload_service.check_file(
            upload.filename or "image", upload.content_type or "", upload.size
        )
    payloads = []
    for upload in images:
        payloads.append(
            ImagePayload(
                filename=upload.filename or "image",
                content_type=upload.content_type or "",
                data=await upload.read(),
            )
        )
    return payloads


@router.post("/memories")
async def upload_memories(  # noqa: PLR0913
    request: Request,
    images: list[UploadFile] = File(default=[]),
    year: str | None = Form(default=None),
    category: str | None = Form(default=None),
    description: str | None = Form(default=None),
    mode: str | None = Form(default=None),
) -> dict[str, object]:
    """Upload a batch of memories for a year and category."""
    service = get_container(request).upload_service
    files = await _read_images(images, service, service.memories_limit)
    _logger.info(
        "Memories upload: year=%s category=%s files=%s", year, category, len(files)
    )
    result = await service.upload_memories(
        files, year=year, category=category, description=description, mode=mode
    )
    return {
        "success": True,
        "images": [asset_payload(asset) for asset in result.assets],
        "message": result.message,
        "mode": mode or "create",
        "year": year,
        "category": category,
        "description": result.description,
        "totalImages": len(result.assets),
    }


@router.post("/memories/{year}/{category}/add")
async def add_memories(
    year: str,
    category: str,
    request: Request,
    images: list[UploadFile] = File(default=[]),
    description: str | None = Form(default=None),
) -> dict[str, object]:
    """Append memories to an existing year and category."""
    service = get_container(request).upload_service
    files = await _read_images(images, service, service.memories_limit)
    result = await service.upload_memories(
        files,
        year=year,
        category=category,
        description=description,
        mode="append",
    )
    return {
        "success": True,
        "images": [asset_payload(asset) for asset in result.assets],
        "message": result.message,
        "year": year,
        "category": category,
        "description": result.description,
        "totalImages": len(result.assets),
    }


@router.post("/travel")
async def upload_travel(  # noqa: PLR0913
    request: Request,
    images: list[UploadFile] = File(default=[]),
    travel_name: str | None = Form(default=None, alias="travelName"),
    location: str | None = Form(default=None),
    date: str | None = Form(default=None),
    description: str | None = Form(default=None),
    mode: str | None = Form(default=None),
    latitude: float | None = Form(default=None),
    longitude: float | None = Form(default=None),
) -> dict[str, object]:
    """Create a travel album from a batch of images."""
    service = get_container(request).upload_service
    files = await _read_images(images, service, service.travel_limit)
    coordinates = (
        (latitude, longitude) if latitude is not None and longitude is not None else None
    )
    result = await service.create_travel(
        files,
        travel_name=travel_name,
        location=location,
        date=date,
        description=description,
        mode=mode,
        coordinates=coordinates,
    )
    slug = result.folder.split("/", 1)[1]
    response: dict[str, object] = {
        "success": True,
        "travel": {
            "id": slug,
            "name": travel_name,
            "location": location,
            "date": date,
            "description": result.description,
            "images": [asset_payload(asset) for asset in result.assets],
            "folder": slug,
            "imageCount": len(result.assets),
        },
        "message": result.message,
        "mode": "create",
    }
    if result.marker is not None:
        response["marker"] = {
            "created": True,
            "hasCoordinates": result.marker.coordinates is not None,
            "location": result.marker.location,
            "coordinates": coordinates_payload(result.marker),
        }
    return response


@router.post("/travel/{travel_id}/add")
async def add_travel_images(
    travel_id: str,
    request: Request,
    images: list[UploadFile] = File(default=[]),
    description: str | None = Form(default=None),
) -> dict[str, object]:
    """Append images to an existing travel album."""
    service = get_container(request).upload_service
    files = await _read_images(images, service, service.travel_limit)
    result = await service.append_travel(travel_id, files, description=description)
    return {
        "success": True,
        "images": [asset_payload(asset) for asset in result.assets],
        "message": result.message,
        "travelId": travel_id,
        "description": result.description,
        "totalImages": len(result.assets),
    }


@router.delete("/image/{public_id:path}")
async def delete_image(public_id: str, request: Request) -> dict[str, object]:
    """Delete one asset by its store identifier."""
    result = await get_container(request).upload_service.delete_image(public_id)
    return {
        "success": True,
        "message": "Image deleted successfully",
        "publicId": public_id,
        "result": result,
    }


@router.get("/health")
async def upload_health(request: Request) -> dict[str, object]:
    """Check connectivity with the media store."""
    container = get_container(request)
    try:
        connected = await container.media_store.ping()
    except Exception as exc:
        _logger.exception("Media store ping failed")
        raise Unavailable("Health check failed", detail=describe(exc)) from exc
    return {
        "success": True,
        "message": "Upload service is healthy",
        "mediaStore": "connected" if connected else "disconnected",
        "timestamp": datetime.now(tz=UTC).isoformat(),
        "environment": container.settings.environment,
    }
