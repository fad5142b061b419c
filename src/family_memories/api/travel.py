"""Travel album and map marker endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from family_memories.api.dependencies import get_container, require_principal
from family_memories.api.models import MarkerRequest  # noqa: TC001
from family_memories.api.payloads import (
    deletion_payload,
    marker_payload,
    stats_payload,
    travel_payload,
    travels_summary_payload,
)

router = APIRouter(
    prefix="/api/travel",
    tags=["travel"],
    dependencies=[Depends(require_principal)],
)


@router.get("")
async def list_travels(request: Request) -> dict[str, object]:
    """Return every travel album."""
    albums = await get_container(request).travel_service.list_travels()
    return {
        "success": True,
        "travels": [travel_payload(album) for album in albums],
        "summary": travels_summary_payload(albums),
    }


@router.get("/map/markers")
async def map_markers(request: Request) -> dict[str, object]:
    """Return markers reconciled with existing albums."""
    markers = await get_container(request).travel_service.markers()
    return {
        "success": True,
        "markers": [marker_payload(marker) for marker in markers],
        "count": len(markers),
    }


@router.post("/markers")
async def save_marker(body: MarkerRequest, request: Request) -> dict[str, object]:
    """Create or update a marker, geocoding when no coordinates are sent."""
    marker = await get_container(request).marker_service.save_marker(
        travel_id=body.travel_id or "",
        name=body.name or "",
        location=body.location,
        date=body.date,
        coordinates=body.coordinates(),
    )
    return {
        "success": True,
        "marker": marker_payload(marker),
        "message": "Travel marker saved successfully",
        "hasCoordinates": marker.coordinates is not None,
    }


@router.post("/sync")
async def sync_markers(request: Request) -> dict[str, object]:
    """Drop markers whose album is gone."""
    markers = await get_container(request).travel_service.markers()
    return {
        "success": True,
        "message": "Synchronization completed",
        "markersCount": len(markers),
        "markers": [marker_payload(marker) for marker in markers],
    }


@router.get("/{travel_id}/stats")
async def travel_stats(travel_id: str, request: Request) -> dict[str, object]:
    """Return album size details."""
    stats = await get_container(request).travel_service.travel_stats(travel_id)
    return {"success": True, "stats": stats_payload(stats)}


@router.get("/{travel_id}")
async def get_travel(travel_id: str, request: Request) -> dict[str, object]:
    """Return one travel album."""
    album = await get_container(request).travel_service.get_travel(travel_id)
    return {"success": True, "travel": travel_payload(album)}


@router.delete("/{travel_id}")
async def delete_travel(travel_id: str, request: Request) -> dict[str, object]:
    """Delete an album with its images and marker."""
    deletion = await get_container(request).travel_service.delete_travel(travel_id)
    return {
        "success": True,
        "message": f'Travel album "{travel_id}" deleted successfully',
        "details": deletion_payload(deletion),
    }
