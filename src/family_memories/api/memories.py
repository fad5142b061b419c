"""Year memory listing endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from family_memories.api.dependencies import get_container, require_principal
from family_memories.api.payloads import assets_payload, summary_payload

router = APIRouter(
    prefix="/api/memories",
    tags=["memories"],
    dependencies=[Depends(require_principal)],
)


@router.get("/summary")
async def memories_summary(request: Request) -> dict[str, object]:
    """Return asset counts for every year bucket."""
    summaries = await get_container(request).album_service.summarize()
    return {
        "success": True,
        "summary": [summary_payload(summary) for summary in summaries],
    }


@router.get("/recent")
async def recent_memories(request: Request, limit: int = 12) -> dict[str, object]:
    """Return the newest memories for the home page."""
    listing = await get_container(request).album_service.recent(limit)
    return {
        "success": True,
        "recentMemories": assets_payload(listing),
        "degraded": not listing.ok,
    }


@router.get("/year/{year}")
async def memories_by_year(year: str, request: Request) -> dict[str, object]:
    """Return photos and school work stored for a year bucket."""
    memories = await get_container(request).album_service.list_by_year(year)
    return {
        "success": True,
        "memories": {
            "year": memories.year,
            "photos": assets_payload(memories.photos),
            "schoolWork": assets_payload(memories.school_work),
            "degraded": memories.degraded,
        },
    }
