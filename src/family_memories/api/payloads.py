"""JSON shapes returned by the API."""

from family_memories.domain.albums import (
    TravelAlbum,
    TravelDeletion,
    TravelStats,
    YearSummary,
)
from family_memories.domain.markers import TravelMarker
from family_memories.domain.media import FolderListing, MediaAsset


def asset_payload(asset: MediaAsset) -> dict[str, object]:
    return {
        "id": asset.id,
        "url": asset.url,
        "width": asset.width,
        "height": asset.height,
        "format": asset.format,
        "byteSize": asset.byte_size,
        "createdAt": asset.created_at,
        "folder": asset.folder,
    }


def assets_payload(listing: FolderListing) -> list[dict[str, object]]:
    return [asset_payload(asset) for asset in listing.assets]


def coordinates_payload(marker: TravelMarker | None) -> list[float] | None:
    if marker is None or marker.coordinates is None:
        return None
    return list(marker.coordinates)


def marker_payload(marker: TravelMarker) -> dict[str, object]:
    return {
        "id": marker.travel_id,
        "travelId": marker.travel_id,
        "name": marker.name,
        "location": marker.location,
        "date": marker.date,
        "coordinates": coordinates_payload(marker),
        "imageCount": marker.image_count,
        "createdAt": marker.created_at.isoformat() if marker.created_at else None,
        "updatedAt": marker.updated_at.isoformat() if marker.updated_at else None,
    }


def summary_payload(summary: YearSummary) -> dict[str, object]:
    return {
        "year": summary.year,
        "photoCount": summary.photo_count,
        "schoolWorkCount": summary.school_work_count,
        "totalCount": summary.total_count,
        "degraded": summary.degraded,
    }


def travel_payload(album: TravelAlbum) -> dict[str, object]:
    marker = album.marker
    return {
        "id": album.id,
        "name": album.name,
        "folder": album.id,
        "images": assets_payload(album.listing),
        "imageCount": album.image_count,
        "coverImage": album.cover_image,
        "coordinates": coordinates_payload(marker),
        "location": marker.location if marker else None,
        "date": marker.date if marker else None,
        "hasMarker": marker is not None,
        "degraded": not album.listing.ok,
    }


def travels_summary_payload(albums: list[TravelAlbum]) -> dict[str, int]:
    return {
        "total": len(albums),
        "withMarkers": sum(1 for album in albums if album.marker),
        "withCoordinates": sum(
            1 for album in albums if album.marker and album.marker.coordinates
        ),
        "totalImages": sum(album.image_count for album in albums),
    }


def stats_payload(stats: TravelStats) -> dict[str, object]:
    marker = stats.marker
    return {
        "travelId": stats.travel_id,
        "name": stats.name,
        "imageCount": stats.image_count,
        "totalSizeBytes": stats.total_size_bytes,
        "totalSizeMB": stats.total_size_mb,
        "hasMarker": marker is not None,
        "markerLocation": marker.location if marker else None,
        "createdAt": marker.created_at.isoformat()
        if marker and marker.created_at
        else None,
        "isEmpty": stats.is_empty,
        "images": [asset_payload(asset) for asset in stats.images],
    }


def deletion_payload(deletion: TravelDeletion) -> dict[str, object]:
    return {
        "imagesDeleted": deletion.images_deleted,
        "imagesFailed": deletion.images_failed,
        "totalImages": deletion.total_images,
        "markerRemoved": deletion.marker_removed,
        "folderDeleted": deletion.folder_deleted,
        "wasEmpty": deletion.total_images == 0,
        "failedImages": deletion.failed_ids,
    }
