"""Domain models for stored media."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class MediaAsset:
    """One image held by the media store."""

    id: str
    url: str
    width: int | None
    height: int | None
    format: str | None
    byte_size: int | None
    created_at: str | None
    folder: str | None = None


@dataclass(frozen=True)
class SearchPage:
    """Result of a folder-scoped search."""

    total_count: int
    assets: list[MediaAsset]


@dataclass(frozen=True)
class ImagePayload:
    """A single uploaded file, independent of the HTTP transport."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class FolderListing:
    """Outcome of one folder sub-query.

    A failed sub-query keeps an empty asset list and records the reason in
    ``error`` so callers can tell an empty folder from a degraded one.
    """

    folder: str
    assets: list[MediaAsset] = field(default_factory=list)
    total_count: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
