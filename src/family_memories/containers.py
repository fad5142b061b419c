"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

from supabase import create_client

from family_memories.adapters.cloudinary_client import (
    HttpxCloudinaryClient,
    MediaStoreClient,
)
from family_memories.adapters.nominatim_client import HttpxNominatimClient
from family_memories.adapters.supabase_marker_repository import (
    SupabaseMarkerRepository,
)
from family_memories.config import Settings
from family_memories.services.albums import AlbumService
from family_memories.services.auth import AuthService
from family_memories.services.markers import MarkerService
from family_memories.services.travels import TravelService
from family_memories.services.uploads import UploadService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    media_store: MediaStoreClient
    auth_service: AuthService
    marker_service: MarkerService
    upload_service: UploadService
    album_service: AlbumService
    travel_service: TravelService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    marker_repository = SupabaseMarkerRepository(supabase_client)
    media_store = HttpxCloudinaryClient.create(
        cloud_name=resolved_settings.cloudinary_cloud_name,
        api_key=resolved_settings.cloudinary_api_key,
        api_secret=resolved_settings.cloudinary_api_secret,
        base_url=resolved_settings.cloudinary_base_url,
        timeout=resolved_settings.media_timeout_seconds,
    )
    geocoder = HttpxNominatimClient.create(
        base_url=resolved_settings.geocoder_base_url,
        user_agent=resolved_settings.geocoder_user_agent,
        language=resolved_settings.geocoder_language,
        timeout=resolved_settings.geocoder_timeout_seconds,
    )
    auth_service = AuthService(
        username=resolved_settings.admin_username,
        password=resolved_settings.admin_password,
        secret=resolved_settings.jwt_secret,
        algorithm=resolved_settings.jwt_algorithm,
        expires_in=timedelta(days=resolved_settings.jwt_expires_days),
    )
    marker_service = MarkerService(
        repository=marker_repository,
        geocoder=geocoder,
        media_store=media_store,
    )
    upload_service = UploadService(
        media_store=media_store, marker_service=marker_service
    )
    album_service = AlbumService(media_store)
    travel_service = TravelService(
        media_store=media_store, marker_service=marker_service
    )

    async def close_resources() -> None:
        await media_store.close()
        await geocoder.close()

    return AppContainer(
        settings=resolved_settings,
        media_store=media_store,
        auth_service=auth_service,
        marker_service=marker_service,
        upload_service=upload_service,
        album_service=album_service,
        travel_service=travel_service,
        close_resources=close_resources,
    )
