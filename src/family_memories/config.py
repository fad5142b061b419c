"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    cloudinary_cloud_name: str
    cloudinary_api_key: str
    cloudinary_api_secret: str
    cloudinary_base_url: str = "https://api.cloudinary.com/v1_1"
    media_timeout_seconds: float = 60
    geocoder_base_url: str = "https://nominatim.openstreetmap.org"
    geocoder_user_agent: str = "FamilyMemories/1.0"
    geocoder_language: str = "pt-BR,pt,en"
    geocoder_timeout_seconds: float = 10
    admin_username: str
    admin_password: str
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    jwt_expires_days: int = 7
    supabase_url: str
    supabase_service_key: str
    cors_origins: str = "http://localhost:5173,http://localhost:3000"
    client_url: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_origins(raw: str | None, extra: str | None = None) -> list[str]:
    """Parse allowed CORS origins from env."""
    origins: list[str] = []
    chunks = (raw or "").split(",")
    if extra:
        chunks.append(extra)
    for chunk in chunks:
        value = chunk.strip().rstrip("/")
        if value and value not in origins:
            origins.append(value)
    return origins
