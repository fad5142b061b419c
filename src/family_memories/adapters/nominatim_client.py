"""OpenStreetMap Nominatim geocoding client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class GeocoderClient(Protocol):
    """Interface for text-to-coordinate lookups."""

    async def geocode(self, query: str) -> tuple[float, float] | None:
        """Return ``(lat, lon)`` for the best match, if any."""


@dataclass
class HttpxNominatimClient(GeocoderClient):
    """Nominatim client implemented with httpx."""

    base_url: str
    user_agent: str
    http_client: httpx.AsyncClient
    language: str = "pt-BR,pt,en"
    timeout: float = 10

    @classmethod
    def create(
        cls,
        base_url: str,
        user_agent: str,
        language: str = "pt-BR,pt,en",
        timeout: float = 10,
    ) -> "HttpxNominatimClient":
        """Create a geocoder client with a managed httpx session."""
        return cls(
            base_url=base_url,
            user_agent=user_agent,
            http_client=httpx.AsyncClient(),
            language=language,
            timeout=timeout,
        )

    async def geocode(self, query: str) -> tuple[float, float] | None:
        """Search a free-text location and return its first hit."""
        response = await self.http_client.get(
            f"{self.base_url}/search",
            params={
                "format": "json",
                "q": query,
                "limit": 1,
                "addressdetails": 1,
                "accept-language": self.language,
            },
            headers={"User-Agent": self.user_agent},
            timeout=self.timeout,
        )
        response.raise_for_status()
        results = response.json()
        if not results:
            return None
        first = results[0]
        return float(first["lat"]), float(first["lon"])

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
