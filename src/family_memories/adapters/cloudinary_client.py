"""Cloudinary media store client."""

import hashlib
import time
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote

import httpx

from family_memories.domain.media import ImagePayload, MediaAsset, SearchPage

# Bound the longest side to 1200px and let the store pick the quality.
UPLOAD_TRANSFORMATION = "c_limit,h_1200,q_auto,w_1200"


class MediaStoreClient(Protocol):
    """Interface for the remote media store."""

    async def upload_image(self, image: ImagePayload, folder: str) -> MediaAsset:
        """Upload one image into a folder and return the stored asset."""

    async def search_folder(
        self, folder: str, max_results: int = 500
    ) -> SearchPage:
        """Search a folder expression, newest first."""

    async def list_sub_folders(self, path: str) -> list[str]:
        """Return the names of the direct sub-folders of a path."""

    async def destroy(self, public_id: str) -> str:
        """Delete an asset and return the store's result string."""

    async def delete_folder(self, path: str) -> None:
        """Delete an empty folder."""

    async def ping(self) -> bool:
        """Return true when the store answers."""


@dataclass
class HttpxCloudinaryClient(MediaStoreClient):
    """Cloudinary REST client implemented with httpx."""

    cloud_name: str
    api_key: str
    api_secret: str
    http_client: httpx.AsyncClient
    base_url: str = "https://api.cloudinary.com/v1_1"
    timeout: float = 60

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        base_url: str = "https://api.cloudinary.com/v1_1",
        timeout: float = 60,
    ) -> "HttpxCloudinaryClient":
        """Create a Cloudinary client with a managed httpx session."""
        return cls(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            http_client=httpx.AsyncClient(),
            base_url=base_url,
            timeout=timeout,
        )

    async def upload_image(self, image: ImagePayload, folder: str) -> MediaAsset:
        """Upload an image with the standard transformation."""
        params = self._signed(
            {"folder": folder, "transformation": UPLOAD_TRANSFORMATION}
        )
        response = await self.http_client.post(
            self._url("image/upload"),
            data=params,
            files={"file": (image.filename, image.data, image.content_type)},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return _to_asset(response.json())

    async def search_folder(
        self, folder: str, max_results: int = 500
    ) -> SearchPage:
        """Run a folder search sorted by creation time, newest first."""
        expression = folder if folder.endswith("*") else f'"{folder}"'
        response = await self.http_client.post(
            self._url("resources/search"),
            json={
                "expression": f"folder:{expression}",
                "max_results": max_results,
                "sort_by": [{"created_at": "desc"}],
            },
            auth=(self.api_key, self.api_secret),
            timeout=self.timeout,
        )
        response.raise_for_status()
        payload = response.json()
        return SearchPage(
            total_count=int(payload.get("total_count") or 0),
            assets=[_to_asset(resource) for resource in payload.get("resources", [])],
        )

    async def list_sub_folders(self, path: str) -> list[str]:
        """List sub-folder names; a missing parent folder has none."""
        response = await self.http_client.get(
            self._url(f"folders/{quote(path)}"),
            auth=(self.api_key, self.api_secret),
            timeout=self.timeout,
        )
        if response.status_code == httpx.codes.NOT_FOUND:
            return []
        response.raise_for_status()
        return [folder["name"] for folder in response.json().get("folders", [])]

    async def destroy(self, public_id: str) -> str:
        """Delete an image by public id."""
        response = await self.http_client.post(
            self._url("image/destroy"),
            data=self._signed({"public_id": public_id}),
            timeout=self.timeout,
        )
        response.raise_for_status()
        return str(response.json().get("result", ""))

    async def delete_folder(self, path: str) -> None:
        """Delete an empty folder."""
        response = await self.http_client.delete(
            self._url(f"folders/{quote(path)}"),
            auth=(self.api_key, self.api_secret),
            timeout=self.timeout,
        )
        response.raise_for_status()

    async def ping(self) -> bool:
        """Check that credentials and the API are reachable."""
        response = await self.http_client.get(
            self._url("ping"),
            auth=(self.api_key, self.api_secret),
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json().get("status") == "ok"

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{self.cloud_name}/{path}"

    def _signed(self, params: dict[str, str]) -> dict[str, str]:
        """Add timestamp, api key and SHA-1 signature to upload API params."""
        signed = dict(params)
        signed["timestamp"] = str(int(time.time()))
        signed["signature"] = sign_params(signed, self.api_secret)
        signed["api_key"] = self.api_key
        return signed


def sign_params(params: dict[str, str], api_secret: str) -> str:
    """Return the Cloudinary signature for a parameter set."""
    to_sign = "&".join(
        f"{key}={value}" for key, value in sorted(params.items()) if value
    )
    return hashlib.sha1(f"{to_sign}{api_secret}".encode()).hexdigest()  # noqa: S324


def _to_asset(resource: dict[str, object]) -> MediaAsset:
    """Map a Cloudinary resource payload to a media asset."""
    return MediaAsset(
        id=str(resource["public_id"]),
        url=str(resource.get("secure_url") or resource.get("url") or ""),
        width=resource.get("width"),
        height=resource.get("height"),
        format=resource.get("format"),
        byte_size=resource.get("bytes"),
        created_at=resource.get("created_at"),
        folder=resource.get("folder") or resource.get("asset_folder"),
    )
