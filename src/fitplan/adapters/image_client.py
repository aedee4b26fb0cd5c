"""HTTP client for downloading meal images."""

from dataclasses import dataclass
from typing import Protocol

import httpx

HTTP_OK = 200


class ImageDownloadError(RuntimeError):
    """Raised when an image URL answers with a non-success status."""

    def __init__(self, url: str, status_code: int) -> None:
        super().__init__(f"Image download failed: url={url} status={status_code}")
        self.url = url
        self.status_code = status_code


class ImageClient(Protocol):
    """Interface for downloading image bytes."""

    async def download_image(self, url: str) -> bytes:
        """Download an image and return its raw bytes."""


@dataclass
class HttpxImageClient(ImageClient):
    """Image client using httpx."""

    http_client: httpx.AsyncClient
    timeout_seconds: float = 15.0

    @classmethod
    def create(cls, timeout_seconds: float = 15.0) -> "HttpxImageClient":
        """Create an image client with a managed httpx session."""
        return cls(
            http_client=httpx.AsyncClient(follow_redirects=True),
            timeout_seconds=timeout_seconds,
        )

    async def download_image(self, url: str) -> bytes:
        """Download image bytes, requiring HTTP 200."""
        response = await self.http_client.get(url, timeout=self.timeout_seconds)
        if response.status_code != HTTP_OK:
            raise ImageDownloadError(url, response.status_code)
        return response.content

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
