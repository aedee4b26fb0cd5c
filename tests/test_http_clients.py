"""Tests for HTTP-based adapters."""

import asyncio

import httpx
import pytest

from fitplan.adapters.image_client import HttpxImageClient, ImageDownloadError
from fitplan.services.cache import LruCache
from fitplan.services.images import ImageCache
from tests.conftest import PNG_BYTES

URL = "https://img.test/photos/bowl.png"


def test_image_client_returns_body_on_success() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url == httpx.URL(URL)
        return httpx.Response(200, content=PNG_BYTES)

    transport = httpx.MockTransport(handler)
    async_client = httpx.AsyncClient(transport=transport)
    client = HttpxImageClient(http_client=async_client)

    data = asyncio.run(client.download_image(URL))

    assert data == PNG_BYTES


def test_image_client_follows_redirects() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/old.png":
            return httpx.Response(302, headers={"Location": URL})
        return httpx.Response(200, content=PNG_BYTES)

    transport = httpx.MockTransport(handler)
    async_client = httpx.AsyncClient(transport=transport, follow_redirects=True)
    client = HttpxImageClient(http_client=async_client)

    data = asyncio.run(client.download_image("https://img.test/old.png"))

    assert data == PNG_BYTES


def test_image_client_rejects_non_ok_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, content=b"missing")

    transport = httpx.MockTransport(handler)
    async_client = httpx.AsyncClient(transport=transport)
    client = HttpxImageClient(http_client=async_client)

    with pytest.raises(ImageDownloadError) as exc_info:
        asyncio.run(client.download_image(URL))

    assert exc_info.value.status_code == 404
    assert exc_info.value.url == URL


def test_image_cache_returns_none_on_server_error(tmp_path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500)

    transport = httpx.MockTransport(handler)
    async_client = httpx.AsyncClient(transport=transport)
    cache = ImageCache(
        client=HttpxImageClient(http_client=async_client),
        memory=LruCache(),
        cache_dir=tmp_path / "images",
    )

    assert asyncio.run(cache.get(URL)) is None
    assert list((tmp_path / "images").iterdir()) == []


def test_image_client_close() -> None:
    client = HttpxImageClient.create(timeout_seconds=2.0)

    asyncio.run(client.close())

    assert client.http_client.is_closed
