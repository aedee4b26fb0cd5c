"""Two-tier (memory + disk) image cache backed by an image client."""

import asyncio
import logging
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from urllib.parse import urlsplit

from fitplan.adapters.image_client import ImageClient
from fitplan.domain.images import CachedImage, decode_image
from fitplan.services.cache import LruCache

_logger = logging.getLogger(__name__)


@dataclass
class ImageCache:
    """Image cache checking memory, then disk, then the network."""

    client: ImageClient
    memory: LruCache
    cache_dir: Path
    fetch_timeout_seconds: float = 15.0
    _inflight: dict[str, "asyncio.Future[CachedImage | None]"] = field(
        default_factory=dict, init=False, repr=False
    )
    _generations: dict[str, int] = field(default_factory=dict, init=False, repr=False)
    _epoch: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    async def get(self, url: str) -> CachedImage | None:
        """Return the image for a URL, or None when it cannot be loaded."""
        cached = self.memory.get(url)
        if isinstance(cached, CachedImage):
            return cached

        pending = self._inflight.get(url)
        if pending is None:
            pending = asyncio.ensure_future(self._load(url))
            self._inflight[url] = pending
            pending.add_done_callback(
                lambda done: self._forget_inflight(url, done)
            )
        return await asyncio.shield(pending)

    async def remove(self, url: str) -> None:
        """Remove an image from both tiers, invalidating any load in flight."""
        self._generations[url] = self._generations.get(url, 0) + 1
        self._inflight.pop(url, None)
        self.memory.remove(url)
        path = self._disk_path(url)
        if path is not None:
            await asyncio.to_thread(self._delete_from_disk, path)

    async def clear(self) -> None:
        """Empty the memory tier and recreate an empty disk cache directory."""
        self._epoch += 1
        self._generations.clear()
        self._inflight.clear()
        self.memory.clear()
        await asyncio.to_thread(self._reset_cache_dir)

    async def _load(self, url: str) -> CachedImage | None:
        token = self._token(url)
        path = self._disk_path(url)
        if path is not None:
            image = await asyncio.to_thread(self._read_from_disk, url, path)
            if image is not None:
                if self._token(url) == token:
                    self.memory.set(url, image, cost=image.size)
                return image

        image = await self._download(url)
        # Results of a load invalidated by remove() or clear() are not cached.
        if image is None or self._token(url) != token:
            return image
        self.memory.set(url, image, cost=image.size)
        if path is not None:
            await asyncio.to_thread(self._write_to_disk, path, image.data)
            if self._token(url) != token:
                await asyncio.to_thread(self._delete_from_disk, path)
        return image

    def _token(self, url: str) -> tuple[int, int]:
        return self._epoch, self._generations.get(url, 0)

    async def _download(self, url: str) -> CachedImage | None:
        try:
            async with asyncio.timeout(self.fetch_timeout_seconds):
                data = await self.client.download_image(url)
        except TimeoutError:
            _logger.warning(
                "Image download timed out: url=%s timeout=%s",
                url,
                self.fetch_timeout_seconds,
            )
            return None
        except Exception as exc:
            _logger.warning("Image download failed: url=%s error=%s", url, exc)
            return None

        image = decode_image(url, data)
        if image is None:
            _logger.warning("Image payload is not a known format: url=%s", url)
        return image

    def _disk_path(self, url: str) -> Path | None:
        name = PurePosixPath(urlsplit(url).path).name
        if not name or name in {".", ".."}:
            return None
        return self.cache_dir / name

    def _read_from_disk(self, url: str, path: Path) -> CachedImage | None:
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            _logger.warning("Image cache read failed: path=%s error=%s", path, exc)
            return None
        return decode_image(url, data)

    def _write_to_disk(self, path: Path, data: bytes) -> None:
        tmp_path = path.with_name(f".{path.name}.tmp")
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(data)
            os.replace(tmp_path, path)
        except OSError as exc:
            _logger.warning("Image cache write failed: path=%s error=%s", path, exc)

    def _delete_from_disk(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            _logger.warning("Image cache remove failed: path=%s error=%s", path, exc)

    def _reset_cache_dir(self) -> None:
        shutil.rmtree(self.cache_dir, ignore_errors=True)
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def _forget_inflight(
        self, url: str, done: "asyncio.Future[CachedImage | None]"
    ) -> None:
        if self._inflight.get(url) is done:
            del self._inflight[url]
