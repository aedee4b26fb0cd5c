"""Image models for the image cache."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CachedImage:
    """Image payload held by the cache tiers."""

    url: str
    data: bytes
    mime_type: str

    @property
    def size(self) -> int:
        return len(self.data)


def detect_image_type(data: bytes) -> str | None:
    """Infer an image MIME type from file signatures, or None if unknown."""
    if data.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if data.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if data.startswith((b"GIF87a", b"GIF89a")):
        return "image/gif"
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return None


def decode_image(url: str, data: bytes) -> CachedImage | None:
    """Wrap raw bytes as a cached image when the payload is a known format."""
    mime_type = detect_image_type(data)
    if mime_type is None:
        return None
    return CachedImage(url=url, data=data, mime_type=mime_type)
