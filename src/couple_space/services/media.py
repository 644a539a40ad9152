"""Helpers for images submitted as base64 data URLs."""

import base64
import binascii
import re
from dataclasses import dataclass

_DATA_URL_PATTERN = re.compile(
    r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)(?:;[\w-]+=[\w.-]+)*;base64,(?P<payload>.+)$",
    re.DOTALL,
)

_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
    "image/gif": ".gif",
}


class InvalidDataUrlError(ValueError):
    """Raised when a data URL is not a base64-encoded image."""


@dataclass(frozen=True)
class DecodedImage:
    """Raw image bytes with their MIME type."""

    mime_type: str
    content: bytes

    @property
    def extension(self) -> str:
        """Return the file extension matching the MIME type."""
        return _EXTENSIONS.get(self.mime_type, ".bin")


def to_data_url(image_bytes: bytes, mime_type: str | None = None) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = mime_type or detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def parse_data_url(data_url: str) -> DecodedImage:
    """Decode a ``data:<mime>;base64,<payload>`` URL into image bytes."""
    match = _DATA_URL_PATTERN.match(data_url.strip())
    if match is None:
        raise InvalidDataUrlError("Expected a base64 data URL")
    try:
        content = base64.b64decode(match.group("payload"), validate=True)
    except binascii.Error as exc:
        raise InvalidDataUrlError("Data URL payload is not valid base64") from exc
    if not content:
        raise InvalidDataUrlError("Data URL payload is empty")
    mime_type = match.group("mime").lower()
    if mime_type == "application/octet-stream":
        mime_type = detect_mime_type(content)
    if not mime_type.startswith("image/"):
        raise InvalidDataUrlError(f"Unsupported media type: {mime_type}")
    return DecodedImage(mime_type=mime_type, content=content)


def detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    if image_bytes[:6] in {b"GIF87a", b"GIF89a"}:
        return "image/gif"
    return "image/jpeg"
