"""Shareable links and QR codes for couple pages."""

from dataclasses import dataclass
from io import BytesIO
from urllib.parse import quote

import qrcode
from qrcode.exceptions import DataOverflowError
from qrcode.image.svg import SvgPathImage


class ShareLinkTooLongError(ValueError):
    """Raised when a page URL does not fit in the largest QR code."""


@dataclass
class ShareService:
    """Builds the public page URL and encodes it as a QR image."""

    base_url: str | None = None
    box_size: int = 10
    border: int = 4

    def page_url(self, couple_id: str, origin: str | None = None) -> str:
        """Return the read-only page URL, preferring the configured base."""
        base = self.base_url or (origin or "").rstrip("/")
        if not base:
            raise ValueError("No base URL available to build a share link")
        return f"{base}/couple/{quote(couple_id, safe='')}"

    def qr_svg(self, url: str) -> bytes:
        """Render a URL as an SVG QR code with high error correction."""
        qr = qrcode.QRCode(
            error_correction=qrcode.constants.ERROR_CORRECT_H,
            box_size=self.box_size,
            border=self.border,
            image_factory=SvgPathImage,
        )
        qr.add_data(url)
        try:
            qr.make(fit=True)
        except DataOverflowError as exc:
            raise ShareLinkTooLongError(
                f"URL of {len(url)} characters does not fit in a QR code"
            ) from exc
        buffer = BytesIO()
        qr.make_image().save(buffer)
        return buffer.getvalue()
