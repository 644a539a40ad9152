"""Couple page and edit endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, Response, status

from couple_space.api.couple_models import (
    CoupleDetailsUpdate,
    CoupleOut,
    CouplePageOut,
    DurationOut,
    PhotoCaptionUpdate,
    PhotoCreate,
    PlaylistUpdate,
    ShareLinkOut,
)
from couple_space.services.counter import relationship_duration
from couple_space.services.share import ShareLinkTooLongError

if TYPE_CHECKING:
    from couple_space.containers import AppContainer
    from couple_space.domain.couples import CoupleData

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/couple", tags=["couples"])


@router.get("/{couple_id}")
async def couple_page(couple_id: str, request: Request) -> CouplePageOut:
    """Return the read-only page data; unknown ids are never created."""
    container: AppContainer = request.app.state.container
    couple = _require_couple(
        couple_id, container.couple_service.get_couple(couple_id)
    )
    return CouplePageOut(
        title=_page_title(couple),
        couple=CoupleOut.from_domain(couple),
        duration=DurationOut.from_domain(relationship_duration(couple.start_date)),
        share_url=container.share_service.page_url(
            couple_id, origin=str(request.base_url)
        ),
    )


@router.get("/{couple_id}/edit")
async def edit_page(couple_id: str, request: Request) -> CoupleOut:
    """Return the editable record, creating a default space if needed."""
    container: AppContainer = request.app.state.container
    return CoupleOut.from_domain(container.couple_service.ensure_couple(couple_id))


@router.put("/{couple_id}/details")
async def save_details(
    couple_id: str, details: CoupleDetailsUpdate, request: Request
) -> CoupleOut:
    """Save the couple name and relationship start date."""
    container: AppContainer = request.app.state.container
    couple = container.couple_service.save_details(couple_id, details.changes())
    return CoupleOut.from_domain(_require_couple(couple_id, couple))


@router.post("/{couple_id}/photos", status_code=status.HTTP_201_CREATED)
async def add_photo(couple_id: str, photo: PhotoCreate, request: Request) -> CoupleOut:
    """Add a photo to the gallery."""
    container: AppContainer = request.app.state.container
    try:
        couple = container.couple_service.add_photo(
            couple_id,
            photo.caption,
            url=photo.url,
            photo_data_uri=photo.photo_data_uri,
            data_ai_hint=photo.data_ai_hint,
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    except Exception as exc:
        logger.exception("Failed to store photo", extra={"couple_id": couple_id})
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=_format_photo_error(container, exc, "Couldn't save that photo."),
        ) from exc
    return CoupleOut.from_domain(_require_couple(couple_id, couple))


@router.patch("/{couple_id}/photos/{photo_id}")
async def update_photo_caption(
    couple_id: str, photo_id: str, update: PhotoCaptionUpdate, request: Request
) -> CoupleOut:
    """Change a photo caption."""
    container: AppContainer = request.app.state.container
    couple = container.couple_service.update_photo_caption(
        couple_id, photo_id, update.caption
    )
    return CoupleOut.from_domain(_require_couple(couple_id, couple))


@router.delete("/{couple_id}/photos/{photo_id}")
async def delete_photo(couple_id: str, photo_id: str, request: Request) -> CoupleOut:
    """Remove a photo from the gallery."""
    container: AppContainer = request.app.state.container
    couple = container.couple_service.delete_photo(couple_id, photo_id)
    return CoupleOut.from_domain(_require_couple(couple_id, couple))


@router.put("/{couple_id}/playlist")
async def replace_playlist(
    couple_id: str, playlist: PlaylistUpdate, request: Request
) -> CoupleOut:
    """Replace the playlist with the submitted songs."""
    container: AppContainer = request.app.state.container
    couple = container.couple_service.replace_playlist(
        couple_id, [song.to_draft() for song in playlist.songs]
    )
    return CoupleOut.from_domain(_require_couple(couple_id, couple))


@router.get("/{couple_id}/share")
async def share_link(couple_id: str, request: Request) -> ShareLinkOut:
    """Return the shareable page URL."""
    container: AppContainer = request.app.state.container
    _require_couple(couple_id, container.couple_service.get_couple(couple_id))
    return ShareLinkOut(
        url=container.share_service.page_url(couple_id, origin=str(request.base_url))
    )


@router.get("/{couple_id}/share/qr.svg")
async def share_qr(couple_id: str, request: Request) -> Response:
    """Return the page URL encoded as an SVG QR code."""
    container: AppContainer = request.app.state.container
    _require_couple(couple_id, container.couple_service.get_couple(couple_id))
    url = container.share_service.page_url(couple_id, origin=str(request.base_url))
    try:
        svg = container.share_service.qr_svg(url)
    except ShareLinkTooLongError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="This space's link is too long to fit in a QR code.",
        ) from exc
    return Response(content=svg, media_type="image/svg+xml")


def _require_couple(couple_id: str, couple: CoupleData | None) -> CoupleData:
    """Map a missing couple to a 404 the page can show."""
    if couple is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f'Couple space "{couple_id}" not found.',
        )
    return couple


def _page_title(couple: CoupleData) -> str:
    if couple.couple_name:
        return f"{couple.couple_name}'s Evermore Bond"
    return "Our Evermore Bond"


def _format_photo_error(
    container: AppContainer, exc: Exception, fallback: str
) -> str:
    """Return a user-facing photo error message with local debug info."""
    if container.settings.environment == "local":
        detail = f"{type(exc).__name__}: {exc}".strip()
        if detail:
            return f"{fallback} (debug: {detail})"
    return fallback
