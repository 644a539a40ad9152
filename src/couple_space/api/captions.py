"""Caption suggestion endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from couple_space.api.couple_models import (
    CaptionSuggestionRequest,
    CaptionSuggestionResponse,
)

if TYPE_CHECKING:
    from couple_space.containers import AppContainer

router = APIRouter(prefix="/captions", tags=["captions"])


@router.post("/suggest")
async def suggest_captions(
    payload: CaptionSuggestionRequest, request: Request
) -> CaptionSuggestionResponse:
    """Suggest captions for a photo; an empty list means none could be made."""
    container: AppContainer = request.app.state.container
    captions = await container.caption_service.suggest(
        payload.photo_data_uri, payload.context
    )
    return CaptionSuggestionResponse(captions=captions)
