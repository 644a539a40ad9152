"""Caption suggestions for couple photos using LLMs."""

import logging
from dataclasses import dataclass
from typing import Protocol

from couple_space.domain.captions import CaptionSuggestions
from couple_space.services.media import parse_data_url

logger = logging.getLogger(__name__)


class CaptionClient(Protocol):
    """Interface for LLM caption generation."""

    async def suggest(
        self, *, image_data_url: str, context: str, caption_count: int
    ) -> dict[str, object]:
        """Return ``{"captions": [...]}`` for a photo and optional context."""


@dataclass
class CaptionService:
    """Validates caption output and degrades to no suggestions."""

    client: CaptionClient
    caption_count: int = 3

    async def suggest(self, photo_data_uri: str, context: str) -> list[str]:
        """Return up to ``caption_count`` captions, or none on any failure."""
        try:
            parse_data_url(photo_data_uri)
            raw = await self.client.suggest(
                image_data_url=photo_data_uri,
                context=context.strip(),
                caption_count=self.caption_count,
            )
            result = CaptionSuggestions.model_validate(raw)
        except Exception:
            logger.exception("Caption suggestion failed")
            return []
        captions = [caption.strip() for caption in result.captions]
        return [caption for caption in captions if caption][: self.caption_count]
