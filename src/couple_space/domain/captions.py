"""Models for caption suggestion results."""

from pydantic import BaseModel


class CaptionSuggestions(BaseModel):
    """Structured output for caption suggestion."""

    captions: list[str]
