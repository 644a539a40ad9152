"""OpenAI Responses API client for caption suggestions."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from couple_space.services.captions import CaptionClient

CAPTION_FORMAT_NAME = "photo_captions"


def caption_schema(caption_count: int) -> dict[str, object]:
    """JSON schema for a list of at most ``caption_count`` captions."""
    return {
        "type": "object",
        "properties": {
            "captions": {
                "type": "array",
                "items": {"type": "string"},
                "maxItems": caption_count,
            }
        },
        "required": ["captions"],
        "additionalProperties": False,
    }


def build_caption_prompt(context: str, caption_count: int) -> str:
    """Compose the caption-writer instructions."""
    prompt = (
        "You are a creative caption writer for a relationship app. "
        "Given a photo and some context, write short, warm captions for it. "
        f"Return {caption_count} possible captions."
    )
    if context:
        prompt += f"\nContext: {context}"
    return prompt


@dataclass
class OpenAICaptionClient(CaptionClient):
    """Caption writer backed by a vision model on the Responses API."""

    client: AsyncOpenAI
    model: str
    reasoning_effort: str | None = None
    store: bool = False

    @classmethod
    def create(
        cls,
        api_key: str,
        model: str,
        reasoning_effort: str | None = None,
        store: bool = False,
    ) -> "OpenAICaptionClient":
        return cls(
            client=AsyncOpenAI(api_key=api_key),
            model=model,
            reasoning_effort=reasoning_effort,
            store=store,
        )

    async def suggest(
        self, *, image_data_url: str, context: str, caption_count: int
    ) -> dict[str, object]:
        """Ask the model for captions of one photo as structured JSON."""
        request_payload: dict[str, object] = {
            "model": self.model,
            "input": [
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "input_text",
                            "text": build_caption_prompt(context, caption_count),
                        },
                        {"type": "input_image", "image_url": image_data_url},
                    ],
                }
            ],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": CAPTION_FORMAT_NAME,
                    "strict": True,
                    "schema": caption_schema(caption_count),
                }
            },
            "store": self.store,
        }
        if self.reasoning_effort:
            request_payload["reasoning"] = {"effort": self.reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        if not response.output_text:
            raise RuntimeError("OpenAI returned an empty caption response")
        return json.loads(response.output_text)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
