"""Tests for caption suggestion service."""

import asyncio

import pytest

from couple_space.services.captions import CaptionService
from tests.conftest import PNG_DATA_URI, FakeCaptionClient


def _service(client: FakeCaptionClient) -> CaptionService:
    return CaptionService(client=client)


def test_suggest_returns_three_stripped_captions() -> None:
    service = _service(FakeCaptionClient())

    captions = asyncio.run(service.suggest(PNG_DATA_URI, "beach trip"))

    assert captions == [
        "Sunset with my favourite person.",
        "Golden hour, golden us.",
        "Where the waves meet our story.",
    ]


def test_suggest_passes_trimmed_context_and_count() -> None:
    client = FakeCaptionClient()

    asyncio.run(_service(client).suggest(PNG_DATA_URI, "  our anniversary  "))

    assert client.calls == [{"context": "our anniversary", "caption_count": 3}]


def test_suggest_skips_blank_captions() -> None:
    client = FakeCaptionClient(payload={"captions": ["", "   ", "Us."]})

    captions = asyncio.run(_service(client).suggest(PNG_DATA_URI, ""))

    assert captions == ["Us."]


@pytest.mark.parametrize(
    "client",
    [
        FakeCaptionClient(error=RuntimeError("upstream unavailable")),
        FakeCaptionClient(error=ConnectionError("unreachable")),
        FakeCaptionClient(payload={"unexpected": True}),
        FakeCaptionClient(payload={"captions": "not-a-list"}),
    ],
)
def test_suggest_returns_empty_list_on_failure(client: FakeCaptionClient) -> None:
    captions = asyncio.run(_service(client).suggest(PNG_DATA_URI, "context"))

    assert captions == []


def test_suggest_with_malformed_data_url_skips_the_model() -> None:
    client = FakeCaptionClient()

    captions = asyncio.run(_service(client).suggest("not-a-data-url", "context"))

    assert captions == []
    assert client.calls == []
