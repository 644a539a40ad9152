"""Shared test fixtures."""

import base64
from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest

from couple_space.adapters.memory_couple_repository import InMemoryCoupleRepository
from couple_space.config import Settings
from couple_space.containers import AppContainer
from couple_space.domain.couples import CoupleData, Photo, Song
from couple_space.services.cache import InMemoryCache
from couple_space.services.captions import CaptionClient, CaptionService
from couple_space.services.couples import CoupleService, PhotoStorage
from couple_space.services.share import ShareService

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"fake-png-body"
PNG_DATA_URI = "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode("utf-8")


@dataclass
class FakeCaptionClient(CaptionClient):
    """Fake caption client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "captions": [
                "Sunset with my favourite person.",
                "  Golden hour, golden us.  ",
                "Where the waves meet our story.",
                "One more for the road.",
            ]
        }
    )
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def suggest(
        self, *, image_data_url: str, context: str, caption_count: int
    ) -> dict[str, object]:
        self.calls.append({"context": context, "caption_count": caption_count})
        if self.error is not None:
            raise self.error
        return self.payload


@dataclass
class FakePhotoStorage(PhotoStorage):
    """Photo storage that records uploads and hands back fake URLs."""

    uploads: list[tuple[str, str]] = field(default_factory=list)
    error: Exception | None = None

    def store(self, couple_id: str, photo_id: str, data_url: str) -> str:
        if self.error is not None:
            raise self.error
        self.uploads.append((couple_id, photo_id))
        return f"https://cdn.example.com/{couple_id}/{photo_id}.png"


def make_couple(couple_id: str = "our-story", **overrides: object) -> CoupleData:
    values: dict[str, object] = {
        "id": couple_id,
        "couple_name": "Sam & Riley",
        "start_date": datetime(2021, 2, 14, 18, 30, tzinfo=UTC),
        "photos": [
            Photo(
                id="p1",
                url="https://cdn.example.com/p1.png",
                caption="First trip",
                uploaded_at=datetime(2021, 3, 1, tzinfo=UTC),
            ),
            Photo(
                id="p2",
                url="https://cdn.example.com/p2.png",
                caption="",
                uploaded_at=datetime(2021, 4, 1, tzinfo=UTC),
                data_ai_hint="couple hiking",
            ),
        ],
        "playlist": [
            Song(
                id="s1",
                title="Our Song",
                artist="The Band",
                url="https://example.com/our-song.mp3",
            )
        ],
    }
    values.update(overrides)
    return CoupleData(**values)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        openai_api_key="openai-key",
        public_base_url="https://love.example.com/",
        environment="test",
        _env_file=None,
    )


@pytest.fixture
def couple_repository() -> InMemoryCoupleRepository:
    return InMemoryCoupleRepository({"our-story": make_couple()})


@pytest.fixture
def photo_storage() -> FakePhotoStorage:
    return FakePhotoStorage()


@pytest.fixture
def caption_client() -> FakeCaptionClient:
    return FakeCaptionClient()


@pytest.fixture
def couple_service(
    couple_repository: InMemoryCoupleRepository, photo_storage: FakePhotoStorage
) -> CoupleService:
    return CoupleService(
        repository=couple_repository,
        photo_storage=photo_storage,
        cache=InMemoryCache(),
    )


@pytest.fixture
def container(
    settings: Settings,
    couple_service: CoupleService,
    caption_client: FakeCaptionClient,
) -> AppContainer:
    caption_service = CaptionService(
        client=caption_client, caption_count=settings.caption_count
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        couple_service=couple_service,
        caption_service=caption_service,
        share_service=ShareService(base_url="https://love.example.com"),
        close_resources=close_resources,
    )
