"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from couple_space.adapters.inline_photo_storage import InlinePhotoStorage
from couple_space.adapters.memory_couple_repository import (
    InMemoryCoupleRepository,
    demo_couple,
)
from couple_space.adapters.openai_caption_client import OpenAICaptionClient
from couple_space.adapters.supabase_couple_repository import SupabaseCoupleRepository
from couple_space.adapters.supabase_photo_storage import SupabasePhotoStorage
from couple_space.config import Settings, normalize_base_url
from couple_space.services.cache import InMemoryCache
from couple_space.services.captions import CaptionService
from couple_space.services.couples import CoupleRepository, CoupleService, PhotoStorage
from couple_space.services.share import ShareService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    couple_service: CoupleService
    caption_service: CaptionService
    share_service: ShareService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    repository, photo_storage, close_store = _build_store(resolved_settings)
    cache = InMemoryCache()
    couple_service = CoupleService(
        repository=repository,
        photo_storage=photo_storage,
        cache=cache,
        cache_ttl_seconds=resolved_settings.page_cache_ttl_seconds,
    )
    caption_client = OpenAICaptionClient.create(
        resolved_settings.openai_api_key,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    caption_service = CaptionService(
        client=caption_client,
        caption_count=resolved_settings.caption_count,
    )
    share_service = ShareService(
        base_url=normalize_base_url(resolved_settings.public_base_url)
    )

    async def close_resources() -> None:
        await caption_client.close()
        cache.clear()
        close_store()

    return AppContainer(
        settings=resolved_settings,
        couple_service=couple_service,
        caption_service=caption_service,
        share_service=share_service,
        close_resources=close_resources,
    )


def _build_store(
    settings: Settings,
) -> tuple[CoupleRepository, PhotoStorage, Callable[[], None]]:
    """Pick the couple store and matching photo storage from settings."""
    if settings.couple_store == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError(
                "SUPABASE_URL and SUPABASE_SERVICE_KEY are required "
                "when COUPLE_STORE=supabase"
            )
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        repository = SupabaseCoupleRepository(
            client, table_name=settings.supabase_couples_table
        )
        storage = SupabasePhotoStorage(client, bucket=settings.supabase_photo_bucket)
        return repository, storage, lambda: None

    seed = [demo_couple()] if settings.seed_demo_space else []
    repository = InMemoryCoupleRepository({couple.id: couple for couple in seed})
    return repository, InlinePhotoStorage(), repository.close
